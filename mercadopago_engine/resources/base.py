"""Base class for resource wrappers."""

import urllib.parse
from abc import ABC, abstractmethod
from typing import Any

from ..client.request_core import RequestCore
from ..core.outcomes import Outcome


class Resource(ABC):
    """
    Abstract base class for API resource wrappers.

    Each resource maps a few HTTP verbs onto fixed paths under its
    ``base_path`` and forwards them to the request core. Every method takes
    an optional ``access_token`` as its last argument; when given, the call
    is made on behalf of the user who owns that token (OAuth flow), otherwise
    the app's own token is used.
    """

    def __init__(self, core: RequestCore):
        """
        Initialize the resource with a request core.

        Args:
            core: Request core used for all calls
        """
        self.core = core

    @property
    @abstractmethod
    def base_path(self) -> str:
        """
        Return the API path prefix for this resource.

        Returns:
            Path string (e.g., '/v1/payments')
        """
        pass

    def _path(self, *parts: Any, filters: dict[str, Any] | None = None) -> str:
        """
        Build a path below base_path.

        Args:
            *parts: Extra path segments (IDs are URL-quoted)
            filters: Optional query parameters

        Returns:
            API path with query string when filters are given
        """
        path = self.base_path
        for part in parts:
            path = f"{path}/{urllib.parse.quote(str(part), safe='')}"
        if filters:
            path = f"{path}?{urllib.parse.urlencode(filters, doseq=True)}"
        return path

    def _search(self, filters: dict[str, Any] | None, access_token: str | None) -> Outcome:
        return self.core.get(self._path("search", filters=filters), access_token)

    def _show(self, resource_id: Any, access_token: str | None) -> Outcome:
        return self.core.get(self._path(resource_id), access_token)

    def _create(
        self,
        data: Any,
        access_token: str | None,
        idempotency_key: str | None,
    ) -> Outcome:
        return self.core.post(self._path(), data, access_token, idempotency_key)

    def _update(self, resource_id: Any, data: Any, access_token: str | None) -> Outcome:
        return self.core.put(self._path(resource_id), data, access_token)
