"""Checkout preferences."""

from typing import Any

from ..core.outcomes import Outcome
from .base import Resource


class Preferences(Resource):
    """
    Checkout Pro preferences.

    [docs](https://www.mercadopago.com.br/developers/pt/reference/preferences/_checkout_preferences/post)
    """

    @property
    def base_path(self) -> str:
        return "/checkout/preferences"

    def search(self, filters: dict[str, Any] | None = None, access_token: str | None = None) -> Outcome:
        """
        Search preferences.

        Example:
            >>> client.preferences.search({"external_reference": "order-1"})
            Success(body={'elements': [...], 'next_offset': 0, 'total': 1})
        """
        return self._search(filters, access_token)

    def show(self, preference_id: str, access_token: str | None = None) -> Outcome:
        """Get a preference by ID."""
        return self._show(preference_id, access_token)

    def create(
        self,
        data: dict[str, Any],
        access_token: str | None = None,
        idempotency_key: str | None = None,
    ) -> Outcome:
        """
        Create a preference.

        Example:
            >>> data = {
            ...     "items": [{"title": "Ticket", "quantity": 1, "unit_price": 75.76}],
            ...     "payer": {"email": "buyer@example.com"},
            ... }
            >>> client.preferences.create(data)
        """
        return self._create(data, access_token, idempotency_key)

    def update(self, preference_id: str, data: dict[str, Any], access_token: str | None = None) -> Outcome:
        """
        Update a preference.

        Sent as PUT, the verb the preferences API documents. Older Mercado
        Pago client libraries POST here instead.
        """
        return self._update(preference_id, data, access_token)
