"""Point of sale (POS) boxes."""

from typing import Any

from ..core.outcomes import Outcome
from .base import Resource


class PointOfSale(Resource):
    """
    Point of sale boxes used for QR payments.

    [docs](https://www.mercadopago.com.br/developers/pt/reference/pos/_pos/post)
    """

    @property
    def base_path(self) -> str:
        return "/pos"

    def search(self, filters: dict[str, Any] | None = None, access_token: str | None = None) -> Outcome:
        """List boxes. Unlike other resources the listing lives at the base path."""
        return self.core.get(self._path(filters=filters), access_token)

    def show(self, box_id: str | int, access_token: str | None = None) -> Outcome:
        return self._show(box_id, access_token)

    def create(
        self,
        data: dict[str, Any],
        access_token: str | None = None,
        idempotency_key: str | None = None,
    ) -> Outcome:
        """
        Create a box.

        Example:
            >>> data = {
            ...     "name": "First POS",
            ...     "fixed_amount": False,
            ...     "store_id": 1234567,
            ...     "external_store_id": "SUC001",
            ...     "external_id": "SUC001POS001",
            ...     "category": 621102,
            ... }
            >>> client.point_of_sale.create(data)
        """
        return self._create(data, access_token, idempotency_key)

    def update(self, box_id: str | int, data: dict[str, Any], access_token: str | None = None) -> Outcome:
        """Update a POS. Sent as PUT as documented; older client libraries POST here."""
        return self._update(box_id, data, access_token)

    def delete(self, box_id: str | int, access_token: str | None = None) -> Outcome:
        return self.core.delete(self._path(box_id), access_token)
