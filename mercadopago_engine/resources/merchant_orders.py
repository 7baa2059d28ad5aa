"""Merchant orders."""

from typing import Any

from ..core.outcomes import Outcome
from .base import Resource


class MerchantOrders(Resource):
    """[docs](https://www.mercadopago.com.br/developers/pt/reference/merchant_orders/_merchant_orders/post)"""

    @property
    def base_path(self) -> str:
        return "/merchant_orders"

    def search(self, filters: dict[str, Any] | None = None, access_token: str | None = None) -> Outcome:
        return self._search(filters, access_token)

    def show(self, order_id: str | int, access_token: str | None = None) -> Outcome:
        return self._show(order_id, access_token)

    def create(
        self,
        data: dict[str, Any],
        access_token: str | None = None,
        idempotency_key: str | None = None,
    ) -> Outcome:
        return self._create(data, access_token, idempotency_key)

    def update(self, order_id: str | int, data: dict[str, Any], access_token: str | None = None) -> Outcome:
        return self._update(order_id, data, access_token)
