"""Payments and payment methods."""

from typing import Any

from ..core.outcomes import Outcome
from .base import Resource


class Payments(Resource):
    """
    Payments API.

    [docs](https://www.mercadopago.com.br/developers/pt/reference/payments/_payments/post)
    """

    @property
    def base_path(self) -> str:
        return "/v1/payments"

    def methods(self, access_token: str | None = None) -> Outcome:
        """List the payment methods available to the account."""
        return self.core.get("/v1/payment_methods", access_token)

    def search(self, filters: dict[str, Any] | None = None, access_token: str | None = None) -> Outcome:
        """
        Search payments.

        Example:
            >>> client.payments.search({"sort": "date_created", "criteria": "desc"})
        """
        return self._search(filters, access_token)

    def show(self, payment_id: str | int, access_token: str | None = None) -> Outcome:
        return self._show(payment_id, access_token)

    def create(
        self,
        data: dict[str, Any],
        access_token: str | None = None,
        idempotency_key: str | None = None,
    ) -> Outcome:
        """
        Create a payment.

        Pass the same ``idempotency_key`` when retrying so that Mercado Pago
        does not charge twice.

        Args:
            data: Payment payload
            access_token: Optional OAuth token of the seller
            idempotency_key: Optional key sent as X-Idempotency-Key
        """
        return self._create(data, access_token, idempotency_key)

    def update(self, payment_id: str | int, data: dict[str, Any], access_token: str | None = None) -> Outcome:
        """Update a payment, e.g. ``{"status": "cancelled"}``."""
        return self._update(payment_id, data, access_token)
