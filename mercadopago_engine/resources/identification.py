"""Identification document types."""

from ..core.outcomes import Outcome
from .base import Resource


class IdentificationTypes(Resource):
    """[docs](https://www.mercadopago.com.br/developers/pt/reference/identification_types/_identification_types/get)"""

    @property
    def base_path(self) -> str:
        return "/v1/identification_types"

    def search(self, access_token: str | None = None) -> Outcome:
        """
        List document types accepted in the account's country.

        Example:
            >>> client.identification_types.search()
            Success(body=[{'id': 'CPF', 'name': 'CPF', 'type': 'number', ...}])
        """
        return self.core.get(self._path(), access_token)
