"""Resource wrappers for the Mercado Pago API."""

from .base import Resource
from .preferences import Preferences
from .merchant_orders import MerchantOrders
from .point_of_sale import PointOfSale
from .payments import Payments
from .identification import IdentificationTypes

__all__ = [
    "Resource",
    "Preferences",
    "MerchantOrders",
    "PointOfSale",
    "Payments",
    "IdentificationTypes",
]
