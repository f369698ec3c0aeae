"""Client for the pharmacy POS shipment import API."""

from .client import PosApiClient, check_api_address
from .models import ImportSummary, ShippingOrderSummary, UploadOutcome

__all__ = [
    "ImportSummary",
    "PosApiClient",
    "ShippingOrderSummary",
    "UploadOutcome",
    "check_api_address",
]
