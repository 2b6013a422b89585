"""Row normalizers for the ads and orders sources."""

from .base import BaseTransform
from .ads import AdsTransform, create_ads_transform, infer_prospecting
from .orders import OrdersTransform, create_orders_transform

__all__ = [
    "BaseTransform",
    "AdsTransform",
    "OrdersTransform",
    "create_ads_transform",
    "create_orders_transform",
    "infer_prospecting",
]
