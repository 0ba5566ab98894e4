from .mutation import CartMutationController
from .projector import ProjectionResult, cart_item_count, cart_total, is_item_in_cart, project

__all__ = [
    "CartMutationController",
    "ProjectionResult",
    "cart_item_count",
    "cart_total",
    "is_item_in_cart",
    "project",
]
