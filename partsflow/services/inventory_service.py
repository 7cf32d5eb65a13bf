from partsflow.schemas.inventory import MovementType
from partsflow.schemas.part import StockStatus


def compute_stock_status(quantity: int, minimum_stock: int) -> StockStatus:
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= minimum_stock:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def is_low_stock(quantity: int, minimum_stock: int) -> bool:
    """Out-of-stock parts count as low stock too."""
    return quantity <= minimum_stock


def movement_delta(movement_type: MovementType | str, quantity: int) -> int:
    """Signed change for a movement; anything that is not in/out changes nothing."""
    try:
        kind = MovementType(movement_type)
    except ValueError:
        return 0
    return quantity if kind is MovementType.IN else -quantity


def apply_movement(current_quantity: int, movement_type: MovementType | str, quantity: int) -> int:
    # On-hand stock never goes negative, even for an oversized "out".
    return max(0, current_quantity + movement_delta(movement_type, quantity))
