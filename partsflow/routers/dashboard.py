from fastapi import APIRouter, Depends

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.schemas.inventory import InventoryStatsOut
from partsflow.storage.base import Storage

router = APIRouter(tags=["dashboard"])


@router.get(
    "/stats",
    response_model=InventoryStatsOut,
    summary="Get inventory KPIs",
    responses={
        200: {
            "description": "Inventory summary",
            "content": {
                "application/json": {
                    "example": {
                        "totalParts": 4,
                        "lowStockCount": 3,
                        "totalValue": "3215.75",
                        "activeSuppliers": 5,
                    }
                }
            },
        },
        **error_responses(500),
    },
)
def inventory_stats(storage: Storage = Depends(get_storage)):
    return storage.get_inventory_stats()
