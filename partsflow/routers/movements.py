from fastapi import APIRouter, Depends, HTTPException

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.schemas.inventory import MovementCreate, MovementOut, MovementWithPartOut
from partsflow.storage.base import Storage

router = APIRouter(prefix="/movements", tags=["movements"])


@router.get(
    "",
    response_model=list[MovementWithPartOut],
    summary="List stock movements",
    description="Most recent first. Movements whose part has been deleted are left out.",
    responses=error_responses(500),
)
def list_movements(storage: Storage = Depends(get_storage)):
    return storage.get_movements()


@router.get(
    "/part/{part_id}",
    response_model=list[MovementWithPartOut],
    summary="List stock movements for a part",
    responses=error_responses(500),
)
def list_part_movements(part_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_movements_by_part(part_id)


@router.get(
    "/{movement_id}",
    response_model=MovementWithPartOut,
    summary="Get stock movement",
    responses=error_responses(404, 500),
)
def get_movement(movement_id: str, storage: Storage = Depends(get_storage)):
    movement = storage.get_movement(movement_id)
    if not movement:
        raise HTTPException(status_code=404, detail="Movement not found")
    return movement


@router.post(
    "",
    response_model=MovementOut,
    status_code=201,
    summary="Record a stock movement",
    description=(
        "Records the movement and adjusts the part's quantity (never below zero). "
        "Returns the movement; fetch the part again to see its new quantity."
    ),
    responses=error_responses(400, 500),
)
def create_movement(payload: MovementCreate, storage: Storage = Depends(get_storage)):
    return storage.create_movement(payload)
