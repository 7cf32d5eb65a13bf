from fastapi import APIRouter, Depends, HTTPException, Query, Response

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.core.errors import DuplicateError, NotFoundError
from partsflow.core.observability import log_event
from partsflow.schemas.part import PartCreate, PartOut, PartUpdate, PartWithDetailsOut
from partsflow.services.part_filter import filter_parts
from partsflow.storage.base import Storage

router = APIRouter(prefix="/parts", tags=["parts"])


def _get_part_or_404(storage: Storage, part_id: str) -> PartWithDetailsOut:
    part = storage.get_part(part_id)
    if not part:
        raise HTTPException(status_code=404, detail="Part not found")
    return part


@router.get(
    "",
    response_model=list[PartWithDetailsOut],
    summary="List parts",
    responses=error_responses(400, 500),
)
def list_parts(
    search: str | None = Query(
        default=None,
        description="Case-insensitive match on name, part number or description",
    ),
    table_filter: str | None = Query(
        default=None,
        alias="filter",
        description="Table filter: also matches id, category, supplier, location and stock status",
    ),
    storage: Storage = Depends(get_storage),
):
    parts = storage.search_parts(search) if search else storage.get_parts()
    return filter_parts(parts, table_filter)


@router.get(
    "/low-stock",
    response_model=list[PartWithDetailsOut],
    summary="List parts at or below their minimum stock",
    responses=error_responses(500),
)
def list_low_stock_parts(storage: Storage = Depends(get_storage)):
    return storage.get_low_stock_parts()


@router.get(
    "/part-number/{part_number}",
    response_model=PartWithDetailsOut,
    summary="Get part by part number",
    responses=error_responses(404, 500),
)
def get_part_by_part_number(part_number: str, storage: Storage = Depends(get_storage)):
    part = storage.get_part_by_part_number(part_number)
    if not part:
        raise HTTPException(status_code=404, detail="Part not found")
    return part


@router.get(
    "/{part_id}",
    response_model=PartWithDetailsOut,
    summary="Get part",
    responses=error_responses(404, 500),
)
def get_part(part_id: str, storage: Storage = Depends(get_storage)):
    return _get_part_or_404(storage, part_id)


@router.post(
    "",
    response_model=PartOut,
    status_code=201,
    summary="Create part",
    responses=error_responses(400, 500),
)
def create_part(payload: PartCreate, storage: Storage = Depends(get_storage)):
    try:
        part = storage.create_part(payload)
    except DuplicateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    log_event(
        "ledger",
        action="part.create",
        entity="part",
        entity_id=part.id,
        part_number=part.part_number,
        quantity=part.quantity,
    )
    return part


@router.put(
    "/{part_id}",
    response_model=PartOut,
    summary="Update part",
    responses=error_responses(400, 404, 500),
)
def update_part(part_id: str, payload: PartUpdate, storage: Storage = Depends(get_storage)):
    try:
        part = storage.update_part(part_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Part not found") from exc
    except DuplicateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    log_event(
        "ledger",
        action="part.update",
        entity="part",
        entity_id=part.id,
        fields=sorted(payload.model_dump(exclude_unset=True, by_alias=True)),
    )
    return part


@router.delete(
    "/{part_id}",
    status_code=204,
    response_class=Response,
    summary="Delete part",
    responses=error_responses(404, 500),
)
def delete_part(part_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_part(part_id):
        raise HTTPException(status_code=404, detail="Part not found")
    log_event("ledger", action="part.delete", entity="part", entity_id=part_id)
    return Response(status_code=204)
