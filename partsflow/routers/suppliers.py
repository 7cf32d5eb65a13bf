from fastapi import APIRouter, Depends, HTTPException, Response

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.core.errors import NotFoundError
from partsflow.core.observability import log_event
from partsflow.schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate
from partsflow.storage.base import Storage

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get(
    "",
    response_model=list[SupplierOut],
    summary="List suppliers",
    responses=error_responses(500),
)
def list_suppliers(storage: Storage = Depends(get_storage)):
    return storage.get_suppliers()


@router.get(
    "/{supplier_id}",
    response_model=SupplierOut,
    summary="Get supplier",
    responses=error_responses(404, 500),
)
def get_supplier(supplier_id: str, storage: Storage = Depends(get_storage)):
    supplier = storage.get_supplier(supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.post(
    "",
    response_model=SupplierOut,
    status_code=201,
    summary="Create supplier",
    responses=error_responses(400, 500),
)
def create_supplier(payload: SupplierCreate, storage: Storage = Depends(get_storage)):
    supplier = storage.create_supplier(payload)
    log_event("ledger", action="supplier.create", entity="supplier", entity_id=supplier.id)
    return supplier


@router.put(
    "/{supplier_id}",
    response_model=SupplierOut,
    summary="Update supplier",
    responses=error_responses(400, 404, 500),
)
def update_supplier(
    supplier_id: str,
    payload: SupplierUpdate,
    storage: Storage = Depends(get_storage),
):
    try:
        supplier = storage.update_supplier(supplier_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Supplier not found") from exc
    log_event("ledger", action="supplier.update", entity="supplier", entity_id=supplier.id)
    return supplier


@router.delete(
    "/{supplier_id}",
    status_code=204,
    response_class=Response,
    summary="Delete supplier",
    description="Parts that reference the supplier keep the id; it resolves to no supplier.",
    responses=error_responses(404, 500),
)
def delete_supplier(supplier_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_supplier(supplier_id):
        raise HTTPException(status_code=404, detail="Supplier not found")
    log_event("ledger", action="supplier.delete", entity="supplier", entity_id=supplier_id)
    return Response(status_code=204)
