from fastapi import APIRouter, Depends, HTTPException, Response

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.core.errors import DuplicateError, NotFoundError
from partsflow.core.observability import log_event
from partsflow.schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from partsflow.storage.base import Storage

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=list[CategoryOut],
    summary="List categories",
    responses=error_responses(500),
)
def list_categories(storage: Storage = Depends(get_storage)):
    return storage.get_categories()


@router.get(
    "/{category_id}",
    response_model=CategoryOut,
    summary="Get category",
    responses=error_responses(404, 500),
)
def get_category(category_id: str, storage: Storage = Depends(get_storage)):
    category = storage.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post(
    "",
    response_model=CategoryOut,
    status_code=201,
    summary="Create category",
    responses=error_responses(400, 500),
)
def create_category(payload: CategoryCreate, storage: Storage = Depends(get_storage)):
    try:
        category = storage.create_category(payload)
    except DuplicateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    log_event("ledger", action="category.create", entity="category", entity_id=category.id)
    return category


@router.put(
    "/{category_id}",
    response_model=CategoryOut,
    summary="Update category",
    responses=error_responses(400, 404, 500),
)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    storage: Storage = Depends(get_storage),
):
    try:
        category = storage.update_category(category_id, payload)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail="Category not found") from exc
    except DuplicateError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    log_event("ledger", action="category.update", entity="category", entity_id=category.id)
    return category


@router.delete(
    "/{category_id}",
    status_code=204,
    response_class=Response,
    summary="Delete category",
    description="Parts that reference the category keep the id; it resolves to no category.",
    responses=error_responses(404, 500),
)
def delete_category(category_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    log_event("ledger", action="category.delete", entity="category", entity_id=category_id)
    return Response(status_code=204)
