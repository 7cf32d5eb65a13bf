from fastapi import APIRouter, Depends

from partsflow.core.api_docs import error_responses
from partsflow.core.deps import get_storage
from partsflow.core.observability import log_event
from partsflow.schemas.report import ReportCreate, ReportOut
from partsflow.storage.base import Storage

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "",
    response_model=list[ReportOut],
    summary="List generated reports, newest first",
    responses=error_responses(500),
)
def list_reports(storage: Storage = Depends(get_storage)):
    return storage.get_reports()


@router.post(
    "",
    response_model=ReportOut,
    status_code=201,
    summary="Record a generated report",
    responses=error_responses(400, 500),
)
def create_report(payload: ReportCreate, storage: Storage = Depends(get_storage)):
    report = storage.create_report(payload)
    log_event("ledger", action="report.create", entity="report", entity_id=report.id, type=report.type.value)
    return report
