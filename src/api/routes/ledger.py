"""Ledger API Routes

FastAPI routes for ledger records of one view, addressed by module and tab.
Views registered as mother views read and write across their sibling
partitions.
"""

from decimal import Decimal
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.schemas.ledger_request import CreateRecordRequestSchema, UpdateRecordRequestSchema
from src.app.repositories.record_partition_repository import RecordPartitionRepository
from src.app.services.clock import Clock
from src.app.services.notification_service import NotificationService
from src.app.services.record_collection import RecordCollection, open_record_collection
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.ledger.create_record import CreateRecord
from src.app.use_cases.ledger.update_record import UpdateRecord
from src.app.use_cases.ledger.delete_record import DeleteRecord
from src.app.use_cases.ledger.query_records import QueryRecords
from src.app.use_cases.ledger.summarize_records import SummarizeRecords
from src.app.use_cases.ledger.detect_payment_alerts import DetectPaymentAlerts
from src.app.use_cases.ledger.dtos import (
    CreateRecordCommandDTO,
    UpdateRecordCommandDTO,
    DeleteRecordCommandDTO,
    DeleteRecordResponseDTO,
    ListRecordsResponseDTO,
    LedgerSummaryDTO,
    PaymentAlertsResponseDTO,
)
from src.depends import (
    get_alert_threshold,
    get_clock,
    get_currency_table,
    get_derived_field_engine,
    get_federation_registry,
    get_notification_service,
    get_partition_repository,
    get_unit_of_work,
)
from src.domain.currency import CurrencyTable
from src.domain.derived_fields import DerivedFieldEngine
from src.domain.ledger_record import LedgerRecord
from src.domain.partition import FederationRegistry, PartitionKey
from src.domain.record_query import RecordQuery
from src.libs.result import Error

router = APIRouter(prefix="/ledger/{module_id}/{tab_id}", tags=["Ledger"])

ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "RECORD_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


def raise_client_error(error: Error):
    raise ClientError(error, status_code=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


async def get_record_collection(
    module_id: str,
    tab_id: str,
    partition_repo: RecordPartitionRepository = Depends(get_partition_repository),
    registry: FederationRegistry = Depends(get_federation_registry),
    engine: DerivedFieldEngine = Depends(get_derived_field_engine),
    clock: Clock = Depends(get_clock),
) -> RecordCollection:
    key = PartitionKey(module_id=module_id, tab_id=tab_id)
    return open_record_collection(partition_repo, key, registry, engine, clock)


@router.post(
    "/records",
    response_model=LedgerRecord,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {
            "description": "Required fields missing or not numeric",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Missing or invalid fields: base_amount"
                        }
                    }
                }
            }
        }
    }
)
async def create_record(
    request: CreateRecordRequestSchema,
    uow: UnitOfWork = Depends(get_unit_of_work),
    collection: RecordCollection = Depends(get_record_collection),
    engine: DerivedFieldEngine = Depends(get_derived_field_engine),
    clock: Clock = Depends(get_clock),
):
    """
    Create a ledger record in this view.

    Derived fields (commission, finalAmount, outstandingAmount,
    convertedAmount, status) are computed by the service; values sent for
    them are ignored. In a mother view the record is stored in the partition
    named by sourceModule/sourceTab, or in the mother partition itself.

    **Returns:**
    - 201: Record created
    - 422: Required field missing or a numeric field is not a number
    """
    command = CreateRecordCommandDTO(fields=request.fields)

    use_case = CreateRecord(uow, collection, engine, clock)
    result = await use_case.execute(command)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.patch(
    "/records/{record_id}",
    response_model=LedgerRecord,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Record not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "RECORD_NOT_FOUND",
                            "message": "Record 6f1c7d7e not found"
                        }
                    }
                }
            }
        }
    }
)
async def update_record(
    record_id: str,
    request: UpdateRecordRequestSchema,
    uow: UnitOfWork = Depends(get_unit_of_work),
    collection: RecordCollection = Depends(get_record_collection),
    engine: DerivedFieldEngine = Depends(get_derived_field_engine),
    clock: Clock = Depends(get_clock),
):
    """
    Edit base fields of a record; every derived field is recomputed.

    **Returns:**
    - 200: Updated record
    - 404: No record with this id in the view
    - 422: The edit leaves a required field missing or non-numeric
    """
    command = UpdateRecordCommandDTO(record_id=record_id, changes=request.changes)

    use_case = UpdateRecord(uow, collection, engine, clock)
    result = await use_case.execute(command)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.delete(
    "/records/{record_id}",
    response_model=DeleteRecordResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def delete_record(
    record_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    collection: RecordCollection = Depends(get_record_collection),
):
    """
    Hard-delete a record from the partition that owns it.

    Deleting an unknown id changes nothing and reports deleted=false.
    """
    use_case = DeleteRecord(uow, collection)
    result = await use_case.execute(DeleteRecordCommandDTO(record_id=record_id))

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/records",
    response_model=ListRecordsResponseDTO,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def list_records(
    search: str = Query(default="", description="Case-insensitive text search"),
    date_from: Optional[str] = Query(default=None, description="Inclusive, YYYY-MM-DD"),
    date_to: Optional[str] = Query(default=None, description="Inclusive, YYYY-MM-DD"),
    currency: Optional[str] = Query(default=None, description="Exact currency code or 'All'"),
    status_filter: Optional[str] = Query(default=None, alias="status", description="Paid, Partial, Pending, Overdue or 'All'"),
    company: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    location: Optional[str] = Query(default=None),
    deal: Optional[str] = Query(default=None),
    payment_method: Optional[str] = Query(default=None),
    collection: RecordCollection = Depends(get_record_collection),
):
    """
    List the records visible from this view, newest first.

    Search, filters and date range are combined with AND.
    """
    filters = {
        "currency": currency,
        "status": status_filter,
        "company": company,
        "category": category,
        "location": location,
        "deal": deal,
        "payment_method": payment_method,
    }
    query = RecordQuery(
        search=search,
        filters={field: value for field, value in filters.items() if value is not None},
        date_from=date_from,
        date_to=date_to,
    )

    result = await QueryRecords(collection).execute(query)

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/summary",
    response_model=LedgerSummaryDTO,
    status_code=status.HTTP_200_OK,
)
async def get_summary(
    collection: RecordCollection = Depends(get_record_collection),
    currency_table: CurrencyTable = Depends(get_currency_table),
    clock: Clock = Depends(get_clock),
):
    """Totals and counts over the records visible from this view."""
    result = await SummarizeRecords(collection, currency_table, clock).execute()

    if result.is_err():
        raise_client_error(result.error)

    return result.value


@router.get(
    "/alerts",
    response_model=PaymentAlertsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_payment_alerts(
    notify: bool = Query(default=False, description="Also deliver alerts through the notification service"),
    collection: RecordCollection = Depends(get_record_collection),
    currency_table: CurrencyTable = Depends(get_currency_table),
    clock: Clock = Depends(get_clock),
    notification_service: NotificationService = Depends(get_notification_service),
    threshold: Decimal = Depends(get_alert_threshold),
):
    """
    Overdue, due-today, upcoming and high-outstanding records in this view.

    Amounts are expressed in the base currency.
    """
    use_case = DetectPaymentAlerts(
        collection,
        currency_table,
        clock,
        notification_service=notification_service if notify else None,
        high_outstanding_threshold=threshold,
        upcoming_days=ApplicationConfig.ALERT_UPCOMING_DAYS,
    )
    result = await use_case.execute()

    if result.is_err():
        raise_client_error(result.error)

    return result.value
