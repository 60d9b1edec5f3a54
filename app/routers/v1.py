from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Header, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from application.service.generate_monthly_payments import GenerateMonthlyPaymentsService
from application.service.update_monthly_payment import UpdateMonthlyPaymentService, MarkPaymentPaidService
from application.service.delete_monthly_payment import DeleteMonthlyPaymentService
from application.service.list_contract_payments import ListContractPaymentsService
from application.service.receivables_report import ReceivablesReportService
from application.service.notification_settings import NotificationSettingsService
from app.dependencies import get_toast_feed, require_operator
from app.schemas.payment_schema import (
    ContractPaymentsResponse,
    GenerateMonthlyPaymentsRequest,
    GenerateMonthlyPaymentsResponse,
    MonthlyPaymentResponse,
    MonthlyPaymentUpdate,
    PaymentSummaryResponse,
    ReceivableResponse,
    ReceivablesReportResponse,
)
from app.schemas.notification_schema import (
    NotificationSettingsResponse,
    NotificationSettingsUpdate,
    ToastListResponse,
    ToastResponse,
)
from domain.entities import Profile
from domain.exceptions import NotFoundError, StorageError, ValidationError
from infrastructure.db.database import get_db_session
from infrastructure.db.repositories import (
    ContractRepoSqlalchemy,
    MonthlyPaymentRepoSqlalchemy,
    SettingsRepoSqlalchemy,
)
from infrastructure.logging.logging_adapter import LoggingAdapter
from infrastructure.metrics.metrics_adapter import MetricsAdapter
from infrastructure.notifications import InMemoryToastFeed
import uuid

router = APIRouter(prefix="/v1")


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "not_found", "message": str(e)},
    )


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"error": "validation_error", "message": str(e)},
    )


def _storage(e: StorageError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "storage_error", "message": str(e)},
    )


def _update_service(db: AsyncSession) -> UpdateMonthlyPaymentService:
    return UpdateMonthlyPaymentService(
        payment_repo=MonthlyPaymentRepoSqlalchemy(db),
        contract_repo=ContractRepoSqlalchemy(db),
        metrics_port=MetricsAdapter(),
        logging_port=LoggingAdapter(),
    )


@router.post("/generate-monthly-payments")
async def generate_monthly_payments(
    payload: GenerateMonthlyPaymentsRequest,
    x_request_id: Optional[str] = Header(None, alias="X-Request-ID"),
    profile: Profile = Depends(require_operator),
    db: AsyncSession = Depends(get_db_session),
):
    """
    Generate the monthly payment schedule of a contract.

    One pending installment per calendar month between `dataInicio` and
    `dataFim` (inclusive). Rejects contracts that already have a schedule
    unless `replaceExisting` is true.

    Returns `{"success": true}` or HTTP 500 with `{"error": "..."}`.
    """
    request_id = x_request_id or str(uuid.uuid4())
    srv = GenerateMonthlyPaymentsService(
        payment_repo=MonthlyPaymentRepoSqlalchemy(db),
        contract_repo=ContractRepoSqlalchemy(db),
        metrics_port=MetricsAdapter(),
        logging_port=LoggingAdapter(user_id=profile.id),
    )
    try:
        payments = await srv.execute(
            contract_id=payload.contract_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            total_value=payload.total_value,
            replace_existing=payload.replace_existing,
            request_id=request_id,
        )
    except (ValidationError, StorageError) as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)},
        )
    return GenerateMonthlyPaymentsResponse(success=True, months=len(payments))


@router.get("/contracts/{contract_id}/monthly-payments")
async def contract_monthly_payments(contract_id: str, db: AsyncSession = Depends(get_db_session)) -> ContractPaymentsResponse:
    """
    Get a contract's monthly payments ordered by due date.

    `status` is computed on read: unpaid rows past their due date are reported as `overdue`.
    """
    srv = ListContractPaymentsService(ContractRepoSqlalchemy(db), MonthlyPaymentRepoSqlalchemy(db))
    try:
        result = await srv.execute(contract_id)
    except NotFoundError as e:
        raise _not_found(e)
    except StorageError as e:
        raise _storage(e)

    return ContractPaymentsResponse(
        contract_id=result.contract.id,
        contract_number=result.contract.number,
        contract_status=result.contract.status,
        payments=[MonthlyPaymentResponse.from_domain(p, result.as_of) for p in result.payments],
        summary=PaymentSummaryResponse(**result.summary),
    )


@router.patch("/monthly-payments/{payment_id}")
async def update_monthly_payment(
    payment_id: str,
    payload: MonthlyPaymentUpdate,
    profile: Profile = Depends(require_operator),
    db: AsyncSession = Depends(get_db_session),
) -> MonthlyPaymentResponse:
    """Edit amount, due date, paid date and/or status of one payment. Omitted fields are unchanged."""
    srv = _update_service(db)
    today = date.today()
    try:
        payment = await srv.execute(payment_id, today=today, **payload.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise _not_found(e)
    except ValidationError as e:
        raise _invalid(e)
    except StorageError as e:
        raise _storage(e)
    return MonthlyPaymentResponse.from_domain(payment, today)


@router.post("/monthly-payments/{payment_id}/mark-paid")
async def mark_monthly_payment_paid(
    payment_id: str,
    profile: Profile = Depends(require_operator),
    db: AsyncSession = Depends(get_db_session),
) -> MonthlyPaymentResponse:
    """Mark one payment as paid today."""
    srv = MarkPaymentPaidService(_update_service(db))
    today = date.today()
    try:
        payment = await srv.execute(payment_id, today=today)
    except NotFoundError as e:
        raise _not_found(e)
    except StorageError as e:
        raise _storage(e)
    return MonthlyPaymentResponse.from_domain(payment, today)


@router.delete("/monthly-payments/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_monthly_payment(
    payment_id: str,
    profile: Profile = Depends(require_operator),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """Delete one payment. The remaining schedule is not regenerated."""
    srv = DeleteMonthlyPaymentService(
        payment_repo=MonthlyPaymentRepoSqlalchemy(db),
        contract_repo=ContractRepoSqlalchemy(db),
        metrics_port=MetricsAdapter(),
        logging_port=LoggingAdapter(user_id=profile.id),
    )
    try:
        await srv.execute(payment_id)
    except NotFoundError as e:
        raise _not_found(e)
    except StorageError as e:
        raise _storage(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reports/receivables")
async def receivables_report(
    start: date = Query(..., description="First due date included (YYYY-MM-DD)"),
    end: date = Query(..., description="Last due date included (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db_session),
) -> ReceivablesReportResponse:
    """Payments due in the window with totals per paid/pending/overdue."""
    srv = ReceivablesReportService(MonthlyPaymentRepoSqlalchemy(db))
    today = date.today()
    try:
        report = await srv.execute(start, end, today=today)
    except ValidationError as e:
        raise _invalid(e)

    return ReceivablesReportResponse(
        start=report.start,
        end=report.end,
        items=[
            ReceivableResponse(
                payment=MonthlyPaymentResponse.from_domain(item.payment, today),
                contract_number=item.contract.number,
                client_name=item.contract.client_name,
            )
            for item in report.items
        ],
        totals=report.totals,
        total_amount=report.total_amount,
    )


@router.get("/settings/notifications")
async def get_notification_settings(db: AsyncSession = Depends(get_db_session)) -> NotificationSettingsResponse:
    settings = await NotificationSettingsService(SettingsRepoSqlalchemy(db)).get()
    return NotificationSettingsResponse(enabled=settings.enabled, permission=settings.permission)


@router.put("/settings/notifications")
async def update_notification_settings(
    payload: NotificationSettingsUpdate,
    profile: Profile = Depends(require_operator),
    db: AsyncSession = Depends(get_db_session),
) -> NotificationSettingsResponse:
    """Turn the expiry notifications on/off and record the OS permission the browser granted."""
    srv = NotificationSettingsService(SettingsRepoSqlalchemy(db), logging_port=LoggingAdapter(user_id=profile.id))
    try:
        settings = await srv.update(enabled=payload.enabled, permission=payload.permission)
    except ValidationError as e:
        raise _invalid(e)
    except StorageError as e:
        raise _storage(e)
    return NotificationSettingsResponse(enabled=settings.enabled, permission=settings.permission)


@router.get("/notifications/toasts")
async def recent_toasts(
    limit: int = Query(20, ge=1, le=200),
    toast_feed: InMemoryToastFeed = Depends(get_toast_feed),
) -> ToastListResponse:
    """Most recent in-app toasts raised by the notification scheduler, newest first."""
    return ToastListResponse(
        toasts=[
            ToastResponse(
                title=t.title,
                body=t.body,
                urgent=t.urgent,
                tag=t.tag,
                url=t.url,
                created_at=t.created_at,
            )
            for t in toast_feed.recent(limit)
        ]
    )
