"""Pay period and pay statement endpoints."""

from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from payroll_manager.api.dependencies import DbSession, SettingsService
from payroll_manager.api.schemas import (
    ErrorResponse,
    PayPeriodCreate,
    PayPeriodDatesResponse,
    PayPeriodResponse,
    PayPeriodSummaryResponse,
    PayStatementDetailResponse,
    PayStatementResponse,
    PreviewLineItem,
    PreviewRequest,
    PreviewResponse,
    RunPayrollRequest,
    RunPayrollResponse,
    StatementSummaryResponse,
)
from payroll_manager.calculators.types import StatementCalculation
from payroll_manager.services.pay_run_service import PayrollEntry, PayRunService

router = APIRouter(tags=["payroll"])


# ============================================================================
# Pay Periods
# ============================================================================


@router.get("/pay-periods/next", response_model=PayPeriodDatesResponse)
async def get_next_pay_period(
    db: DbSession,
    settings_service: SettingsService,
    reference_date: Annotated[date | None, Query()] = None,
) -> PayPeriodDatesResponse:
    """Dates of the next pay period at the configured frequency."""
    service = PayRunService(db, settings_service)
    dates = await service.next_pay_period(reference_date)
    return PayPeriodDatesResponse.model_validate(dates)


@router.get("/pay-periods", response_model=list[PayPeriodSummaryResponse])
async def list_pay_periods(
    db: DbSession,
    settings_service: SettingsService,
) -> list[PayPeriodSummaryResponse]:
    """Pay periods, most recent pay date first, with statement totals."""
    periods = await PayRunService(db, settings_service).list_pay_periods()
    return [
        PayPeriodSummaryResponse(
            pay_period_id=period.pay_period_id,
            period_start=period.period_start,
            period_end=period.period_end,
            pay_date=period.pay_date,
            statement_count=len(period.statements),
            total_gross=sum((s.gross_pay for s in period.statements), Decimal("0")),
            total_net=sum((s.net_pay for s in period.statements), Decimal("0")),
        )
        for period in periods
    ]


@router.post(
    "/pay-periods",
    response_model=PayPeriodResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_pay_period(
    db: DbSession,
    settings_service: SettingsService,
    payload: PayPeriodCreate,
) -> PayPeriodResponse:
    """Create a pay period."""
    service = PayRunService(db, settings_service)
    period = await service.create_pay_period(
        payload.period_start, payload.period_end, payload.pay_date
    )
    await db.commit()
    return PayPeriodResponse.model_validate(period)


@router.post(
    "/pay-periods/{pay_period_id}/statements",
    response_model=RunPayrollResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def run_payroll(
    db: DbSession,
    settings_service: SettingsService,
    pay_period_id: Annotated[UUID, Path()],
    payload: RunPayrollRequest,
) -> RunPayrollResponse:
    """Compute and persist statements for the listed (or all active) employees."""
    service = PayRunService(db, settings_service)
    entries = [
        PayrollEntry(
            employee_id=entry.employee_id,
            inputs=entry.inputs.to_input() if entry.inputs is not None else None,
            total_hours=entry.total_hours,
        )
        for entry in payload.entries
    ]
    statements = await service.run_payroll(pay_period_id, entries or None)
    await db.commit()

    return RunPayrollResponse(
        pay_period_id=pay_period_id,
        statements=[PayStatementResponse.model_validate(s) for s in statements],
        total_gross=sum((s.gross_pay for s in statements), Decimal("0")),
        total_net=sum((s.net_pay for s in statements), Decimal("0")),
    )


@router.get(
    "/pay-periods/{pay_period_id}/statements",
    response_model=list[StatementSummaryResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_period_statements(
    db: DbSession,
    settings_service: SettingsService,
    pay_period_id: Annotated[UUID, Path()],
) -> list[StatementSummaryResponse]:
    """Statements generated for a pay period, ordered by employee name."""
    service = PayRunService(db, settings_service)
    statements = await service.statements_for_period(pay_period_id)
    return [StatementSummaryResponse.from_statement(s) for s in statements]


# ============================================================================
# Pay Statements
# ============================================================================


@router.post(
    "/statements/preview",
    response_model=PreviewResponse,
    responses={404: {"model": ErrorResponse}},
)
async def preview_statement(
    db: DbSession,
    settings_service: SettingsService,
    payload: PreviewRequest,
) -> PreviewResponse:
    """Calculate a statement for a draft pay date without saving it."""
    service = PayRunService(db, settings_service)
    calculation = await service.preview_statement(
        payload.employee_id, payload.pay_date, payload.inputs.to_input()
    )
    return _preview_response(payload.employee_id, calculation)


@router.get(
    "/statements/{pay_statement_id}",
    response_model=PayStatementDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_statement(
    db: DbSession,
    settings_service: SettingsService,
    pay_statement_id: Annotated[UUID, Path()],
) -> PayStatementDetailResponse:
    """Get a pay statement with its line items."""
    service = PayRunService(db, settings_service)
    statement = await service.get_statement(pay_statement_id)
    base = PayStatementResponse.model_validate(statement)
    return PayStatementDetailResponse(
        **base.model_dump(),
        employee_name=statement.employee.full_name,
        period_start=statement.pay_period.period_start,
        period_end=statement.pay_period.period_end,
        pay_date=statement.pay_period.pay_date,
        regular_earnings=statement.regular_earnings,
        overtime_earnings=statement.overtime_earnings,
        bonus_earnings=statement.bonus_earnings,
        commission_earnings=statement.commission_earnings,
        regular_hours=statement.regular_hours,
        overtime_hours=statement.overtime_hours,
    )


@router.delete(
    "/statements/{pay_statement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_statement(
    db: DbSession,
    settings_service: SettingsService,
    pay_statement_id: Annotated[UUID, Path()],
) -> None:
    """Delete a pay statement and its line items."""
    service = PayRunService(db, settings_service)
    await service.delete_statement(pay_statement_id)
    await db.commit()


def _preview_response(employee_id: UUID, calc: StatementCalculation) -> PreviewResponse:
    lines = [
        PreviewLineItem(
            category="earning",
            code=line.earning_type.value,
            description=line.description,
            amount=line.amount,
            hours=line.hours,
            rate=line.rate,
        )
        for line in calc.earnings
    ]
    lines.extend(
        PreviewLineItem(
            category="deduction",
            code=line.deduction_type.value,
            description=line.description,
            amount=line.amount,
        )
        for line in calc.deductions
    )
    lines.extend(
        PreviewLineItem(
            category="tax",
            code=line.tax_type.value,
            description=line.description,
            amount=line.amount,
            rate=line.rate,
        )
        for line in calc.taxes
    )

    return PreviewResponse(
        employee_id=employee_id,
        pay_date=calc.pay_date,
        hours_worked=calc.hours_worked,
        gross_pay=calc.gross_pay,
        pre_tax_401k=calc.pre_tax_401k,
        pre_tax_deductions=calc.pre_tax_deductions,
        taxable_income=calc.taxable_income,
        tax_federal=calc.tax_federal,
        tax_state=calc.tax_state,
        tax_social_security=calc.tax_social_security,
        tax_medicare=calc.tax_medicare,
        total_taxes=calc.total_taxes,
        post_tax_deductions=calc.post_tax_deductions,
        net_pay=calc.net_pay,
        ytd_gross=calc.ytd_gross,
        ytd_taxes=calc.ytd_taxes,
        ytd_net=calc.ytd_net,
        lines=lines,
    )
