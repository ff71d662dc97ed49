"""Payroll report endpoints."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Path, Query, status

from payroll_manager.api.dependencies import DbSession
from payroll_manager.api.schemas import CompanyTotalsResponse, EmployeeTotalsResponse
from payroll_manager.services.aggregation_service import AggregationService

router = APIRouter(prefix="/reports", tags=["reports"])


def _check_range(start: date, end: date) -> None:
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end must not be before start",
        )


@router.get("/employees", response_model=list[EmployeeTotalsResponse])
async def employee_totals(
    db: DbSession,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> list[EmployeeTotalsResponse]:
    """Per-employee totals for statements paid within [start, end]."""
    _check_range(start, end)
    totals = await AggregationService(db).all_employee_totals(start, end)
    return [EmployeeTotalsResponse.model_validate(t) for t in totals]


@router.get("/employees/{employee_id}/ytd/{year}", response_model=EmployeeTotalsResponse)
async def employee_ytd_totals(
    db: DbSession,
    employee_id: Annotated[UUID, Path()],
    year: Annotated[int, Path(ge=1900, le=9999)],
) -> EmployeeTotalsResponse:
    totals = await AggregationService(db).employee_ytd_totals(employee_id, year)
    return EmployeeTotalsResponse.model_validate(totals)


@router.get("/company", response_model=CompanyTotalsResponse)
async def company_totals(
    db: DbSession,
    start: Annotated[date, Query()],
    end: Annotated[date, Query()],
) -> CompanyTotalsResponse:
    """Company-wide totals for statements paid within [start, end]."""
    _check_range(start, end)
    totals = await AggregationService(db).company_totals(start, end)
    return CompanyTotalsResponse.model_validate(totals)


@router.get("/company/ytd/{year}", response_model=CompanyTotalsResponse)
async def company_ytd_totals(
    db: DbSession,
    year: Annotated[int, Path(ge=1900, le=9999)],
) -> CompanyTotalsResponse:
    totals = await AggregationService(db).company_ytd_totals(year)
    return CompanyTotalsResponse.model_validate(totals)


@router.get("/company/qtd", response_model=CompanyTotalsResponse)
async def company_qtd_totals(
    db: DbSession,
    reference_date: Annotated[date | None, Query()] = None,
) -> CompanyTotalsResponse:
    """Quarter-to-date totals for the quarter containing the reference date."""
    totals = await AggregationService(db).company_qtd_totals(reference_date or date.today())
    return CompanyTotalsResponse.model_validate(totals)
