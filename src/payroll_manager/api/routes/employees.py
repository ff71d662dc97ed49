"""Employee endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status

from payroll_manager.api.dependencies import DbSession
from payroll_manager.api.schemas import (
    EmployeeDetailResponse,
    EmployeePayload,
    EmployeeResponse,
    ErrorResponse,
    PaySummaryResponse,
    StatementSummaryResponse,
)
from payroll_manager.models.enums import CompensationMode
from payroll_manager.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_employee(db: DbSession, payload: EmployeePayload) -> EmployeeResponse:
    """Create an employee."""
    employee = await EmployeeService(db).create_employee(payload.to_profile())
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: DbSession,
    active: Annotated[bool | None, Query()] = None,
    pay_type: Annotated[CompensationMode | None, Query()] = None,
) -> list[EmployeeResponse]:
    """List employees by last then first name, optionally filtered."""
    employees = await EmployeeService(db).list_employees(active=active, pay_type=pay_type)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    "/{employee_id}",
    response_model=EmployeeDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_employee(
    db: DbSession,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeDetailResponse:
    """Get an employee with their last statement and year-to-date pay."""
    service = EmployeeService(db)
    employee = await service.get_employee(employee_id)
    summary = await service.pay_summary(employee_id)
    return EmployeeDetailResponse(
        **EmployeeResponse.model_validate(employee).model_dump(),
        pay_summary=PaySummaryResponse.model_validate(summary),
    )


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_employee(
    db: DbSession,
    employee_id: Annotated[UUID, Path()],
    payload: EmployeePayload,
) -> EmployeeResponse:
    """Replace an employee's profile."""
    employee = await EmployeeService(db).update_employee(employee_id, payload.to_profile())
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_employee(
    db: DbSession,
    employee_id: Annotated[UUID, Path()],
) -> None:
    """Delete an employee and their pay statements."""
    await EmployeeService(db).delete_employee(employee_id)
    await db.commit()


@router.get(
    "/{employee_id}/statements",
    response_model=list[StatementSummaryResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_employee_statements(
    db: DbSession,
    employee_id: Annotated[UUID, Path()],
    year: Annotated[int | None, Query(ge=1900, le=9999)] = None,
) -> list[StatementSummaryResponse]:
    """An employee's statements, most recent first."""
    statements = await EmployeeService(db).statements(employee_id, year)
    return [StatementSummaryResponse.from_statement(s) for s in statements]
