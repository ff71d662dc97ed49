"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from payroll_manager.calculators.types import RateConfig, StatementInput
from payroll_manager.models import PayStatement
from payroll_manager.models.enums import CompensationMode
from payroll_manager.services.employee_service import EmployeeProfile


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str


# ============================================================================
# Settings schemas
# ============================================================================


class SettingsPayload(BaseModel):
    """Company settings as read and written through the API."""

    model_config = ConfigDict(from_attributes=True)

    company_name: str = "My Company"
    company_address: str = ""
    tax_id: str = ""
    federal_tax_percent: Decimal = Field(default=Decimal("12"), ge=0, le=100)
    state_tax_percent: Decimal = Field(default=Decimal("5"), ge=0, le=100)
    social_security_percent: Decimal = Field(default=Decimal("6.2"), ge=0, le=100)
    medicare_percent: Decimal = Field(default=Decimal("1.45"), ge=0, le=100)
    pay_periods_per_year: int = Field(default=26, ge=0)
    default_hours_per_period: int = Field(default=80, ge=0)

    def to_config(self) -> RateConfig:
        return RateConfig(**self.model_dump())


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeePayload(BaseModel):
    """Schema for creating or replacing an employee."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    pay_type: CompensationMode = CompensationMode.HOURLY
    hourly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    annual_salary: Decimal = Field(default=Decimal("0"), ge=0)
    retirement_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    health_insurance_per_period: Decimal = Field(default=Decimal("0"), ge=0)
    other_deductions_per_period: Decimal = Field(default=Decimal("0"), ge=0)
    default_hours_per_period: int = Field(default=80, ge=0)
    is_active: bool = True
    job_title: str | None = None
    department: str | None = None

    def to_profile(self) -> EmployeeProfile:
        return EmployeeProfile(**self.model_dump())


class EmployeeResponse(BaseModel):
    """Schema for employee response."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: UUID
    first_name: str
    last_name: str
    full_name: str
    pay_type: CompensationMode
    hourly_rate: Decimal
    annual_salary: Decimal
    retirement_percent: Decimal
    health_insurance_per_period: Decimal
    other_deductions_per_period: Decimal
    default_hours_per_period: int
    is_active: bool
    job_title: str | None
    department: str | None


class PaySummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    last_pay_date: date | None
    last_gross: Decimal
    last_net: Decimal
    ytd_gross: Decimal
    ytd_taxes: Decimal
    ytd_net: Decimal


class EmployeeDetailResponse(EmployeeResponse):
    """Employee with last statement and year-to-date pay."""

    pay_summary: PaySummaryResponse


# ============================================================================
# Pay Period schemas
# ============================================================================


class PayPeriodCreate(BaseModel):
    """Schema for creating a pay period."""

    period_start: date
    period_end: date
    pay_date: date


class PayPeriodDatesResponse(BaseModel):
    """Calculated dates for a pay period."""

    model_config = ConfigDict(from_attributes=True)

    period_start: date
    period_end: date
    pay_date: date


class PayPeriodResponse(PayPeriodDatesResponse):
    """Schema for pay period response."""

    pay_period_id: UUID


class PayPeriodSummaryResponse(PayPeriodResponse):
    """Pay period with totals of its statements."""

    statement_count: int
    total_gross: Decimal
    total_net: Decimal


# ============================================================================
# Statement input schemas
# ============================================================================


class StatementInputPayload(BaseModel):
    """Hours and extra earnings for one employee."""

    regular_hours: Decimal = Field(default=Decimal("0"), ge=0)
    overtime_hours: Decimal = Field(default=Decimal("0"), ge=0)
    bonus_amount: Decimal = Field(default=Decimal("0"), ge=0)
    commission_amount: Decimal = Field(default=Decimal("0"), ge=0)
    bonus_description: str | None = None
    commission_description: str | None = None

    def to_input(self) -> StatementInput:
        return StatementInput(**self.model_dump())


class PayrollEntryPayload(BaseModel):
    """One employee in a pay run."""

    employee_id: UUID
    inputs: StatementInputPayload | None = None
    total_hours: Decimal | None = Field(default=None, ge=0)


class RunPayrollRequest(BaseModel):
    """Schema for running payroll for a pay period.

    Without entries, every active employee is paid their default hours.
    """

    entries: list[PayrollEntryPayload] = Field(default_factory=list)


class PreviewRequest(BaseModel):
    """Schema for previewing a statement."""

    employee_id: UUID
    pay_date: date
    inputs: StatementInputPayload = Field(default_factory=StatementInputPayload)


# ============================================================================
# Pay Statement schemas
# ============================================================================


class EarningLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line_number: int
    earning_type: str
    hours: Decimal
    rate: Decimal
    amount: Decimal
    description: str


class DeductionLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line_number: int
    deduction_type: str
    amount: Decimal
    is_pretax: bool
    description: str


class TaxLineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    line_number: int
    tax_type: str
    amount: Decimal
    rate: Decimal
    taxable_amount: Decimal
    description: str


class StatementAmounts(BaseModel):
    """Totals shared by persisted statements and previews."""

    model_config = ConfigDict(from_attributes=True)

    hours_worked: Decimal
    gross_pay: Decimal
    pre_tax_401k: Decimal
    pre_tax_deductions: Decimal
    tax_federal: Decimal
    tax_state: Decimal
    tax_social_security: Decimal
    tax_medicare: Decimal
    total_taxes: Decimal
    post_tax_deductions: Decimal
    net_pay: Decimal
    ytd_gross: Decimal
    ytd_taxes: Decimal
    ytd_net: Decimal


class PayStatementResponse(StatementAmounts):
    """Schema for pay statement response."""

    pay_statement_id: UUID
    employee_id: UUID
    pay_period_id: UUID
    earnings: list[EarningLineResponse]
    deductions: list[DeductionLineResponse]
    taxes: list[TaxLineResponse]


class StatementSummaryResponse(BaseModel):
    """Statement row for listings."""

    pay_statement_id: UUID
    employee_id: UUID
    employee_name: str
    pay_period_id: UUID
    pay_date: date
    hours_worked: Decimal
    gross_pay: Decimal
    total_taxes: Decimal
    total_deductions: Decimal
    net_pay: Decimal

    @classmethod
    def from_statement(cls, statement: PayStatement) -> "StatementSummaryResponse":
        return cls(
            pay_statement_id=statement.pay_statement_id,
            employee_id=statement.employee_id,
            employee_name=statement.employee.full_name,
            pay_period_id=statement.pay_period_id,
            pay_date=statement.pay_period.pay_date,
            hours_worked=statement.hours_worked,
            gross_pay=statement.gross_pay,
            total_taxes=statement.total_taxes,
            total_deductions=statement.total_deductions,
            net_pay=statement.net_pay,
        )


class PayStatementDetailResponse(PayStatementResponse):
    """Statement with employee and period context."""

    employee_name: str
    period_start: date
    period_end: date
    pay_date: date
    regular_earnings: Decimal
    overtime_earnings: Decimal
    bonus_earnings: Decimal
    commission_earnings: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal


class PreviewLineItem(BaseModel):
    """Schema for a preview line item."""

    category: str
    code: str
    description: str
    amount: Decimal
    hours: Decimal | None = None
    rate: Decimal | None = None


class PreviewResponse(StatementAmounts):
    """Schema for preview response."""

    employee_id: UUID
    pay_date: date
    taxable_income: Decimal
    lines: list[PreviewLineItem]


class RunPayrollResponse(BaseModel):
    """Schema for run payroll response."""

    pay_period_id: UUID
    statements: list[PayStatementResponse]
    total_gross: Decimal
    total_net: Decimal


# ============================================================================
# Report schemas
# ============================================================================


class TotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    gross_pay: Decimal
    federal_tax: Decimal
    state_tax: Decimal
    social_security: Decimal
    medicare: Decimal
    total_taxes: Decimal
    pre_tax_401k: Decimal
    pre_tax_deductions: Decimal
    post_tax_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    statement_count: int
    year: int | None = None
    quarter: int | None = None


class EmployeeTotalsResponse(TotalsResponse):
    employee_id: UUID | None = None
    employee_name: str


class CompanyTotalsResponse(TotalsResponse):
    employee_count: int
