"""Payroll manager: pay statements, pay periods, company settings and rollups."""

__version__ = "0.1.0"
