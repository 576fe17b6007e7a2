"""Payroll defaults and spreadsheet date constants."""

DEFAULT_BASE_HOURS = 4
DEFAULT_OVERTIME_INTERVAL_MINUTES = 10
DEFAULT_OVERTIME_RATE = 50

MINUTES_PER_DAY = 24 * 60

# Spreadsheet serial dates: day 25569 is 1970-01-01.
EXCEL_EPOCH_OFFSET_DAYS = 25569
EXCEL_SERIAL_MIN = 40000
EXCEL_SERIAL_MAX = 60000
