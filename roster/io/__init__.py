"""I/O utilities for CSV import/export."""

from .export_csv import export_schedule_csv, export_staff_csv
from .import_csv import import_schedule_csv, import_shift_requests_csv, import_staff_csv, import_unavailability_csv

__all__ = [
    "import_staff_csv",
    "import_unavailability_csv",
    "import_shift_requests_csv",
    "import_schedule_csv",
    "export_schedule_csv",
    "export_staff_csv",
]
