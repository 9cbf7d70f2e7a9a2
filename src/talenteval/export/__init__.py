"""PDF and spreadsheet report export."""

from .reports import (
    CategoryAverage,
    ExportedFile,
    StudentReport,
    TeamStats,
    calculate_average,
    compute_team_stats,
    export_student_report,
    export_team_report,
    report_filename,
)

__all__ = [
    "CategoryAverage",
    "ExportedFile",
    "StudentReport",
    "TeamStats",
    "calculate_average",
    "compute_team_stats",
    "export_student_report",
    "export_team_report",
    "report_filename",
]
