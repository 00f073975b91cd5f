from .builder import build_performance_report
from .csv_export import CSV_HEADERS, export_rounds_csv
from .pdf import render_performance_report, round_lines, stat_level

__all__ = [
    "CSV_HEADERS",
    "build_performance_report",
    "export_rounds_csv",
    "render_performance_report",
    "round_lines",
    "stat_level",
]
