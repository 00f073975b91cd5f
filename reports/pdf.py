from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional, Tuple, Union

from analytics.trends import to_comparison_rows, user_is_better
from analytics.visualizations import load_pyplot, plot_comparison, plot_course_averages, plot_monthly_trend
from models import PerformanceReport, Round

logger = logging.getLogger(__name__)

PAGE_SIZE = (8.27, 11.69)  # A4, inches

# (upper bound inclusive, label); first match wins
PUTTS_LEVELS = ((28, "Excellent"), (32, "Good"), (36, "Average"))
TO_PAR_LEVELS = (
    (-3, "Exceptional"),
    (-1, "Very Good"),
    (1, "Good"),
    (3, "Average"),
    (5, "Below Average"),
)
# (lower bound inclusive, label)
FAIRWAY_LEVELS = ((70, "Excellent"), (55, "Good"), (40, "Average"))
GIR_LEVELS = ((65, "Excellent"), (50, "Good"), (35, "Average"))


def stat_level(stat: str, value: Optional[float]) -> str:
    """Qualitative label for a single-round stat ("putts", "fairways", "gir", "to_par")."""
    if value is None:
        return "N/A"
    if stat == "putts":
        return next((label for bound, label in PUTTS_LEVELS if value <= bound), "Needs Work")
    if stat == "to_par":
        return next((label for bound, label in TO_PAR_LEVELS if value <= bound), "Needs Improvement")
    if stat == "fairways":
        return next((label for bound, label in FAIRWAY_LEVELS if value >= bound), "Needs Work")
    if stat == "gir":
        return next((label for bound, label in GIR_LEVELS if value >= bound), "Needs Work")
    raise ValueError(f"Unknown stat: {stat}")


def _format_to_par(value: Optional[int]) -> str:
    if value is None:
        return "-"
    if value == 0:
        return "E"
    return f"{value:+d}"


def _fmt(value: Optional[float], unit: str = "") -> str:
    return "-" if value is None else f"{value:.1f}{unit}"


def round_lines(round_obj: Round) -> List[Tuple[str, str, str]]:
    """(label, value, level) rows describing one round."""
    fairways = round_obj.fairway_percentage()
    gir = round_obj.gir_percentage()
    played = round_obj.played_at()
    return [
        ("Course", round_obj.course or "-", ""),
        ("Date", played.strftime("%d %b %Y") if played else str(round_obj.date or "-"), ""),
        ("Score", str(round_obj.total_score), ""),
        ("To Par", _format_to_par(round_obj.to_par()), stat_level("to_par", round_obj.to_par())),
        (
            "Putts",
            "-" if round_obj.putts is None else str(round_obj.putts),
            stat_level("putts", round_obj.putts),
        ),
        (
            "Fairways",
            "-" if fairways is None else f"{round_obj.fairways_hit}/{round_obj.total_fairways} ({fairways:.0f}%)",
            stat_level("fairways", fairways),
        ),
        (
            "Greens in Regulation",
            "-" if gir is None else f"{round_obj.greens_in_regulation}/{round_obj.total_greens} ({gir:.0f}%)",
            stat_level("gir", gir),
        ),
    ]


class _Cursor:
    """Top-down text placement in figure coordinates."""

    def __init__(self, fig, top: float = 0.95, left: float = 0.07):
        self.fig = fig
        self.y = top
        self.left = left

    def heading(self, text: str) -> None:
        self.y -= 0.015
        self.fig.text(self.left, self.y, text, fontsize=13, weight="bold")
        self.y -= 0.028

    def line(self, text: str, indent: float = 0.0, **kwargs) -> None:
        self.fig.text(self.left + indent, self.y, text, fontsize=kwargs.pop("fontsize", 10), **kwargs)
        self.y -= 0.022

    def columns(self, values, offsets, **kwargs) -> None:
        for value, offset in zip(values, offsets):
            self.fig.text(self.left + offset, self.y, value, fontsize=kwargs.get("fontsize", 10),
                          weight=kwargs.get("weight", "normal"))
        self.y -= 0.022


def _summary_page(plt, report: PerformanceReport):
    fig = plt.figure(figsize=PAGE_SIZE)
    cur = _Cursor(fig)

    fig.text(0.5, cur.y, "Golf Performance Report", fontsize=20, weight="bold", ha="center")
    cur.y -= 0.05

    cur.heading("Player")
    cur.line(f"Name: {report.player_name}")
    cur.line(f"Handicap: {_fmt(report.handicap)}")
    if report.summary is not None:
        cur.line(f"Rounds played: {report.summary.total_rounds}")

    if report.round is not None:
        cur.heading("Round Details")
        for label, value, level in round_lines(report.round):
            cur.columns([label, value, level], [0.0, 0.3, 0.65])

    if report.summary is not None:
        s = report.summary
        cur.heading("Season Summary")
        cur.columns(["Average score", _fmt(s.average_score)], [0.0, 0.3])
        cur.columns(["Best / worst", f"{s.best_score} / {s.worst_score}"], [0.0, 0.3])
        cur.columns(["Average putts", _fmt(s.average_putts)], [0.0, 0.3])
        cur.columns(["Fairways hit", _fmt(s.fairway_percentage, "%")], [0.0, 0.3])
        cur.columns(["Greens in regulation", _fmt(s.gir_percentage, "%")], [0.0, 0.3])

    if report.comparison is not None:
        cur.heading("Performance Comparison")
        cur.columns(["Metric", "You", "Everyone", ""], [0.0, 0.35, 0.52, 0.7], weight="bold")
        rows = to_comparison_rows(report.comparison.user_stats, report.comparison.global_stats)
        for row in rows:
            marker = "better" if user_is_better(row) else ""
            cur.columns(
                [row.metric_name, _fmt(row.user_value, row.unit), _fmt(row.global_value, row.unit), marker],
                [0.0, 0.35, 0.52, 0.7],
            )

    if report.goals:
        cur.heading("Goals")
        cur.columns(["Goal", "Target", "Current", "Progress", "Deadline"], [0.0, 0.3, 0.45, 0.6, 0.75],
                    weight="bold")
        for view in report.goals:
            progress = "-" if view.progress is None else f"{view.progress:.0f}%"
            if view.goal.is_completed:
                deadline = "Completed"
            else:
                deadline = view.deadline_status.label if view.deadline_status else "-"
            cur.columns(
                [view.label, view.formatted_target, view.formatted_current or "-", progress, deadline],
                [0.0, 0.3, 0.45, 0.6, 0.75],
            )

    if report.insights:
        cur.heading("Insights")
        for paragraph in report.insights.splitlines():
            if paragraph.strip():
                cur.line(paragraph.strip(), wrap=True)

    if report.share_url:
        cur.heading("Share")
        cur.line(report.share_url, color="tab:blue")

    fig.text(
        0.5, 0.03,
        f"Generated {report.generated_at.strftime('%d %b %Y %H:%M')}",
        fontsize=8, ha="center", color="gray",
    )
    return fig


def render_performance_report(report: PerformanceReport, output: Union[str, BinaryIO]) -> None:
    """
    Write the report as a PDF.

    Page one holds the player, round, comparison and goal tables. Charts for
    the monthly trend and per-course averages follow when a summary exists,
    then the user-vs-everyone chart when comparison data is present.
    `output` is a path or a writable binary file object.
    """
    plt = load_pyplot()
    from matplotlib.backends.backend_pdf import PdfPages

    figures = [_summary_page(plt, report)]
    if report.summary is not None:
        figures.append(plot_monthly_trend(report.summary)[0])
        if report.summary.course_stats:
            figures.append(plot_course_averages(report.summary)[0])
    if report.comparison is not None:
        figures.append(plot_comparison(report.comparison)[0])

    with PdfPages(output) as pdf:
        info = pdf.infodict()
        info["Title"] = f"Golf Performance Report - {report.player_name}"
        for fig in figures:
            pdf.savefig(fig)
            plt.close(fig)
    logger.info("Rendered performance report for %s (%d pages)", report.player_name, len(figures))
