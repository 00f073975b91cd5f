from __future__ import annotations

from typing import List, Sequence

from models.stats import ComparisonResponse, StatSummary, TrendPoint

from .trends import to_comparison_rows, to_trend_series, user_is_better


def load_pyplot():
    """Import pyplot on the Agg backend, with an install hint when matplotlib is missing."""
    try:
        import matplotlib  # type: ignore
        matplotlib.use("Agg")  # charts are only ever written to files
        import matplotlib.pyplot as plt  # type: ignore
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for visualizations. Install it with: pip install matplotlib"
        ) from exc
    return plt


def _apply_sparse_xticks(ax, labels: Sequence[str], max_labels: int = 12) -> None:
    """
    Keep x-axis readable when there are many points.

    Shows at most `max_labels` ticks while preserving order.
    """
    count = len(labels)
    if count <= max_labels:
        ax.set_xticks(range(count))
        ax.set_xticklabels(labels, rotation=45, ha="right")
        return

    step = max(1, count // max_labels)
    tick_positions = list(range(0, count, step))
    if tick_positions[-1] != count - 1:
        tick_positions.append(count - 1)

    tick_labels = [labels[i] for i in tick_positions]
    ax.set_xticks(tick_positions)
    ax.set_xticklabels(tick_labels, rotation=45, ha="right")


def plot_monthly_trend(summary: StatSummary):
    """
    Combined chart over the last 12 months:
    - lines: average score and average putts
    - bars: fairway and GIR percentages on a second axis
    Months without rounds are drawn as gaps, not zeros.
    """
    plt = load_pyplot()
    points: List[TrendPoint] = to_trend_series(summary)
    played = [bucket.rounds_played for bucket in sorted(summary.monthly_averages, key=lambda b: b.month_start)]
    labels = [p.month for p in points]
    x = list(range(len(points)))

    def _gap(values):
        return [v if n else float("nan") for v, n in zip(values, played)]

    fig, ax1 = plt.subplots(figsize=(11, 5))
    width = 0.4
    ax2 = ax1.twinx()
    ax2.bar([i - width / 2 for i in x], [p.fairways for p in points], width, alpha=0.3, label="Fairways %")
    ax2.bar([i + width / 2 for i in x], [p.gir for p in points], width, alpha=0.3, label="GIR %")
    ax2.set_ylabel("Percent")
    ax2.set_ylim(0, 100)

    ax1.plot(x, _gap([p.score for p in points]), marker="o", linewidth=1.5, label="Avg Score")
    ax1.plot(x, _gap([p.putts for p in points]), marker="s", linewidth=1.2, label="Avg Putts")
    ax1.set_title("Monthly Performance")
    ax1.set_xlabel("Month")
    ax1.set_ylabel("Strokes")
    _apply_sparse_xticks(ax1, labels)
    ax1.grid(axis="y", alpha=0.2)
    ax1.set_zorder(ax2.get_zorder() + 1)
    ax1.patch.set_visible(False)

    lines1, labels1 = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines1 + lines2, labels1 + labels2, loc="upper left", fontsize=8)

    fig.tight_layout()
    return fig, ax1, ax2


def plot_course_averages(summary: StatSummary, max_courses: int = 10):
    """Horizontal bars: average score per course, most played first."""
    plt = load_pyplot()
    courses = sorted(summary.course_stats, key=lambda c: (-c.rounds_played, c.course))[:max_courses]
    names = [c.course or "Unknown course" for c in courses]
    averages = [c.average_score for c in courses]

    fig, ax = plt.subplots(figsize=(10, max(3, 0.5 * len(names) + 1.5)))
    y = list(range(len(names)))
    ax.barh(y, averages)
    ax.set_yticks(y)
    ax.set_yticklabels(names)
    ax.invert_yaxis()
    for i, course in enumerate(courses):
        ax.text(averages[i], i, f" {averages[i]:.1f} ({course.rounds_played})", va="center", fontsize=8)
    ax.set_title("Average Score By Course")
    ax.set_xlabel("Average Score (rounds played)")
    ax.grid(axis="x", alpha=0.2)
    fig.tight_layout()
    return fig, ax


def plot_comparison(comparison: ComparisonResponse, show_global: bool = True):
    """Grouped bars: user vs global per metric; the better side is outlined."""
    plt = load_pyplot()
    rows = to_comparison_rows(comparison.user_stats, comparison.global_stats, show_global)
    fig, axes = plt.subplots(1, len(rows), figsize=(11, 3.5))

    for ax, row in zip(axes, rows):
        values = [row.user_value or 0]
        labels = ["You"]
        if row.global_value is not None:
            values.append(row.global_value)
            labels.append("Everyone")
        bars = ax.bar(labels, values, color=["tab:green", "tab:gray"][: len(values)])
        if user_is_better(row):
            bars[0].set_edgecolor("black")
            bars[0].set_linewidth(2)
        ax.set_title(f"{row.metric_name}{' (%)' if row.unit == '%' else ''}", fontsize=9)
        hint = "lower is better" if row.lower_is_better else "higher is better"
        ax.set_xlabel(hint, fontsize=7)
        ax.grid(axis="y", alpha=0.2)

    fig.tight_layout()
    return fig, axes
