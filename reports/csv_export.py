import csv
import io
from typing import Iterable

from models import Round

CSV_HEADERS = ["Date", "Course", "Score", "Par", "Fairways Hit", "GIR", "Putts"]


def _ratio(hit, total) -> str:
    if hit is None or not total:
        return ""
    return f"{hit}/{total}"


def export_rounds_csv(rounds: Iterable[Round]) -> str:
    """Rounds as CSV text, one row per round in the order given."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for round_obj in rounds:
        played = round_obj.played_at()
        writer.writerow([
            played.date().isoformat() if played else (round_obj.date or ""),
            round_obj.course,
            round_obj.total_score,
            "" if round_obj.par is None else round_obj.par,
            _ratio(round_obj.fairways_hit, round_obj.total_fairways),
            _ratio(round_obj.greens_in_regulation, round_obj.total_greens),
            "" if round_obj.putts is None else round_obj.putts,
        ])
    return buffer.getvalue()
