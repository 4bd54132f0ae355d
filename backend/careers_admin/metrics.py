"""
Client-side math over server-computed analytics: sorting, weighted
averages, funnel totals and display formatting.
"""
from typing import Any, Iterable, List, Literal, Optional, Sequence, TypeVar

from careers_admin.funnel import round_rate
from careers_admin.models import FunnelStage, InterviewerMetric

T = TypeVar("T")
SortDirection = Literal["asc", "desc"]


def sort_by(items: Iterable[T], field: str, direction: SortDirection = "desc") -> List[T]:
    """Sort models or dicts by a field; missing values always sort last."""
    def value(item: Any):
        return item.get(field) if isinstance(item, dict) else getattr(item, field, None)

    items = list(items)
    present = [item for item in items if value(item) is not None]
    missing = [item for item in items if value(item) is None]
    return sorted(present, key=value, reverse=direction == "desc") + missing


def toggle_sort(current_field: str, current_direction: SortDirection, field: str):
    """Clicking the active column flips the direction; a new column starts descending."""
    if field == current_field:
        return field, "asc" if current_direction == "desc" else "desc"
    return field, "desc"


def top_by_conversion(items: Iterable[T], limit: int = 5, best: bool = True) -> List[T]:
    return sort_by(items, "conversion_rate", "desc" if best else "asc")[:limit]


def overall_conversion(stages: Sequence[FunnelStage]) -> float:
    """Last stage over first stage, in percent."""
    if not stages or not stages[0].count:
        return 0.0
    return round_rate(stages[-1].count / stages[0].count * 100)


def drop_rates(stages: Sequence[FunnelStage]) -> List[float]:
    """Share of candidates lost between consecutive stages."""
    return [round_rate(100 - stage.conversion_rate) for stage in stages[1:]]


def weighted_interviewer_summary(interviewers: Sequence[InterviewerMetric]) -> dict:
    """
    Team-wide averages weighted by how many interviews each person ran.
    """
    total = sum(i.interviews for i in interviewers)
    if not total:
        return {"total_interviews": 0, "avg_pass_rate": 0.0, "avg_score": 0.0, "avg_duration": 0}

    def weighted(attr: str) -> float:
        return sum((getattr(i, attr) or 0) * i.interviews for i in interviewers) / total

    return {
        "total_interviews": total,
        "avg_pass_rate": round_rate(weighted("pass_rate")),
        "avg_score": round_rate(weighted("avg_score")),
        "avg_duration": int(weighted("avg_duration") + 0.5),
    }


def format_change(change: Optional[float]) -> str:
    """Whole numbers print without decimals, everything else with one."""
    if change is None:
        return "0"
    magnitude = abs(change)
    if magnitude % 1 == 0:
        return f"{int(magnitude)}"
    return f"{round_rate(magnitude):.1f}"
