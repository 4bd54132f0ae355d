"""
Recruitment funnel normalization.

The API reports every interview round as its own stage ("stage-1",
"Interview - Technical", ...). The funnel chart shows them as a single
Interview step between Applications and the later stages.
"""
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Mapping, Union

from careers_admin.models import FunnelStage

INTERVIEW_PATTERNS = (
    re.compile(r"^stage[-_\s]?\d+", re.IGNORECASE),
    re.compile(r"^interview", re.IGNORECASE),
)
INTERVIEW_STAGE = "Interview"
APPLICATIONS_STAGE = "Applications"

StageInput = Union[FunnelStage, Mapping[str, Any]]


def is_interview_stage(label: str) -> bool:
    return any(pattern.match(label) for pattern in INTERVIEW_PATTERNS)


def round_rate(value: float) -> float:
    """Round to one decimal, halves away from zero, on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def conversion_rate(count: int, previous: int) -> float:
    if not previous:
        return 100.0
    return round_rate(count / previous * 100)


def _stage_and_count(entry: StageInput):
    if isinstance(entry, FunnelStage):
        return entry.stage, entry.count or 0
    return str(entry.get("stage", "")), entry.get("count") or 0


def normalize_funnel_data(stages: Iterable[StageInput]) -> List[FunnelStage]:
    """
    Fold interview-like stages into one Interview stage and recompute rates.

    - Interview-like counts accumulate until the first non-interview stage,
      where a single Interview entry is emitted in front of it.
    - Counts still accumulated at the end are emitted as a trailing Interview.
    - Without any "application" stage, an Applications stage carrying the sum
      of all emitted counts is prepended.
    - Each conversion rate is count / previous count, in percent; the first
      stage and stages after a zero count get 100.

    Feeding the output back in returns the same stages, since "Interview"
    itself matches the interview pattern.
    """
    stages = list(stages)
    if not stages:
        return []

    emitted: List[tuple] = []
    interview_count = 0
    interview_inserted = False

    for entry in stages:
        stage, count = _stage_and_count(entry)
        if is_interview_stage(stage):
            interview_count += count
            continue
        if interview_count > 0 and not interview_inserted:
            emitted.append((INTERVIEW_STAGE, interview_count))
            interview_count = 0
            interview_inserted = True
        emitted.append((stage, count))

    if interview_count > 0:
        emitted.append((INTERVIEW_STAGE, interview_count))

    if not any("application" in stage.lower() for stage, _ in emitted):
        emitted.insert(0, (APPLICATIONS_STAGE, sum(count for _, count in emitted)))

    result: List[FunnelStage] = []
    for index, (stage, count) in enumerate(emitted):
        rate = 100.0 if index == 0 else conversion_rate(count, emitted[index - 1][1])
        result.append(FunnelStage(stage=stage, count=count, conversion_rate=rate))
    return result
