import math
from typing import Iterable, Sequence

from korat.features.audit.schemas.audit import AuditIssue, Severity

ERROR_PENALTY = 20
WARNING_PENALTY = 10


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_score(issues: Iterable[AuditIssue]) -> int:
    """
    Linear penalty over one category's issues: 100 minus 20 per error and
    10 per warning, clamped to [0, 100]. Pass issues cost nothing.
    """
    errors = 0
    warnings = 0
    for issue in issues:
        if issue.severity == Severity.ERROR:
            errors += 1
        elif issue.severity == Severity.WARNING:
            warnings += 1
    return max(0, min(100, 100 - (errors * ERROR_PENALTY + warnings * WARNING_PENALTY)))


def calculate_overall_score(scores: Sequence[int]) -> int:
    """Mean of the category scores, rounded half-up."""
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))
