"""
Audit scorer: matches → score + details table.
"""

from typing import Optional, Sequence

from .models import AuditResult, ColumnSpec, ScoringMode, Table, ViolationMatch


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def score_violations(
    matches: Sequence[ViolationMatch],
    headings: Sequence[ColumnSpec],
    *,
    scoring_mode: ScoringMode = ScoringMode.BINARY,
    total: Optional[int] = None,
) -> AuditResult:
    """
    Вычислить оценку аудита.

    BINARY: 1 если нарушений нет, иначе 0.
    PROPORTIONAL: 1 - violations / total, в пределах [0, 1].
    total по умолчанию равен числу нарушений.
    """
    count = len(matches)

    if scoring_mode is ScoringMode.BINARY:
        score: float = int(count == 0)
    else:
        denominator = count if total is None else total
        if count == 0 or denominator <= 0:
            score = int(count == 0)
        else:
            score = _clamp(1 - count / denominator, 0.0, 1.0)

    return AuditResult(
        score=score,
        details=Table(headings=tuple(headings), rows=tuple(matches)),
    )
