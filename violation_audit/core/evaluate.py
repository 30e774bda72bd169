"""
Composition of matcher and scorer for a single audit definition.
"""

import logging
from typing import Optional

from .errors import ArtifactMissingError
from .matcher import find_violations
from .models import AuditDefinition, AuditResult, DiagnosticSnapshot, ScoringMode
from .scorer import score_violations


logger = logging.getLogger(__name__)


def evaluate_audit(
    definition: AuditDefinition,
    snapshot: Optional[DiagnosticSnapshot],
) -> AuditResult:
    """
    Выполнить аудит над готовым снимком диагностики.

    Raises:
        ArtifactMissingError: снимок не был собран
    """
    if snapshot is None:
        raise ArtifactMissingError("ConsoleMessages", f"no diagnostic snapshot for {definition.id}")

    matches = find_violations(
        definition.signature,
        snapshot.records,
        source_maps=snapshot.source_maps,
        scripts=snapshot.scripts,
        dedupe=definition.dedupe,
        record_sources=definition.record_sources,
    )

    total = None
    if definition.scoring_mode is ScoringMode.PROPORTIONAL:
        total = len(snapshot.records)

    result = score_violations(
        matches,
        definition.headings,
        scoring_mode=definition.scoring_mode,
        total=total,
    )
    logger.debug(f"{definition.id}: score={result.score}, violations={len(matches)}")
    return result
