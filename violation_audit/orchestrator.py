"""
Audit orchestrator for running several audits over one snapshot.

Features:
- Parallel execution of independent audits
- Error handling and graceful degradation
- Timeout handling
"""

import asyncio
import dataclasses
import logging
from typing import List, Optional, Sequence

from .config import AuditConfig
from .core.models import AuditDefinition, AuditOutcome, DiagnosticSnapshot
from .core.runner import AuditRunner


logger = logging.getLogger(__name__)


VIOLATION_SOURCE = "violation"


class AuditOrchestrator:
    """Оркестратор для управления выполнением аудитов."""

    def __init__(self, config: AuditConfig):
        """
        Args:
            config: Конфигурация аудита
        """
        self.config = config

    def prepare(self, definitions: Sequence[AuditDefinition]) -> List[AuditDefinition]:
        """Применить настройки конфига к определениям аудитов."""
        if not self.config.violation_source_only:
            return list(definitions)
        return [
            dataclasses.replace(d, record_sources=frozenset({VIOLATION_SOURCE}))
            for d in definitions
        ]

    def build_runners(
        self,
        definitions: Sequence[AuditDefinition],
        snapshot: Optional[DiagnosticSnapshot],
    ) -> List[AuditRunner]:
        return [
            AuditRunner(d, snapshot, timeout_seconds=self.config.default_timeout_seconds)
            for d in self.prepare(definitions)
        ]

    async def run_parallel(
        self,
        runners: List[AuditRunner],
        max_parallel: Optional[int] = None,
    ) -> List[AuditOutcome]:
        """
        Запустить аудиты параллельно.

        Args:
            runners: Список раннеров
            max_parallel: Максимум параллельных задач (None — из конфига, 0 — без ограничений)

        Returns:
            Результаты в порядке runners
        """
        if not runners:
            return []

        logger.info(f"Running {len(runners)} audits in parallel...")

        if max_parallel is None:
            max_parallel = self.config.max_parallel_audits

        results: List[AuditOutcome] = []

        if max_parallel and max_parallel > 0:
            for i in range(0, len(runners), max_parallel):
                batch = runners[i:i + max_parallel]
                results.extend(await self._run_batch(batch))
        else:
            results = await self._run_batch(runners)

        return results

    async def _run_batch(self, runners: List[AuditRunner]) -> List[AuditOutcome]:
        """Запустить батч аудитов параллельно."""
        outcomes = await asyncio.gather(*(r.run() for r in runners), return_exceptions=True)

        processed: List[AuditOutcome] = []
        for runner, outcome in zip(runners, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Audit {runner.name} failed: {outcome}")
                processed.append(AuditOutcome(
                    audit_id=runner.name,
                    result=None,
                    duration_ms=0,
                    error=f"{type(outcome).__name__}: {outcome}",
                    details={"exception": str(outcome), "exception_type": type(outcome).__name__},
                ))
            else:
                processed.append(outcome)

        return processed

    async def run_sequential(self, runners: List[AuditRunner]) -> List[AuditOutcome]:
        """Запустить аудиты последовательно."""
        if not runners:
            return []

        logger.info(f"Running {len(runners)} audits sequentially...")

        results = []
        for i, runner in enumerate(runners, 1):
            logger.info(f"[{i}/{len(runners)}] Running {runner.name}...")
            outcome = await runner.run()
            results.append(outcome)

            status = "✅ PASSED" if outcome.passed else "❌ FAILED"
            logger.info(f"  {status} - Found {outcome.violation_count} violations")

        return results

    async def run(
        self,
        definitions: Sequence[AuditDefinition],
        snapshot: Optional[DiagnosticSnapshot],
        parallel: Optional[bool] = None,
    ) -> List[AuditOutcome]:
        """
        Запустить аудиты над одним снимком.

        Args:
            definitions: Определения аудитов
            snapshot: Снимок диагностики
            parallel: Параллельно или последовательно (None — из конфига)
        """
        runners = self.build_runners(definitions, snapshot)
        if parallel is None:
            parallel = self.config.parallel_execution
        if parallel:
            return await self.run_parallel(runners)
        return await self.run_sequential(runners)


async def run_audits(
    definitions: Sequence[AuditDefinition],
    snapshot: Optional[DiagnosticSnapshot],
    config: AuditConfig,
    parallel: bool = True,
) -> List[AuditOutcome]:
    """Удобная функция для запуска аудитов с оркестратором."""
    orchestrator = AuditOrchestrator(config)
    return await orchestrator.run(definitions, snapshot, parallel=parallel)
