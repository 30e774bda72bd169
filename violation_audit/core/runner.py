"""
Audit runner: one audit definition over one snapshot.
"""

import asyncio
import logging
import time
from typing import Optional

from .evaluate import evaluate_audit
from .models import AuditDefinition, AuditOutcome, DiagnosticSnapshot


class AuditRunner:
    """
    Запуск одного аудита.

    Предоставляет:
    - Timeout support
    - Error handling (ошибка превращается в проваленный AuditOutcome)
    - Логирование
    """

    def __init__(
        self,
        definition: AuditDefinition,
        snapshot: Optional[DiagnosticSnapshot],
        timeout_seconds: float = 30.0,
    ):
        """
        Args:
            definition: Определение аудита
            snapshot: Снимок диагностики (None — артефакты не собраны)
            timeout_seconds: Таймаут выполнения (по умолчанию 30 секунд)
        """
        self.definition = definition
        self.snapshot = snapshot
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger(f"violation_audit.{definition.id}")

    @property
    def name(self) -> str:
        return self.definition.id

    async def run(self) -> AuditOutcome:
        """
        Запустить аудит с error handling и timeout.

        Returns:
            AuditOutcome с результатом или ошибкой
        """
        self.logger.info(f"Starting {self.name}...")
        start_time = time.perf_counter()

        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(evaluate_audit, self.definition, self.snapshot),
                timeout=self.timeout_seconds,
            )

            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.info(
                f"Completed {self.name}: "
                f"score={result.score}, "
                f"violations={len(result.details.rows)}, "
                f"duration={duration_ms:.2f}ms"
            )

            return AuditOutcome(
                audit_id=self.name,
                result=result,
                duration_ms=duration_ms,
                details={
                    "timeout_seconds": self.timeout_seconds,
                    "signature_version": self.definition.signature_version,
                },
            )

        except asyncio.TimeoutError:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.error(f"{self.name} timed out after {self.timeout_seconds}s")

            return AuditOutcome(
                audit_id=self.name,
                result=None,
                duration_ms=duration_ms,
                error=f"Audit exceeded timeout of {self.timeout_seconds} seconds",
                details={"timeout_seconds": self.timeout_seconds, "timed_out": True},
            )

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.error(f"{self.name} failed with exception: {e}", exc_info=True)

            return AuditOutcome(
                audit_id=self.name,
                result=None,
                duration_ms=duration_ms,
                error=f"{type(e).__name__}: {e}",
                details={"exception": str(e), "exception_type": type(e).__name__},
            )
