"""
Configuration for violation audits.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class AuditConfig:
    """Конфигурация системы аудита."""

    # === Paths ===
    artifacts_path: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["VIOLATION_AUDIT_ARTIFACTS"])
        if os.getenv("VIOLATION_AUDIT_ARTIFACTS") else None
    )
    report_output_dir: Path = field(
        default_factory=lambda: Path(os.getenv("VIOLATION_AUDIT_REPORT_DIR", "audit_reports"))
    )

    # === Audit Selection ===
    # Пустой список — все зарегистрированные аудиты
    audit_ids: List[str] = field(default_factory=list)
    # Учитывать только записи с source == "violation"
    violation_source_only: bool = field(
        default_factory=lambda: _env_bool("VIOLATION_AUDIT_VIOLATION_SOURCE_ONLY", False)
    )

    # === Execution Settings ===
    default_timeout_seconds: float = field(
        default_factory=lambda: _env_float("VIOLATION_AUDIT_TIMEOUT", 30.0)
    )
    parallel_execution: bool = True
    max_parallel_audits: int = field(
        default_factory=lambda: _env_int("VIOLATION_AUDIT_MAX_PARALLEL", 4)
    )

    def __post_init__(self):
        """Validate configuration."""
        if self.artifacts_path is not None:
            self.artifacts_path = Path(self.artifacts_path)
        self.report_output_dir = Path(self.report_output_dir)

        if self.default_timeout_seconds <= 0:
            raise ValueError(f"default_timeout_seconds must be positive, got {self.default_timeout_seconds}")
        if self.max_parallel_audits < 0:
            raise ValueError(f"max_parallel_audits must be >= 0, got {self.max_parallel_audits}")

    def has_artifacts(self) -> bool:
        """Проверить, что файл артефактов указан и существует."""
        return self.artifacts_path is not None and self.artifacts_path.exists()


def get_default_config() -> AuditConfig:
    """Получить конфигурацию по умолчанию."""
    return AuditConfig()
