"""
Core data models for violation audits.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Pattern, Tuple, Union


class ItemType(Enum):
    """Тип значения в колонке таблицы (подсказка для рендерера)."""
    SOURCE_LOCATION = "source-location"  # file:line:column, кликабельная ссылка
    TEXT = "text"
    URL = "url"


class ScoringMode(Enum):
    """Политика вычисления оценки."""
    BINARY = "binary"              # Любое нарушение = полный провал
    PROPORTIONAL = "proportional"  # Доля записей без нарушений


@dataclass(frozen=True)
class SourceLocation:
    """Местоположение источника сообщения (url=None — неизвестно)."""

    url: Optional[str]
    line: int = 0
    column: int = 0
    # Позиция в исходном (не собранном) коде, если её нашёл source map
    original: Optional["SourceLocation"] = None

    @classmethod
    def unknown(cls) -> "SourceLocation":
        """Плейсхолдер для записи без разрешимого источника."""
        return cls(url=None)

    @property
    def is_unknown(self) -> bool:
        return self.url is None

    def key(self) -> Tuple[Optional[str], int, int]:
        """Ключ для дедупликации (по сгенерированной позиции)."""
        return (self.url, self.line, self.column)

    def display(self) -> str:
        """Строка вида url:line:column, с приоритетом исходной позиции."""
        if self.original is not None:
            return self.original.display()
        if self.url is None:
            return "Unknown"
        return f"{self.url}:{self.line}:{self.column}"

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON."""
        data: Dict[str, Any] = {
            "type": ItemType.SOURCE_LOCATION.value,
            "url": self.url,
            "line": self.line,
            "column": self.column,
        }
        if self.original is not None:
            data["original"] = {
                "file": self.original.url,
                "line": self.original.line,
                "column": self.original.column,
            }
        return data


@dataclass(frozen=True)
class DiagnosticRecord:
    """Сохранённое runtime-сообщение (console warning/error)."""

    message: Optional[str]
    url: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    script_id: Optional[str] = None
    source: Optional[str] = None  # "violation", "console.api", ...
    level: Optional[str] = None   # "warning", "error", ...


@dataclass(frozen=True)
class Script:
    """Скрипт страницы из таблицы сырых скриптов."""

    script_id: str
    url: Optional[str] = None


@dataclass(frozen=True)
class ViolationMatch:
    """Запись, совпавшая с сигнатурой. Текст сообщения не сохраняется."""

    source: SourceLocation

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source.to_dict()}


@dataclass(frozen=True)
class ColumnSpec:
    """Описание колонки таблицы деталей."""

    key: str
    item_type: ItemType
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "itemType": self.item_type.value, "text": self.text}


@dataclass(frozen=True)
class Table:
    """Таблица деталей аудита: заголовки и строки в исходном порядке."""

    headings: Tuple[ColumnSpec, ...]
    rows: Tuple[ViolationMatch, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "table",
            "headings": [h.to_dict() for h in self.headings],
            "items": [row.to_dict() for row in self.rows],
        }


@dataclass(frozen=True)
class AuditResult:
    """Результат одного аудита."""

    score: float
    details: Table

    @property
    def passed(self) -> bool:
        return self.score == 1

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON (контракт для сборщика отчёта)."""
        return {
            "score": self.score,
            "details": self.details.to_dict(),
        }


SignatureLike = Union[str, Pattern[str]]


@dataclass(frozen=True)
class AuditDefinition:
    """
    Конфигурация типа аудита.

    Аудиты отличаются только данными: сигнатурой, колонками,
    политикой скоринга и строками для отчёта.
    """

    id: str
    signature: SignatureLike
    headings: Tuple[ColumnSpec, ...]
    scoring_mode: ScoringMode = ScoringMode.BINARY
    dedupe: bool = False
    # None — принимать записи с любым source
    record_sources: Optional[FrozenSet[str]] = None
    # Версия сигнатуры: меняется вместе с формулировкой предупреждения в браузере
    signature_version: int = 1
    ui_strings: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DiagnosticSnapshot:
    """Неизменяемый снимок артефактов, собранных до запуска аудита."""

    records: Tuple[DiagnosticRecord, ...]
    scripts: Mapping[str, Script] = field(default_factory=dict)
    source_maps: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class AuditOutcome:
    """Результат запуска аудита раннером (с таймингом и ошибкой)."""

    audit_id: str
    result: Optional[AuditResult]
    duration_ms: float
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.error is None and self.result is not None and self.result.passed

    @property
    def violation_count(self) -> int:
        if self.result is None:
            return 0
        return len(self.result.details.rows)

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON."""
        return {
            "audit_id": self.audit_id,
            "passed": self.passed,
            "result": self.result.to_dict() if self.result is not None else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "details": self.details,
        }


@dataclass
class AuditReport:
    """Итоговый отчёт по всем запущенным аудитам."""

    timestamp: datetime
    outcomes: List[AuditOutcome]
    duration_seconds: float
    artifacts_path: Optional[str] = None

    @property
    def total_violations(self) -> int:
        return sum(o.violation_count for o in self.outcomes)

    def get_failed(self) -> List[AuditOutcome]:
        """Аудиты с нарушениями или ошибкой."""
        return [o for o in self.outcomes if not o.passed]

    def get_errored(self) -> List[AuditOutcome]:
        """Аудиты, которые не удалось выполнить."""
        return [o for o in self.outcomes if o.error is not None]

    def to_dict(self) -> Dict[str, Any]:
        """Преобразовать в словарь для JSON."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "artifacts_path": self.artifacts_path,
            "total_audits": len(self.outcomes),
            "failed_audits": len(self.get_failed()),
            "total_violations": self.total_violations,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "duration_seconds": self.duration_seconds,
        }
