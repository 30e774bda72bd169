"""
Source map lookup for resolving generated-code positions.

Декодирование VLQ-маппингов не входит в задачи движка: сюда приходят
уже разобранные сегменты (generated line/column → source/line/column).
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .errors import ViolationAuditError


logger = logging.getLogger(__name__)


class SourceMapError(ViolationAuditError):
    """Source map повреждён или не может быть построен."""
    pass


@dataclass(frozen=True)
class MappedPosition:
    """Позиция в исходном файле."""

    source: str
    line: int
    column: int


class SourceMap(Protocol):
    """Интерфейс source map: всё, что нужно матчеру."""

    def lookup(self, line: int, column: int) -> Optional[MappedPosition]:
        """Найти исходную позицию для сгенерированной (line, column)."""
        ...


class TableSourceMap:
    """
    Source map поверх таблицы уже декодированных сегментов.

    Сегмент: (generated_line, generated_column, source_index,
    original_line, original_column).

    lookup() возвращает последний сегмент на той же строке, чья колонка
    не больше запрошенной.
    """

    def __init__(self, sources: Sequence[str], segments: Sequence[Sequence[int]]):
        self.sources = list(sources)
        self._lines: Dict[int, List[Tuple[int, int, int, int]]] = {}

        for segment in segments:
            try:
                if len(segment) != 5:
                    raise SourceMapError(f"Segment must have 5 fields, got {len(segment)}: {segment!r}")
                gen_line, gen_col, src_idx, orig_line, orig_col = (int(v) for v in segment)
            except (TypeError, ValueError) as e:
                raise SourceMapError(f"Malformed segment {segment!r}: {e}") from e
            if not 0 <= src_idx < len(self.sources):
                raise SourceMapError(f"Source index {src_idx} out of range ({len(self.sources)} sources)")
            self._lines.setdefault(gen_line, []).append((gen_col, src_idx, orig_line, orig_col))

        for entries in self._lines.values():
            entries.sort()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TableSourceMap":
        """Построить из {"sources": [...], "segments": [[...], ...]}."""
        if not isinstance(data, Mapping):
            raise SourceMapError(f"Source map must be an object, got {type(data).__name__}")
        sources = data.get("sources")
        segments = data.get("segments")
        if not isinstance(sources, list) or not isinstance(segments, list):
            raise SourceMapError("Source map requires 'sources' and 'segments' lists")
        return cls(sources, segments)

    def lookup(self, line: int, column: int) -> Optional[MappedPosition]:
        entries = self._lines.get(line)
        if not entries:
            return None

        columns = [entry[0] for entry in entries]
        idx = bisect.bisect_right(columns, column) - 1
        if idx < 0:
            return None

        _, src_idx, orig_line, orig_col = entries[idx]
        return MappedPosition(source=self.sources[src_idx], line=orig_line, column=orig_col)
