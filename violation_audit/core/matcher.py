"""
Violation matcher.

Фильтрует сохранённые диагностические записи по сигнатуре и
разрешает их источник:
- url записи, иначе url скрипта-владельца, иначе "unknown"
- исходная позиция через source map, если он есть для скрипта
"""

import logging
import re
from typing import (
    AbstractSet,
    Any,
    List,
    Mapping,
    Optional,
    Pattern,
    Sequence,
    Set,
    Tuple,
)

from .models import DiagnosticRecord, Script, SignatureLike, SourceLocation, ViolationMatch


logger = logging.getLogger(__name__)


def _compile(signature: SignatureLike) -> Pattern[str]:
    if isinstance(signature, str):
        return re.compile(signature)
    return signature


def _is_match(pattern: Pattern[str], record: DiagnosticRecord) -> bool:
    """Проверить сообщение записи (без учёта позиции в строке)."""
    message = getattr(record, "message", None)
    if not isinstance(message, str):
        logger.debug(f"Skipping malformed diagnostic record without message: {record!r}")
        return False
    return pattern.search(message) is not None


def resolve_location(
    record: DiagnosticRecord,
    source_maps: Optional[Mapping[str, Any]] = None,
    scripts: Optional[Mapping[str, Script]] = None,
) -> SourceLocation:
    """
    Разрешить источник записи.

    Ошибка source map не прерывает аудит: возвращается позиция
    без маппинга.

    Args:
        record: Диагностическая запись
        source_maps: script_id → объект с методом lookup(line, column)
        scripts: script_id → Script

    Returns:
        SourceLocation (url=None, если источник неизвестен)
    """
    url = record.url
    script_id = record.script_id

    if not url and script_id is not None and scripts:
        script = scripts.get(script_id)
        if script is not None and script.url:
            url = script.url

    if not url:
        return SourceLocation.unknown()

    line = record.line or 0
    column = record.column or 0
    location = SourceLocation(url=url, line=line, column=column)

    if script_id is None or not source_maps:
        return location

    source_map = source_maps.get(script_id)
    if source_map is None:
        return location

    try:
        mapped = source_map.lookup(line, column)
    except Exception as e:
        logger.warning(
            f"Source map lookup failed for script {script_id} at {url}:{line}:{column}: "
            f"{type(e).__name__}: {e}"
        )
        return location

    if mapped is None:
        return location

    original = SourceLocation(url=mapped.source, line=mapped.line, column=mapped.column)
    return SourceLocation(url=url, line=line, column=column, original=original)


def find_violations(
    signature: SignatureLike,
    records: Sequence[DiagnosticRecord],
    *,
    source_maps: Optional[Mapping[str, Any]] = None,
    scripts: Optional[Mapping[str, Script]] = None,
    dedupe: bool = False,
    record_sources: Optional[AbstractSet[str]] = None,
) -> List[ViolationMatch]:
    """
    Найти записи, совпавшие с сигнатурой нарушения.

    Порядок совпадений совпадает с порядком записей на входе.

    Args:
        signature: Регулярное выражение (re.search, с учётом регистра)
        records: Записи диагностики (только чтение)
        source_maps: script_id → source map
        scripts: script_id → Script
        dedupe: Отбрасывать повторы по (url, line, column)
        record_sources: Допустимые значения record.source (None — любые)

    Returns:
        Список ViolationMatch
    """
    pattern = _compile(signature)
    matches: List[ViolationMatch] = []
    seen: Set[Tuple[Optional[str], int, int]] = set()

    for record in records:
        if record_sources is not None and getattr(record, "source", None) not in record_sources:
            continue
        if not _is_match(pattern, record):
            continue

        location = resolve_location(record, source_maps=source_maps, scripts=scripts)

        if dedupe:
            key = location.key()
            if key in seen:
                continue
            seen.add(key)

        matches.append(ViolationMatch(source=location))

    logger.debug(f"Signature {pattern.pattern!r}: {len(matches)} of {len(records)} records matched")
    return matches
