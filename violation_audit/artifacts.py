"""
Loader for diagnostic snapshot artifacts.

Формат файла (JSON):
    {
      "ConsoleMessages": [{"text", "url", "lineNumber", "columnNumber",
                           "scriptId", "source", "level"}, ...],
      "Scripts": [{"scriptId", "url"}, ...],
      "SourceMaps": [{"scriptId", "map": {"sources", "segments"}}
                     | {"scriptId", "errorMessage"}, ...]
    }

Сбор артефактов в живом браузере сюда не входит: загрузчик
получает готовый снимок.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .core.errors import ArtifactMissingError
from .core.models import DiagnosticRecord, DiagnosticSnapshot, Script
from .core.source_maps import SourceMapError, TableSourceMap


logger = logging.getLogger(__name__)


REQUIRED_ARTIFACTS = ("ConsoleMessages",)


def _opt_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def parse_console_message(entry: Mapping[str, Any]) -> DiagnosticRecord:
    """Преобразовать console-сообщение артефакта в DiagnosticRecord."""
    message = entry.get("text") or entry.get("message")
    return DiagnosticRecord(
        message=message if isinstance(message, str) else None,
        url=_opt_str(entry.get("url")) or None,
        line=_opt_int(entry.get("lineNumber", entry.get("line"))),
        column=_opt_int(entry.get("columnNumber", entry.get("column"))),
        script_id=_opt_str(entry.get("scriptId")),
        source=_opt_str(entry.get("source")),
        level=_opt_str(entry.get("level")),
    )


def _parse_scripts(entries: List[Any]) -> Dict[str, Script]:
    scripts: Dict[str, Script] = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or entry.get("scriptId") is None:
            logger.warning(f"Skipping script entry without scriptId: {entry!r}")
            continue
        script_id = str(entry["scriptId"])
        scripts[script_id] = Script(
            script_id=script_id,
            url=_opt_str(entry.get("url")) or None,
        )
    return scripts


def _parse_source_maps(entries: List[Any]) -> Dict[str, TableSourceMap]:
    source_maps: Dict[str, TableSourceMap] = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or entry.get("scriptId") is None:
            logger.warning(f"Skipping source map entry without scriptId: {entry!r}")
            continue
        script_id = str(entry["scriptId"])

        if entry.get("errorMessage"):
            logger.warning(f"Source map for script {script_id} failed to load: {entry['errorMessage']}")
            continue

        try:
            source_maps[script_id] = TableSourceMap.from_dict(entry.get("map") or {})
        except SourceMapError as e:
            logger.warning(f"Invalid source map for script {script_id}: {e}")
    return source_maps


def _optional_table(data: Mapping[str, Any], name: str) -> List[Any]:
    """Необязательный артефакт: отсутствует или повреждён, значит пустая таблица."""
    value = data.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Ignoring {name} artifact: expected a list, got {type(value).__name__}")
        return []
    return value


def snapshot_from_dict(data: Mapping[str, Any]) -> DiagnosticSnapshot:
    """
    Построить снимок из словаря артефактов.

    Raises:
        ArtifactMissingError: нет обязательного артефакта
    """
    if not isinstance(data, Mapping):
        raise ArtifactMissingError("ConsoleMessages", "artifacts must be a JSON object")

    for name in REQUIRED_ARTIFACTS:
        if not isinstance(data.get(name), list):
            raise ArtifactMissingError(name)

    records = tuple(
        parse_console_message(entry) if isinstance(entry, Mapping) else DiagnosticRecord(message=None)
        for entry in data["ConsoleMessages"]
    )
    scripts = _parse_scripts(_optional_table(data, "Scripts"))
    source_maps = _parse_source_maps(_optional_table(data, "SourceMaps"))

    logger.info(
        f"Loaded snapshot: {len(records)} messages, "
        f"{len(scripts)} scripts, {len(source_maps)} source maps"
    )
    return DiagnosticSnapshot(records=records, scripts=scripts, source_maps=source_maps)


def load_snapshot(path: Union[str, Path]) -> DiagnosticSnapshot:
    """
    Загрузить снимок артефактов из JSON файла.

    Raises:
        ArtifactMissingError: файла нет или он не читается
    """
    path = Path(path)
    if not path.exists():
        raise ArtifactMissingError("ConsoleMessages", f"artifacts file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactMissingError("ConsoleMessages", f"cannot read {path}: {e}") from e

    return snapshot_from_dict(data)
