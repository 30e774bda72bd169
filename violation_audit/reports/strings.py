"""
UI strings for reports.

Шаблоны хранятся как ключ → строка и разрешаются только здесь,
при сборке отчёта. Плейсхолдеры в формате str.format: {count}.
"""

import logging
from typing import Any, Mapping

from ..core.models import AuditDefinition


logger = logging.getLogger(__name__)


COMMON_STRINGS: Mapping[str, str] = {
    "columnSource": "Source",
    "displayValueViolations": "{count} violations found",
    "displayValueViolation": "1 violation found",
    "auditErrored": "Audit error: {error}",
}


def get_string(definition: AuditDefinition, key: str, **values: Any) -> str:
    """
    Разрешить строку аудита (с откатом на общие строки).

    Неизвестный ключ возвращается как есть, чтобы отчёт не падал.
    """
    template = definition.ui_strings.get(key)
    if template is None:
        template = COMMON_STRINGS.get(key)
    if template is None:
        logger.warning(f"Missing UI string {key!r} for audit {definition.id}")
        return key
    if not values:
        return template
    try:
        return template.format(**values)
    except (KeyError, IndexError) as e:
        logger.warning(f"Cannot format UI string {key!r} for {definition.id}: {e}")
        return template


def audit_title(definition: AuditDefinition, passed: bool) -> str:
    """Заголовок аудита в зависимости от результата."""
    return get_string(definition, "title" if passed else "failureTitle")


def display_value(count: int) -> str:
    """Краткое описание количества нарушений."""
    if count == 1:
        return COMMON_STRINGS["displayValueViolation"]
    return COMMON_STRINGS["displayValueViolations"].format(count=count)
