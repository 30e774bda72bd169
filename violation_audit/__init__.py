"""
Violation Audit

Оценка runtime-диагностики страницы по сигнатурам нежелательных предупреждений:
- Поиск совпадений в сохранённых console-сообщениях
- Разрешение источника через source maps
- Бинарный или пропорциональный скоринг
- Отчёты в Markdown и JSON

Usage:
    python -m violation_audit.main --artifacts artifacts.json
"""

from .audits.registry import get_audit, list_audits
from .core.evaluate import evaluate_audit
from .core.matcher import find_violations
from .core.scorer import score_violations

__version__ = "1.0.0"

__all__ = [
    "evaluate_audit",
    "find_violations",
    "get_audit",
    "list_audits",
    "score_violations",
]
