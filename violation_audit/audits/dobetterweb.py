"""
"Do better web" violation audits.

Каждый аудит — только данные: сигнатура предупреждения браузера,
колонки таблицы и строки для отчёта.
"""

import re

from ..core.models import AuditDefinition, ColumnSpec, ItemType, ScoringMode
from ..reports.strings import COMMON_STRINGS


SOURCE_HEADINGS = (
    ColumnSpec(key="source", item_type=ItemType.SOURCE_LOCATION, text=COMMON_STRINGS["columnSource"]),
)


PASSIVE_EVENT_LISTENERS = AuditDefinition(
    id="uses-passive-event-listeners",
    # Зависит от формулировки предупреждения Chrome: при её смене поднять signature_version
    signature=re.compile(r"passive event listener"),
    headings=SOURCE_HEADINGS,
    scoring_mode=ScoringMode.BINARY,
    ui_strings={
        "title": "Uses passive listeners to improve scrolling performance",
        "failureTitle": "Does not use passive listeners to improve scrolling performance",
        "description": (
            "Consider marking your touch and wheel event listeners as `passive` "
            "to improve your page's scroll performance. "
            "[Learn more about adopting passive event listeners]"
            "(https://web.dev/uses-passive-event-listeners/)."
        ),
    },
)


GEOLOCATION_ON_START = AuditDefinition(
    id="geolocation-on-start",
    signature=re.compile(r"geolocation"),
    headings=SOURCE_HEADINGS,
    ui_strings={
        "title": "Avoids requesting the geolocation permission on page load",
        "failureTitle": "Requests the geolocation permission on page load",
        "description": (
            "Users are mistrustful of or confused by sites that request their location "
            "without context. Consider tying the request to a user action instead. "
            "[Learn more about the geolocation permission]"
            "(https://developer.chrome.com/docs/lighthouse/best-practices/geolocation-on-start/)."
        ),
    },
)


NOTIFICATION_ON_START = AuditDefinition(
    id="notification-on-start",
    signature=re.compile(r"notification permission"),
    headings=SOURCE_HEADINGS,
    ui_strings={
        "title": "Avoids requesting the notification permission on page load",
        "failureTitle": "Requests the notification permission on page load",
        "description": (
            "Users are mistrustful of or confused by sites that request to send "
            "notifications without context. Consider tying the request to user "
            "gestures instead. [Learn more about responsibly getting permission for "
            "notifications](https://developer.chrome.com/docs/lighthouse/best-practices/notification-on-start/)."
        ),
    },
)
