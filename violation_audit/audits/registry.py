"""
Registry of known audit definitions.
"""

from typing import Dict, List

from ..core.errors import UnknownAuditError
from ..core.models import AuditDefinition
from .dobetterweb import GEOLOCATION_ON_START, NOTIFICATION_ON_START, PASSIVE_EVENT_LISTENERS


_REGISTRY: Dict[str, AuditDefinition] = {
    definition.id: definition
    for definition in (PASSIVE_EVENT_LISTENERS, GEOLOCATION_ON_START, NOTIFICATION_ON_START)
}


def get_audit(audit_id: str) -> AuditDefinition:
    """Получить определение аудита по id."""
    try:
        return _REGISTRY[audit_id]
    except KeyError:
        raise UnknownAuditError(audit_id) from None


def list_audits() -> List[AuditDefinition]:
    """Все зарегистрированные аудиты в порядке регистрации."""
    return list(_REGISTRY.values())
