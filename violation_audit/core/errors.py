"""
Exceptions raised by the audit engine.
"""


class ViolationAuditError(Exception):
    """Базовая ошибка системы аудита."""
    pass


class ArtifactMissingError(ViolationAuditError):
    """Снимок диагностики или обязательный артефакт отсутствует."""

    def __init__(self, artifact: str, reason: str = ""):
        self.artifact = artifact
        self.reason = reason
        message = f"Required artifact missing: {artifact}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnknownAuditError(ViolationAuditError):
    """Аудит с таким id не зарегистрирован."""

    def __init__(self, audit_id: str):
        self.audit_id = audit_id
        super().__init__(f"Unknown audit: {audit_id}")
