from datetime import date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from turmas.models.audit import AuditLog


def log_action(
    db: Session,
    *,
    actor_user_id: UUID | None,
    action: str,
    entity_type: str,
    entity_id: UUID | None = None,
    status: str = 'success',
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> AuditLog:
    audit = AuditLog(
        actor_user_id=actor_user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        status=status,
        details_json=_json_safe(details or {}),
        ip_address=ip_address,
    )
    db.add(audit)
    db.flush()
    return audit


def _json_safe(value: Any) -> Any:
    """
    Convert UUIDs and dates into JSON-friendly strings, recursing into containers.
    """
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(v) for v in value]
    return value


def log_student_access(db: Session, *, student_id: UUID | None, ip_address: str | None, success: bool) -> AuditLog:
    # Access codes are credentials; only their outcome is recorded.
    return log_action(
        db,
        actor_user_id=student_id,
        action='student_access',
        entity_type='student_access',
        entity_id=student_id,
        status='success' if success else 'failure',
        ip_address=ip_address,
    )
