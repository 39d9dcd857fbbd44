"""
Audit recorder — best-effort, append-only access trail.

The entry is written with its own session, never the session
of the operation being audited, so an audit failure cannot
roll back or fail that operation. In the HTTP path the write is
handed to FastAPI's BackgroundTasks and runs after the response
has been sent; failures are only visible in the logs.
"""

import logging
from typing import Any, Callable

from sqlalchemy.orm import Session, sessionmaker

from employee_records.errors import AuditError
from employee_records.models.audit_log import AuditLog
from employee_records.models.enums import AuditAction, AuditTargetType

logger = logging.getLogger("employee_records.audit")


class AuditRecorder:
    """
    Appends AuditLog rows.

    schedule, when given, receives (func, *args) and decides when
    the write runs (BackgroundTasks.add_task in the API). Without
    it the write happens inline, which is what service-level
    callers and tests use.
    """

    def __init__(
        self,
        session_factory: sessionmaker | Callable[[], Session],
        schedule: Callable[..., Any] | None = None,
    ):
        self.session_factory = session_factory
        self.schedule = schedule

    def record(
        self,
        actor_id: int,
        action: AuditAction,
        target_type: AuditTargetType,
        target_id: int,
        meta: dict[str, Any] | None = None,
    ) -> None:
        """Queue one entry. Never raises."""
        entry = {
            "user_id": actor_id,
            "action": action,
            "target_type": target_type,
            "target_id": target_id,
            "meta": meta,
        }
        if self.schedule is None:
            self.write(entry)
            return
        try:
            self.schedule(self.write, entry)
        except Exception:
            logger.exception(
                "audit_log_schedule_failed",
                extra={"action": action.value, "actor_id": actor_id},
            )

    def write(self, entry: dict[str, Any]) -> None:
        """Persist one entry, logging and swallowing any failure."""
        try:
            self._persist(entry)
        except Exception:
            logger.exception(
                "audit_log_write_failed",
                extra={
                    "action": entry["action"].value,
                    "actor_id": entry["user_id"],
                    "target_type": entry["target_type"].value,
                    "target_id": entry["target_id"],
                },
            )
            return

        logger.info(
            "audit_event",
            extra={
                "action": entry["action"].value,
                "actor_id": entry["user_id"],
                "target_type": entry["target_type"].value,
                "target_id": entry["target_id"],
                "meta": entry["meta"] or {},
            },
        )

    def _persist(self, entry: dict[str, Any]) -> None:
        try:
            session = self.session_factory()
        except Exception as exc:
            raise AuditError("could not open audit session") from exc

        try:
            session.add(AuditLog(**entry))
            session.commit()
        except Exception as exc:
            session.rollback()
            raise AuditError("could not write audit entry") from exc
        finally:
            session.close()


def list_target_id(items: list, actor_id: int) -> int:
    """
    Target id logged for a list read: the first result, or the
    caller's own id when the result is empty.
    """
    if items:
        return items[0].id
    return actor_id
