"""
Shared FastAPI dependencies for the routers.
"""

from fastapi import BackgroundTasks, Request

from employee_records.models.base import get_database
from employee_records.services.audit_service import AuditRecorder


def get_audit_recorder(
    request: Request, background_tasks: BackgroundTasks
) -> AuditRecorder:
    """
    Audit recorder bound to this request.

    Writes are queued as background tasks, so they run after the
    response is sent and on their own session.
    """
    database = get_database(request)
    return AuditRecorder(
        database.session_factory, schedule=background_tasks.add_task
    )
