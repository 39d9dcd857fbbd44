"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request):
    """
    Return application health status including database connectivity.

    Does not go through get_db, so it still answers (with
    "degraded") while the database is down.
    """
    database = getattr(request.app.state, "database", None)
    if database is not None and database.is_connected():
        db_status = "healthy"
    else:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "employee-records",
        "database": db_status,
    }
