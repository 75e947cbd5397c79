"""
API dependencies for dependency injection
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from domain.models import get_db_session
from services.planner_service import PlannerService


def get_db() -> Generator[Session, None, None]:
    """Database session dependency for FastAPI routes."""
    yield from get_db_session()


def get_planner_service(db: Session = Depends(get_db)) -> PlannerService:
    """
    Planner bound to the request's session.

    Usage:
        @router.post("/example")
        def example(service: PlannerService = Depends(get_planner_service)):
            ...
    """
    return PlannerService(db)
