"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("familymeal.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_options(url: str) -> dict:
    """SQLite (used for local runs and tests) needs a shared in-process connection"""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **_engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True)


def init_database():
    """Initialize database schema and the fixed moment/tag catalog"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")

    db = SessionLocal()
    try:
        seed_defaults(db)
    finally:
        db.close()


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_defaults(db) -> int:
    """
    Insert the standard moments and planner tags that are missing.
    Returns the number of rows added; existing rows are left untouched.
    """
    from domain.enums import MomentName, StandardTag
    from domain.models.meal_plan import Moment
    from domain.models.recipe import Tag

    added = 0
    existing_moments = {m.name for m in db.query(Moment).all()}
    for order, name in enumerate(MomentName):
        if name.value not in existing_moments:
            db.add(Moment(name=name.value, sort_order=order))
            added += 1

    existing_tags = {t.name for t in db.query(Tag).all()}
    for tag in StandardTag:
        if tag.value not in existing_tags:
            db.add(Tag(name=tag.value))
            added += 1

    db.commit()
    if added:
        logger.info("Seeded %d catalog rows", added)
    return added
