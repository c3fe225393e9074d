"""
Startup schema manager.

Creates missing tables, then adds any model column the live database lacks.
Only additive changes are made: columns are never dropped or renamed, so the
same code can run against a fresh file or a database created by an older
release. Safe to run on every start (idempotent).
"""

import structlog
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import Column

from core.database import Base
from core.exceptions import SchemaError

# registers every table on Base.metadata
from models import flashcard, image, llm_interaction, study_progress  # noqa: F401

logger = structlog.get_logger(__name__)

REQUIRED_TABLES = (
    "images",
    "llm_interactions",
    "interaction_images",
    "flashcard_sets",
    "flashcards",
    "study_progress",
)


def ensure_tables(engine: Engine) -> None:
    Base.metadata.create_all(engine)


def _column_ddl(engine: Engine, column: Column) -> str | None:
    col_type = column.type.compile(dialect=engine.dialect)
    ddl = f"{column.name} {col_type}"
    default = column.server_default.arg if column.server_default is not None else None
    if default is not None:
        if isinstance(default, str):
            default_sql = f"'{default}'"
        else:
            default_sql = str(default.compile(dialect=engine.dialect))
        ddl += f" DEFAULT {default_sql}"
    if not column.nullable:
        if default is None:
            # SQLite cannot add a NOT NULL column without a default
            return None
        ddl += " NOT NULL"
    return ddl


def add_missing_columns(engine: Engine) -> list[str]:
    added: list[str] = []
    inspector = inspect(engine)
    for table in Base.metadata.sorted_tables:
        if not inspector.has_table(table.name):
            continue
        existing = {col["name"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing:
                continue
            ddl = _column_ddl(engine, column)
            if ddl is None:
                logger.warning("migration_column_skipped", table=table.name, column=column.name)
                continue
            try:
                with engine.begin() as conn:
                    conn.execute(text(f"ALTER TABLE {table.name} ADD COLUMN {ddl}"))
            except SQLAlchemyError:
                logger.exception("migration_column_failed", table=table.name, column=column.name)
                continue
            logger.info("migration_column_added", table=table.name, column=column.name)
            added.append(f"{table.name}.{column.name}")
    return added


def run_migrations(engine: Engine) -> list[str]:
    """Bring the schema up to date and return the columns that were added."""
    try:
        ensure_tables(engine)
    except SQLAlchemyError:
        logger.exception("migration_create_tables_failed")

    inspector = inspect(engine)
    missing = [name for name in REQUIRED_TABLES if not inspector.has_table(name)]
    if missing:
        raise SchemaError(f"Required tables are missing: {', '.join(missing)}")

    return add_missing_columns(engine)
