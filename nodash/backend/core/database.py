"""
Database Configuration.

Builds the storage binding selected in database.yaml and exposes the
application's note repository to request handlers.
"""

from fastapi import Request

from nodash.backend.core.config import AppConfig, Settings, get_sqlite_path
from nodash.backend.core.logging import get_logger
from nodash.backend.db.binding import DbBinding
from nodash.backend.db.d1 import D1Binding
from nodash.backend.db.sqlite import SqliteBinding
from nodash.backend.repositories.note import NoteRepository

logger = get_logger(__name__)


def create_binding(app_config: AppConfig, settings: Settings) -> DbBinding:
    """
    Create the binding for the configured backend.

    Args:
        app_config: Loaded YAML configuration
        settings: Secrets (the D1 API token)

    Returns:
        An open DbBinding

    Raises:
        ValueError: If the d1 backend is selected without credentials
    """
    db_config = app_config.database

    if db_config.backend == "d1":
        d1 = db_config.d1
        binding: DbBinding = D1Binding(
            account_id=d1.account_id,
            database_id=d1.database_id,
            api_token=settings.cloudflare_api_token,
            api_base_url=d1.api_base_url,
            timeout=float(d1.timeout),
        )
    else:
        sqlite = db_config.sqlite
        binding = SqliteBinding(
            get_sqlite_path(),
            journal_mode=sqlite.journal_mode,
            echo=sqlite.echo,
        )

    logger.info("Database binding created", extra={"backend": binding.name})
    return binding


def get_note_repository(request: Request) -> NoteRepository:
    """
    Dependency that provides the application's note repository.

    The repository is created once per application (see main.lifespan)
    and shared by all requests.

    Usage in endpoints:
        @router.get("/notes")
        async def list_notes(repo: NoteRepo):
            ...
    """
    return request.app.state.notes
