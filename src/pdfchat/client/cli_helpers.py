"""Helper functions for CLI commands."""

import logging

import click

from pdfchat.constants import CONTENT_PREVIEW_LENGTH, get_ravendb_database, get_ravendb_url
from pdfchat.service.database import create_database, database_exists

logger = logging.getLogger(__name__)


def ensure_database_exists(create_if_missing: bool = False, command: str = "pdfchat-init-index") -> bool:
    """Check if database exists, optionally create it.

    Args:
        create_if_missing: If True, attempt to create the database
        command: Command to suggest when the database is missing

    Returns:
        True if database exists (or was created)

    Raises:
        click.Abort: If database doesn't exist and can't be created
    """
    if database_exists():
        return True

    if create_if_missing:
        click.echo("Database does not exist. Creating database...")
        try:
            create_database()
        except Exception as e:
            click.echo(f"✗ Failed to create database: {e}", err=True)
            click.echo("\nPlease ensure RavenDB is running and accessible.", err=True)
            raise click.Abort()
        click.echo("✓ Database created successfully!")
        return True

    click.echo("✗ Error: Database does not exist!", err=True)
    click.echo("\nPlease create the database first using:", err=True)
    click.echo(f"  {command} --create-database", err=True)
    raise click.Abort()


def format_search_result(rank: int, result: dict, max_length: int = CONTENT_PREVIEW_LENGTH) -> str:
    """Format a retrieved chunk for display.

    Args:
        rank: Result number (1-based)
        result: Search result dict with score, source, chunk_index, content, metadata
        max_length: Maximum content length before truncation

    Returns:
        Formatted string for display
    """
    page = (result.get("metadata") or {}).get("page_number")
    location = f"chunk #{result.get('chunk_index')}"
    if page is not None:
        location += f", page {page}"

    content = " ".join(result.get("content", "").split())
    if len(content) > max_length:
        content = content[:max_length] + "..."

    return "\n".join(
        [
            f"{rank}. [{result.get('source', 'Unknown')} - {location}] "
            f"(score: {result.get('score', 0.0):.4f})",
            f"   {content}",
            "",
        ]
    )


def get_database_info(index=None, collection: str | None = None) -> tuple[str, str, int | None]:
    """Get database connection info and, when an index is given, its record count.

    Returns:
        Tuple of (url, database_name, record count or None if unavailable)
    """
    url = get_ravendb_url()
    db_name = get_ravendb_database()

    doc_count = None
    if index is not None and collection:
        try:
            doc_count = index.count(collection)
        except Exception as e:
            logger.debug(f"Could not count records in {collection}: {e}")

    return url, db_name, doc_count
