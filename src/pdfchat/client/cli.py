"""Command-line interface for pdfchat using Click."""

from pathlib import Path

import click
from dotenv import load_dotenv

from pdfchat.client.cli_helpers import (
    ensure_database_exists,
    format_search_result,
    get_database_info,
)
from pdfchat.constants import DEFAULT_TOP_K, get_collection_name, get_embedding_model
from pdfchat.errors import ConfigurationError, PdfChatError
from pdfchat.service.database import database_exists, delete_database
from pdfchat.service.factory import (
    build_answer_coordinator,
    build_embedding_client,
    build_ingestion_coordinator,
    build_vector_index,
    verify_embedding_setup,
)
from pdfchat.service.models import IngestionJob

# Load environment variables
load_dotenv()


@click.command()
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--enqueue",
    is_flag=True,
    default=False,
    help="Publish one ingestion job per PDF to the worker queue instead of ingesting here",
)
@click.option(
    "--create-database",
    "create_database_flag",
    is_flag=True,
    default=False,
    help="Create the RavenDB database if it doesn't exist",
)
def ingest(directory: Path, enqueue: bool, create_database_flag: bool) -> None:
    """Ingest PDF files from DIRECTORY into the vector index.

    Example:
        pdfchat-ingest documents/
        pdfchat-ingest documents/ --create-database
        pdfchat-ingest documents/ --enqueue
    """
    pdf_files = sorted(directory.glob("*.pdf"))
    if not pdf_files:
        click.echo(f"No PDF files found in '{directory}'")
        return

    click.echo(f"Found {len(pdf_files)} PDF file(s)")
    jobs = [
        IngestionJob(filename=path.name, destination=str(directory), path=str(path))
        for path in pdf_files
    ]

    if enqueue:
        from pdfchat.workers.queue import JobQueue

        queue = JobQueue()
        for job in jobs:
            job_id = queue.enqueue(job)
            click.echo(f"  ✓ Enqueued {job.filename} (job {job_id})")
        return

    ensure_database_exists(create_if_missing=create_database_flag)
    click.echo(f"Using embedding model: {get_embedding_model()}")
    click.echo(f"Collection: {get_collection_name()}\n")

    try:
        coordinator = build_ingestion_coordinator(verify=True)
    except ConfigurationError as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    total_chunks = 0
    failed = 0
    for job in jobs:
        try:
            result = coordinator.run(job)
        except PdfChatError as e:
            failed += 1
            click.echo(f"  ✗ Error processing {job.filename}: {e}", err=True)
            continue
        total_chunks += result.chunk_count
        click.echo(f"  ✓ Indexed {result.chunk_count} chunks from {job.filename}")

    click.echo(f"\n✓ Ingestion complete! Stored {total_chunks} chunks.")
    if failed:
        click.echo(f"✗ {failed} file(s) failed", err=True)
        raise click.Abort()


@click.command()
@click.argument("query", type=str)
@click.option(
    "--top-k",
    type=int,
    default=DEFAULT_TOP_K,
    help=f"Number of results to return (default: {DEFAULT_TOP_K})",
)
def search(query: str, top_k: int) -> None:
    """Search for the chunks most similar to QUERY.

    Example:
        pdfchat-search "quantum mechanics"
        pdfchat-search "machine learning" --top-k 5
    """
    ensure_database_exists()

    click.echo(f"🔍 Searching for: '{query}'")
    click.echo(f"   Returning top {top_k} results...\n")

    try:
        results = build_answer_coordinator(verify=False).search(query, top_k=top_k)
    except PdfChatError as e:
        click.echo(f"✗ Error: {e}", err=True)
        raise click.Abort()

    if not results:
        click.echo("No results found.")
        return

    click.echo(f"✅ Found {len(results)} result(s):\n")
    for i, result in enumerate(results, 1):
        click.echo(format_search_result(i, result))


@click.command()
@click.argument("query", type=str)
def ask(query: str) -> None:
    """Answer QUERY using the indexed documents as context.

    Example:
        pdfchat-ask "What is the main result of the paper?"
    """
    ensure_database_exists()

    try:
        answer = build_answer_coordinator(verify=False).answer(query)
    except PdfChatError as e:
        details = getattr(e, "details", None)
        click.echo(f"✗ Error: {e}" + (f" ({details})" if details else ""), err=True)
        raise click.Abort()

    click.echo(answer.message)
    if answer.docs:
        click.echo("\nSources:")
        for i, doc in enumerate(answer.docs, 1):
            click.echo(format_search_result(i, doc))


@click.command()
def count() -> None:
    """Show the number of chunk records in the vector index.

    Example:
        pdfchat-count
    """
    ensure_database_exists()
    collection = get_collection_name()
    index = build_vector_index()
    try:
        _, _, doc_count = get_database_info(index, collection)
    finally:
        index.close()

    if doc_count is None:
        click.echo("✗ Error counting documents", err=True)
        raise click.Abort()
    click.echo(f"📊 Collection '{collection}' contains {doc_count} chunk(s)")


@click.command()
@click.option(
    "--create-database",
    "create_database_flag",
    is_flag=True,
    default=False,
    help="Create the RavenDB database if it doesn't exist",
)
def init_index(create_database_flag: bool) -> None:
    """Create the vector index and check it against the embedding model.

    Example:
        pdfchat-init-index --create-database
    """
    ensure_database_exists(create_if_missing=create_database_flag)

    embedder = build_embedding_client()
    index = build_vector_index()
    try:
        verify_embedding_setup(embedder, index)
    except PdfChatError as e:
        click.echo(f"✗ {e}", err=True)
        raise click.Abort()
    finally:
        index.close()

    click.echo(
        f"✓ Vector index ready: {embedder.model} produces {embedder.dimensions}-dimensional vectors"
    )


@click.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation prompt")
def delete_db(yes: bool) -> None:
    """Delete the RavenDB database and all its contents.

    WARNING: This is irreversible and deletes all chunk records and indexes.
    Uploaded PDF files are left untouched.

    Example:
        pdfchat-delete-db          # Will prompt for confirmation
        pdfchat-delete-db --yes    # Skip confirmation
    """
    url, db_name, _ = get_database_info()

    if not database_exists():
        click.echo(f"✓ Database '{db_name}' does not exist at {url}")
        return

    if not yes:
        click.echo(f"⚠️  WARNING: You are about to delete the database '{db_name}'")
        click.echo(f"   Location: {url}\n")
        if not click.confirm("Are you sure you want to proceed?", default=False):
            click.echo("Deletion cancelled.")
            return

    click.echo(f"🗑️  Deleting database '{db_name}'...")
    try:
        delete_database()
    except Exception as e:
        click.echo(f"✗ Error deleting database: {e}", err=True)
        raise click.Abort()
    click.echo(f"✓ Database '{db_name}' successfully deleted!")
    click.echo("\nTo create a new database, run:")
    click.echo("  pdfchat-init-index --create-database")
