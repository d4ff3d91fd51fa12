"""CLI application for TF-IDF administration"""
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from tfidf_store import SETTINGS

from .api_client import GatewayClient, run_async
from .db_utils import (
    collect_text_files,
    drop_all_tables,
    get_corpus,
    get_database_stats,
    ingest_documents,
    init_database,
)


def _print_siblings(documents: List[dict]):
    """Print ``[{id, title, siblings: [{id, similarity}]}]``"""
    titles = {doc["id"]: doc["title"] for doc in documents}
    for doc in documents:
        click.echo(f"\n{doc['title']} (id={doc['id']})")
        if not doc["siblings"]:
            click.echo("   sibling: none")
        for sibling in doc["siblings"]:
            name = titles.get(sibling["id"], sibling["id"])
            click.echo(f"   {sibling['similarity']:.4f}  {name}")


def _corpus_to_dicts(corpus) -> List[dict]:
    return [
        {
            "id": doc.id,
            "title": doc.title,
            "siblings": [
                {"id": s.document_id, "similarity": s.similarity} for s in doc.siblings
            ],
        }
        for doc in corpus
    ]


@click.group()
@click.version_option(version="0.1.0")
@click.option('--database-url', envvar='DATABASE_URL', default=None,
              help='Database URL (defaults to DATABASE_URL)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, database_url: Optional[str], verbose: bool):
    """TF-IDF CLI - Administration and maintenance tools"""
    logging.basicConfig(level=logging.DEBUG if verbose else SETTINGS.log_level)
    ctx.ensure_object(dict)
    ctx.obj['database_url'] = database_url


@cli.group()
def db():
    """Database management commands"""
    pass


@db.command()
@click.pass_context
def init(ctx):
    """Initialize database schema"""
    click.echo("Initializing database...")
    try:
        run_async(init_database(ctx.obj['database_url']))
        click.echo("✓ Database initialized successfully")
    except Exception as e:
        click.echo(f"✗ Error initializing database: {e}", err=True)
        sys.exit(1)


@db.command()
@click.option('--confirm', is_flag=True, help='Confirm reset')
@click.pass_context
def reset(ctx, confirm):
    """Reset database (destructive)"""
    if not confirm:
        click.echo("⚠ This will delete all data. Use --confirm to proceed.")
        return

    click.echo("Resetting database...")
    try:
        run_async(drop_all_tables(ctx.obj['database_url']))
        run_async(init_database(ctx.obj['database_url']))
        click.echo("✓ Database reset successfully")
    except Exception as e:
        click.echo(f"✗ Error resetting database: {e}", err=True)
        sys.exit(1)


@db.command()
@click.pass_context
def stats(ctx):
    """Show database statistics"""
    click.echo("Database Statistics")
    click.echo("=" * 40)
    try:
        stats = run_async(get_database_stats(ctx.obj['database_url']))
        click.echo(f"Documents:    {stats['documents']}")
        click.echo(f"Words:        {stats['words']}")
        click.echo(f"Counters:     {stats['counters']}")
    except Exception as e:
        click.echo(f"✗ Error getting stats: {e}", err=True)
        sys.exit(1)


@cli.group()
def documents():
    """Document management"""
    pass


@documents.command()
@click.argument('title')
@click.option('--file', 'file_path', type=click.Path(exists=True, dir_okay=False),
              help='Read content from a file')
@click.option('--text', help='Content given inline')
def push(title: str, file_path: Optional[str], text: Optional[str]):
    """Push a document to the gateway"""
    if (file_path is None) == (text is None):
        click.echo("✗ Give exactly one of --file or --text", err=True)
        sys.exit(2)

    if file_path:
        content = Path(file_path).read_text(encoding='utf-8', errors='ignore')
    else:
        content = text

    try:
        client = GatewayClient()
        response = run_async(client.push_document(title, content))
        click.echo(f"✓ Pushed \"{title}\" ({response.get('message', '')})")
        _print_siblings(response.get('documents', []))
    except Exception as e:
        click.echo(f"✗ Error pushing document: {e}", err=True)
        sys.exit(1)


@documents.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--recursive', is_flag=True, help='Process directories recursively')
@click.pass_context
def ingest(ctx, path: str, recursive: bool):
    """Ingest .txt/.md files into the local store (file stem is the title)"""
    click.echo(f"Ingesting documents from {path}...")

    files = collect_text_files(Path(path), recursive=recursive)
    if not files:
        click.echo("No documents found to ingest.")
        return

    pairs = []
    for file_path in files:
        try:
            pairs.append((file_path.stem, file_path.read_text(encoding='utf-8', errors='ignore')))
        except OSError as e:
            click.echo(f"Warning: Could not read {file_path}: {e}")

    try:
        corpus, added = run_async(ingest_documents(pairs, ctx.obj['database_url']))
        click.echo(
            f"✓ Read {len(pairs)} files, {added} new documents, corpus size {len(corpus)}"
        )
    except Exception as e:
        click.echo(f"✗ Error ingesting documents: {e}", err=True)
        sys.exit(1)


@documents.command()
@click.pass_context
def siblings(ctx):
    """Show every document's ranked siblings"""
    try:
        corpus = run_async(get_corpus(ctx.obj['database_url']))
    except Exception as e:
        click.echo(f"✗ Error computing siblings: {e}", err=True)
        sys.exit(1)

    if not corpus:
        click.echo("No documents found.")
        return
    _print_siblings(_corpus_to_dicts(corpus))


@cli.command()
def health():
    """Check gateway health"""
    try:
        result = run_async(GatewayClient().health_check())
        click.echo(f"✓ Gateway {result.get('status', 'unknown')}")
    except Exception as e:
        click.echo(f"✗ Gateway unreachable: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
