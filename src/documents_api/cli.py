# cli.py
import logging

import click

from documents_api.dispatch import display_name
from documents_api.s3.client import create_s3_client
from documents_api.settings import get_settings
from documents_api.store import DocumentStore

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Documents API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  App Name: {settings.app_name}")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  Documents Prefix: {settings.documents_prefix}")
    click.echo(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Interface to bind")
@click.option("--port", default=8000, type=int, help="Port to listen on")
def serve(host, port):
    """Run the API locally with uvicorn"""
    import uvicorn

    from documents_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


@cli.command()
def list_documents():
    """List the documents stored in the configured bucket"""
    settings = get_settings()
    store = DocumentStore(create_s3_client(settings), settings.s3_bucket_name)

    documents = store.list(settings.documents_prefix)
    if not documents:
        click.echo("No documents found")
        return

    for item in documents:
        click.echo(f"{item.last_modified.isoformat()}  {item.size:>10}  {display_name(item.key)}  ({item.key})")


if __name__ == "__main__":
    cli()
