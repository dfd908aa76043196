#!/usr/bin/env python3
"""
Linear Test Case Generator

Resolve Linear tickets (or take a typed description) and generate Japanese
test cases as CSV rows with an OpenAI model.
"""

import click
import logging
import sys

from casegen.config import Config
from casegen.identifiers import parse_issue_inputs
from casegen.models import GenerationRequest
from casegen.pipeline import GenerationError, TestCaseGenerator


def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO

    # Logs go to stderr so that generated CSV on stdout can be piped
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.addHandler(console_handler)

    # Reduce noise from external libraries
    for name in ('requests', 'urllib3', 'openai', 'httpx'):
        logging.getLogger(name).setLevel(logging.WARNING)


@click.group()
@click.option('--config', '-c', default=None, help='Configuration file path (default: config.yaml or $CASEGEN_CONFIG)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Linear Test Case Generator"""
    setup_logging(verbose)

    try:
        ctx.obj = Config(config)
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('issue_ids', nargs=-1)
@click.option('--description', '-d', default=None, help='Free-text description (skips Linear lookup)')
@click.option('--cases', '-n', type=click.IntRange(min=1), default=None, help='Exact number of test cases')
@click.option('--model', '-m', default=None, help='OpenAI model (default from config)')
@click.option('--openai-api-key', default=None, help='Override OPENAI_API_KEY')
@click.option('--linear-api-key', default=None, help='Override LINEAR_API_KEY')
@click.option('--no-header', is_flag=True, help='Print CSV rows without the header line')
@click.pass_context
def generate(ctx, issue_ids, description, cases, model, openai_api_key, linear_api_key, no_header):
    """Generate CSV test cases for ISSUE_IDS or a description"""
    config = ctx.obj

    request = GenerationRequest(
        identifiers=parse_issue_inputs(list(issue_ids)),
        description=(description or "").strip(),
        model=model or config.default_model,
        cases=cases
    )
    credentials = config.resolve_credentials(openai_api_key=openai_api_key, linear_api_key=linear_api_key)

    try:
        result = TestCaseGenerator(config).generate(request, credentials)
    except GenerationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not no_header:
        click.echo(result.header)
    if result.csv:
        click.echo(result.csv)


@cli.command()
@click.argument('issue_ids', nargs=-1, required=True)
@click.option('--linear-api-key', default=None, help='Override LINEAR_API_KEY')
@click.pass_context
def resolve(ctx, issue_ids, linear_api_key):
    """Print the combined Linear description for ISSUE_IDS"""
    config = ctx.obj
    credentials = config.resolve_credentials(linear_api_key=linear_api_key)
    if not credentials.linear_api_key:
        click.echo("Error: LINEAR_API_KEY is required to fetch from Linear.", err=True)
        sys.exit(1)

    identifiers = parse_issue_inputs(list(issue_ids))
    if not identifiers:
        click.echo("Error: no identifiers given.", err=True)
        sys.exit(1)

    result = TestCaseGenerator(config).create_aggregator(credentials.linear_api_key).aggregate(identifiers)
    if not result.success:
        click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)

    click.echo(result.description)


@cli.command(name='env-status')
@click.pass_context
def env_status(ctx):
    """Show whether default credentials are configured"""
    config = ctx.obj
    click.echo(f"OpenAI API key: {'✅ configured' if config.has_openai_key else '❌ not set'}")
    click.echo(f"Linear API key: {'✅ configured' if config.has_linear_key else '❌ not set'}")
    click.echo(f"Default model:  {config.default_model}")


@cli.command()
@click.option('--host', default='0.0.0.0', help='Bind address')
@click.option('--port', default=8000, type=int, help='Bind port')
@click.option('--reload', is_flag=True, help='Reload on code changes (development)')
def serve(host, port, reload):
    """Run the HTTP API with uvicorn"""
    import uvicorn
    uvicorn.run("api.main:app", host=host, port=port, reload=reload, log_level="info")


if __name__ == '__main__':
    cli()
