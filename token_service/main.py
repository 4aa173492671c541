import functools
from pathlib import Path

import click
import structlog

from token_service import __version__
from token_service.exceptions import ConfigurationError, TokenServiceError
from token_service.services.token.app import serve
from token_service.token import TokenClient
from token_service.utils.configuration import ServiceConfig
from token_service.utils.logs import configure_logging

log = structlog.get_logger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def load_config(config_file: str) -> ServiceConfig:
    try:
        return ServiceConfig.from_file(config_file)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="'--config'") from e


def config_option(func):
    """Decorator for adding '--config' to subcommands, passing the loaded :class:`ServiceConfig`."""

    @click.option(
        "--config",
        "config_file",
        required=True,
        type=click.Path(exists=True, dir_okay=False),
        help="YAML file holding the service configuration.",
    )
    @functools.wraps(func)
    def wrapper(*args, config_file: str, **kwargs):
        return func(*args, config=load_config(config_file), **kwargs)

    return wrapper


def logging_options(func):
    """Decorator for adding '--log-file' and '--log-level' to subcommands."""

    @click.option(
        "--log-file",
        default=None,
        type=click.Path(dir_okay=False, path_type=Path),
        help="Additionally write JSON formatted logs to this file.",
    )
    @click.option(
        "--log-level",
        default="INFO",
        type=click.Choice(LOG_LEVELS, case_sensitive=False),
        show_default=True,
    )
    @functools.wraps(func)
    def wrapper(*args, log_file, log_level, **kwargs):
        configure_logging(log_level, log_file)
        return func(*args, **kwargs)

    return wrapper


@click.group(context_settings={"max_content_width": 120})
@click.version_option(__version__)
def main():
    """Deploy and operate the ERC20Test token contract over HTTP."""


@main.command(name="run")
@click.option("--host", default=None, help="Host to run the service on. Overrides the config.")
@click.option(
    "--port", default=None, type=int, help="Port to run the service on. Overrides the config."
)
@logging_options
@config_option
def run(config: ServiceConfig, host, port):
    """Serve the token API."""
    log.info("Starting token service", version=__version__)
    try:
        serve(config, host=host, port=port)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@main.command(name="deploy")
@logging_options
@config_option
def deploy(config: ServiceConfig):
    """Deploy a new ERC20Test contract and print its details."""
    try:
        client = TokenClient.from_config(config)
        token, receipt = client.deploy()
        info = token.info()
    except (ConfigurationError, TokenServiceError) as e:
        raise click.ClickException(f"Deployment failed: {e}") from e

    click.secho(f"Contract deployed to: {token.address}", fg="green")
    click.echo(f"Transaction hash: {receipt.tx_hash}")
    click.echo(f"Block number: {receipt.block_number}")
    click.echo(f"Name: {info['name']}")
    click.echo(f"Symbol: {info['symbol']}")
    click.echo(f"Decimals: {info['decimals']}")
