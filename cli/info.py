"""
Info Subcommand Module

Prints the project and environment the configured credentials point at,
without starting a validation.
"""

from typing import Optional

import click

from cli.error_handling import exit_on_error
from cli.help_texts import INFO_HELP
from cli.run import load_config
from cli.shared_options import config_option, log_level_option
from validation_export.client import ManagementClient


@click.command(help=INFO_HELP)
@config_option()
@log_level_option()
def info(config_path: Optional[str], log_level: Optional[str]):
    """Show project and environment identification."""
    with exit_on_error():
        config = load_config(config_path, log_level, None)
        config.validate()

        with ManagementClient(config.management) as client:
            environment = client.environment_information()

        click.echo(f"Project:     {click.style(environment.name, fg='yellow')}")
        click.echo(f"Environment: {click.style(environment.environment, fg='yellow')}")
        click.echo(f"Id:          {environment.id}")
