"""
Run Subcommand Module

Starts an environment validation, waits for it to finish and exports the
reported issues to '<name>.csv' and '<name>.json'.
"""

import asyncio
from typing import Optional

import click

from cli.error_handling import exit_on_error
from cli.help_texts import (
    MAX_ATTEMPTS_HELP,
    OUTPUT_DIR_HELP,
    OUTPUT_HELP,
    RUN_HELP,
    TIMEOUT_HELP,
)
from cli.shared_options import config_option, log_file_option, log_level_option
from validation_export.client import ManagementClient
from validation_export.config import ExportConfig
from validation_export.logging_config import logging_config
from validation_export.orchestrator import ValidationRunner


def load_config(config_path: Optional[str], log_level: Optional[str], log_file: Optional[str]) -> ExportConfig:
    """Load configuration and set up logging for a subcommand."""
    config = ExportConfig.load_from_yaml(config_path)
    if log_level:
        config.log_level = log_level.lower()

    logging_config.reset()
    logging_config.configure_logging(level=config.log_level, log_file=log_file)
    return config


@click.command(help=RUN_HELP)
@config_option()
@click.option('--output', '-o', default=None, help=OUTPUT_HELP)
@click.option('--output-dir', default=None, type=click.Path(file_okay=False), help=OUTPUT_DIR_HELP)
@click.option('--max-attempts', default=None, type=click.IntRange(min=1), help=MAX_ATTEMPTS_HELP)
@click.option('--timeout', default=None, type=click.FloatRange(min=0, min_open=True), help=TIMEOUT_HELP)
@log_level_option()
@log_file_option()
def run(
    config_path: Optional[str],
    output: Optional[str],
    output_dir: Optional[str],
    max_attempts: Optional[int],
    timeout: Optional[float],
    log_level: Optional[str],
    log_file: Optional[str],
):
    """Validate the environment and export its issues.

    Examples:
        # Use .kontent-validation/config.yaml and environment variables
        kontent-validation-export run

        # Custom export name, give up after 5 minutes
        kontent-validation-export run --output issues --timeout 300
    """
    with exit_on_error():
        config = load_config(config_path, log_level, log_file)
        if output:
            config.export_filename = output
        if output_dir:
            config.output_dir = output_dir
        if max_attempts is not None:
            config.max_attempts = max_attempts
        if timeout is not None:
            config.timeout = timeout

        logging_config.log_configuration_details(config.to_log_dict())
        config.validate()

        click.echo(click.style("Starting app", fg="green"))

        with ManagementClient(config.management) as client:
            runner = ValidationRunner.from_config(config, client)
            result = asyncio.run(runner.run())

        if not result.has_issues:
            click.echo(click.style("Success! No validation issues found", fg="green"))
            return

        click.echo(
            f"Validation finished with '{click.style(str(result.item_count), fg='yellow')}' "
            f"validation items ({result.record_count} issues)"
        )
        for path in result.written_files:
            click.echo(f"File '{click.style(str(path), fg='yellow')}' successfully created")
