"""
CLI Package for Environment Validation Export

The main entry point is the main() click group; each subcommand lives in its
own module. The cli() function is the console script entry point for
setup.py.
"""

import os
import click
from dotenv import load_dotenv

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')

from .run import run
from .info import info


@click.group()
@click.version_option(version='1.0.0', prog_name='kontent-validation-export')
def main():
    """Validate a Kontent.ai environment and export the issues it reports.

    Credentials come from KONTENT_ENVIRONMENT_ID and KONTENT_MANAGEMENT_API_KEY
    (or a .env file), or from .kontent-validation/config.yaml.
    """
    pass


main.add_command(run)
main.add_command(info)


def cli():
    """Console script entry point."""
    main()
