"""critsplit CLI entry point: Click group with subcommands."""

import click

from critsplit import __version__


@click.group()
@click.version_option(version=__version__, prog_name="critsplit")
def cli() -> None:
    """critsplit - split stylesheets into critical and deferred CSS."""


from critsplit.cli.split import split  # noqa: E402
from critsplit.cli.inspect import inspect  # noqa: E402

cli.add_command(split)
cli.add_command(inspect)
