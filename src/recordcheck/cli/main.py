"""recordcheck CLI entry point."""

import logging

import click

from recordcheck.config import RecordCheckConfig


@click.group()
@click.pass_context
def cli(ctx: click.Context):
    """recordcheck: declarative record validation CLI."""
    config = RecordCheckConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = config


# Register subcommands
from recordcheck.cli.check_cmd import check  # noqa: E402
from recordcheck.cli.rules_cmd import predicates, rules  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
cli.add_command(predicates)
