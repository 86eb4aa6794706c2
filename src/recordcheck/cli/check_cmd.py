"""Record check command."""

from pathlib import Path

import click

from recordcheck.config import RecordCheckConfig
from recordcheck.loader import load_record, load_rule_set
from recordcheck.notify import NotifierChain, echo_notifier
from recordcheck.types import RuleSetFileError
from recordcheck.validator import RecordValidator


def resolve_rules_path(config: RecordCheckConfig, rules_path: Path | None) -> Path:
    """Pick the --rules option, falling back to RECORDCHECK_RULES."""
    path = rules_path or config.rules_path
    if path is None:
        raise click.UsageError("No rule set given. Pass --rules or set RECORDCHECK_RULES.")
    return path


@click.command()
@click.argument("record_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--rules",
    "rules_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Rule-set YAML/JSON file (defaults to RECORDCHECK_RULES).",
)
@click.pass_obj
def check(config: RecordCheckConfig, record_path: Path, rules_path: Path | None):
    """Validate a YAML/JSON record against a rule set."""
    path = resolve_rules_path(config, rules_path)
    try:
        rule_set = load_rule_set(path)
        record = load_record(record_path)
    except RuleSetFileError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    validator = RecordValidator.from_rule_set(
        rule_set, notifiers=NotifierChain(fallback=echo_notifier)
    )
    if validator.check_data(record):
        click.echo(click.style("Record is valid.", fg="green", bold=True))
        return
    click.echo(click.style("Record is invalid.", fg="red", bold=True))
    raise SystemExit(1)
