"""Rule-set and predicate commands."""

from pathlib import Path

import click

from recordcheck.cli.check_cmd import resolve_rules_path
from recordcheck.config import RecordCheckConfig
from recordcheck.loader import load_rule_set
from recordcheck.rules import check_rules
from recordcheck.runtime import default_registry
from recordcheck.types import RuleSetFileError


@click.group()
def rules():
    """Rule-set commands."""
    pass


@rules.command("check")
@click.option(
    "--rules",
    "rules_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Rule-set YAML/JSON file (defaults to RECORDCHECK_RULES).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat unknown rule names as errors.",
)
@click.pass_obj
def check_cmd(config: RecordCheckConfig, rules_path: Path | None, strict: bool):
    """Report rule names that have no registered predicate."""
    path = resolve_rules_path(config, rules_path)
    try:
        rule_set = load_rule_set(path)
    except RuleSetFileError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    unknown = sorted(check_rules(rule_set, default_registry()))
    for field_name, rule in unknown:
        click.echo(click.style(f"Unknown rule '{rule}' on field '{field_name}'", fg="yellow"))

    rule_count = sum(len(field_rules) for field_rules in rule_set.rules.values())
    click.echo(f"{len(rule_set.rules)} field(s), {rule_count} rule(s), {len(unknown)} unknown.")

    if unknown and (strict or config.strict):
        raise SystemExit(1)


@click.command()
def predicates():
    """List registered predicate names."""
    for name in default_registry().list_registered():
        click.echo(name)
