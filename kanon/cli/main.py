"""Kanon CLI entry point.

Commands:
    kanon lint PATH...   Lint JavaScript files or directories
    kanon rules          List builtin rules
"""

from __future__ import annotations

import json
import sys
from typing import Any

import click

from kanon import __version__
from kanon.config import load_config, normalize_rule_config
from kanon.formatters import FORMATTERS
from kanon.linter import Linter
from kanon.rules import BUILTIN_RULES
from kanon.types.errors import KanonError
from kanon.utils.logger import configure_logging, logger


def _parse_rule_option(value: str) -> tuple[str, Any]:
    """Parse ``ID=JSON`` (a bare severity name needs no quoting)."""
    rule_id, sep, raw = value.partition("=")
    if not sep or not rule_id.strip():
        raise click.BadParameter(f"expected RULE=CONFIG, got {value!r}", param_hint="--rule")
    try:
        setting = json.loads(raw)
    except json.JSONDecodeError:
        setting = raw.strip()
    return rule_id.strip(), setting


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="Kanon", message="%(prog)s v%(version)s")
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Kanon - rule checks for JavaScript source units."""
    configure_logging(debug)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option("--config", "-c", "config_path", type=click.Path(), help="JSON config file with a 'rules' object.")
@click.option("--rule", "rule_options", multiple=True, help="Rule setting as ID=JSON, e.g. 'max-lines=[\"error\", 200]'.")
@click.option("--format", "-f", "output_format", type=click.Choice(sorted(FORMATTERS)), default="text", show_default=True)
def lint(paths: tuple[str, ...], config_path: str | None, rule_options: tuple[str, ...], output_format: str) -> None:
    """Lint JavaScript files and directories."""
    try:
        rules: dict[str, Any] = dict(load_config(config_path)) if config_path else {}
        for option in rule_options:
            rule_id, setting = _parse_rule_option(option)
            rules[rule_id] = normalize_rule_config(setting, rule_id)

        results = Linter().lint_files(paths, rules)
    except KanonError as e:
        logger.debug("lint failed: {!r}", e)
        click.echo(e.get_formatted_message(), err=True)
        sys.exit(2)

    output = FORMATTERS[output_format](results)
    if output:
        click.echo(output)

    if any(result.error_count for result in results):
        sys.exit(1)


@cli.command()
def rules() -> None:
    """List builtin rules."""
    for rule_id, module in sorted(BUILTIN_RULES.items()):
        docs = module.meta.docs
        click.echo(f"{rule_id:<28} {docs.category:<18} {docs.description}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
