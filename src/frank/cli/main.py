"""
Frank CLI entry point.

Commands:
  frank chat [--task TEXT]          — talk through a task in the terminal
  frank classify TEXT               — show how one turn would be classified
  frank breakdown TEXT              — show the guided steps for a task
  frank saved list|show|delete      — manage paused progress
  frank rules show|check PATH       — inspect or validate rule vocabulary
  frank config init|show|path       — write or inspect the config file
  frank version                     — show version information
"""

from __future__ import annotations

import click
from rich.console import Console

from frank import __version__

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", message="frank %(version)s")
@click.option(
    "--log-level", default=None, hidden=True, help="Log level for structured logging."
)
@click.option("--log-json", is_flag=True, default=False, hidden=True, help="Emit JSON log lines.")
def cli(log_level: str | None, log_json: bool) -> None:
    """Frank — a calm companion for getting through schoolwork one step at a time."""
    from frank.core.config import LoggingConfig, load_config_or_default
    from frank.core.exceptions import ConfigError
    from frank.core.logging import configure_logging

    try:
        log_config = load_config_or_default().logging
    except ConfigError:
        # The subcommand reports the broken file when it loads its runtime.
        log_config = LoggingConfig()

    configure_logging(
        level=log_level or log_config.level,
        json_output=log_json or log_config.format == "json",
    )


# ---------------------------------------------------------------------------
# chat
# ---------------------------------------------------------------------------

from frank.cli._chat import chat_cmd  # noqa: E402

cli.add_command(chat_cmd)


# ---------------------------------------------------------------------------
# classify / breakdown
# ---------------------------------------------------------------------------

from frank.cli._classify import breakdown_cmd, classify_cmd  # noqa: E402

cli.add_command(classify_cmd)
cli.add_command(breakdown_cmd)


# ---------------------------------------------------------------------------
# saved
# ---------------------------------------------------------------------------

from frank.cli._saved import saved_group  # noqa: E402

cli.add_command(saved_group)


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------

from frank.cli._rules import rules_group  # noqa: E402

cli.add_command(rules_group)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

from frank.cli._config_cmd import config_group  # noqa: E402

cli.add_command(config_group)


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------

from frank.cli._version import version_cmd  # noqa: E402

cli.add_command(version_cmd, name="version")


if __name__ == "__main__":
    cli()
