"""Version information CLI command."""

from __future__ import annotations

import click
from rich.console import Console

from frank import __version__

console = Console()


@click.command()
@click.option("--json", "as_json", is_flag=True, default=False)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show install path, config path and database path",
)
def version_cmd(as_json: bool, verbose: bool) -> None:
    """Show version information."""
    import importlib.util
    import platform
    import sys as _sys

    from frank.core.constants import CONFIG_FILENAME, DB_FILENAME, _default_data_dir
    from frank.core.store.migrations import LATEST_SCHEMA_VERSION

    spec = importlib.util.find_spec("frank")
    install_path = str(spec.origin) if spec and spec.origin else "unknown"
    data_dir = _default_data_dir()

    if as_json:
        import json

        data: dict = {
            "frank": __version__,
            "python": _sys.version.split()[0],
            "platform": _sys.platform,
            "arch": platform.machine(),
            "schema_version": LATEST_SCHEMA_VERSION,
        }
        if verbose:
            data["install_path"] = install_path
            data["config_path"] = str(data_dir / CONFIG_FILENAME)
            data["db_path"] = str(data_dir / DB_FILENAME)
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"frank {__version__}")
    console.print(f"Python {_sys.version.split()[0]}")
    console.print(f"Platform: {_sys.platform} {platform.machine()}")
    console.print(f"Schema:   v{LATEST_SCHEMA_VERSION}")
    if verbose:
        console.print(f"Install:  {install_path}")
        console.print(f"Config:   {data_dir / CONFIG_FILENAME}")
        console.print(f"Database: {data_dir / DB_FILENAME}")
