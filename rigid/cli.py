"""Command line interface for rigid."""

import json as json_module
from pathlib import Path
from typing import Optional

import typer

from .codec import extract_ulid, ulid_datetime
from .config import Config, load_config, resolve_secret_key
from .core import Rigid
from .errors import RigidError
from .logging_setup import get_logger, setup_logging
from .version import __version__

app = typer.Typer(
    name="rigid", help="Rigid - HMAC-signed, time-sortable unique identifiers"
)

# Config command group
config_app = typer.Typer(help="Configuration management commands")
app.add_typer(config_app, name="config")

logger = get_logger("cli")

_state = {"verbose": False}

KEY_OPTION = typer.Option(
    None, "--key", "-k", help="Secret key (defaults to the configured env var)"
)
SIGNATURE_LENGTH_OPTION = typer.Option(
    None, "--signature-length", "-s", help="Signature length in bytes (4-32)"
)
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config file")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to the console"
    ),
) -> None:
    """Rigid - HMAC-signed, time-sortable unique identifiers."""
    _state["verbose"] = verbose


def _fail(e: Exception) -> None:
    typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
    raise typer.Exit(1) from e


def _load(config_path: Optional[Path]) -> Config:
    config = load_config(config_path)
    setup_logging(
        console_level="DEBUG" if _state["verbose"] else config.logging.console_level,
        file_level=config.logging.file_level,
        log_dir=Path(config.logging.log_dir) if config.logging.log_dir else None,
    )
    return config


def _build_rigid(
    key: Optional[str], signature_length: Optional[int], config_path: Optional[Path]
) -> Rigid:
    config = _load(config_path)
    secret_key = resolve_secret_key(config, key)
    if signature_length is None:
        return Rigid.from_config(secret_key, config)
    return Rigid(secret_key, signature_length)


@app.command()
def generate(
    metadata: Optional[str] = typer.Option(
        None, "--metadata", "-m", help="Metadata to bind to the ID"
    ),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of IDs"),
    key: Optional[str] = KEY_OPTION,
    signature_length: Optional[int] = SIGNATURE_LENGTH_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Generate signed IDs."""
    try:
        rigid = _build_rigid(key, signature_length, config)
        for _ in range(count):
            typer.echo(rigid.generate(metadata))
        logger.debug("Generated %d ID(s)", count)
    except RigidError as e:
        _fail(e)


@app.command()
def verify(
    rigid_id: str = typer.Argument(..., help="Rigid ID to verify"),
    json: bool = typer.Option(False, "--json", help="Output in JSON format"),
    key: Optional[str] = KEY_OPTION,
    signature_length: Optional[int] = SIGNATURE_LENGTH_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Verify the signature of an ID."""
    try:
        rigid = _build_rigid(key, signature_length, config)
        result = rigid.verify(rigid_id)
    except RigidError as e:
        if json:
            typer.echo(
                json_module.dumps(
                    {"valid": False, "error": type(e).__name__, "message": str(e)}
                )
            )
            raise typer.Exit(1) from e
        _fail(e)

    report = {
        "valid": result.valid,
        "ulid": result.ulid_str,
        "timestamp": result.timestamp.isoformat(),
        "metadata": result.metadata,
    }
    if json:
        typer.echo(json_module.dumps(report))
        return

    typer.echo("valid=true")
    typer.echo(f"ulid={report['ulid']}")
    typer.echo(f"timestamp={report['timestamp']}")
    typer.echo(f"metadata={report['metadata']}")


@app.command()
def extract(
    rigid_id: str = typer.Argument(..., help="Rigid ID to inspect"),
) -> None:
    """Show the ULID and timestamp of an ID without verifying it."""
    try:
        value = extract_ulid(rigid_id)
    except RigidError as e:
        _fail(e)

    typer.echo(f"ulid={value.str}")
    typer.echo(f"timestamp={ulid_datetime(value).isoformat()}")
    typer.echo("verified=false")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"rigid {__version__}")


@config_app.command("show")
def config_show(config: Optional[Path] = CONFIG_OPTION) -> None:
    """Show the effective configuration."""
    try:
        typer.echo(load_config(config).to_yaml())
    except RigidError as e:
        _fail(e)


@config_app.command("path")
def config_path() -> None:
    """Show the absolute path to the configuration file."""
    typer.echo(str(Config.get_config_path()))


@config_app.command("init")
def config_init(
    config: Optional[Path] = CONFIG_OPTION,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a configuration file with default values."""
    target = Path(config) if config else Config.get_config_path()
    if target.exists() and not force:
        typer.echo(f"Config already exists: {target}", err=True)
        raise typer.Exit(1)

    Config().save_to_yaml_file(target)
    typer.echo(f"Wrote {target}")


if __name__ == "__main__":
    app()
