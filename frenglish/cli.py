"""
Command-line interface for Frenglish.

Provides commands for:
- Translating project files and writing them under per-language folders
- Uploading existing translations as the project's baseline
- Inspecting supported languages, file types and project configuration
- Managing the API key

Usage:
    frenglish translate --path locales
    frenglish translate --path locales --full --partial-config '{"languages": ["fr"]}'
    frenglish upload --path locales
    frenglish languages
    frenglish keys set
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from frenglish import __version__
from frenglish.config import APP_NAME, Settings
from frenglish.errors import FrenglishError
from frenglish.keys import KeyManager
from frenglish.pipeline import translate as run_translate
from frenglish.pipeline import upload as run_upload
from frenglish.sdk import FrenglishClient

app = typer.Typer(
    name="frenglish",
    help="Frenglish: translate project files with the Frenglish service",
    add_completion=False,
)
keys_app = typer.Typer(help="Manage the Frenglish API key")
app.add_typer(keys_app, name="keys")

console = Console()
logger = logging.getLogger("frenglish")


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through rich on the shared console."""
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=console, show_path=False, markup=False)
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_settings() -> Settings:
    """Load .env (if any) and build settings from the environment.

    Invalid settings are logged and end the command without a traceback.
    """
    load_dotenv()
    try:
        return Settings.from_env()
    except FrenglishError as e:
        logger.error("Error: %s", e)
        raise typer.Exit()


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """Frenglish: translate project files."""
    setup_logging(verbose)


@app.command()
def translate(
    path: Optional[str] = typer.Option(
        None, "--path", "-p",
        help="File or directory to translate (default: TRANSLATION_PATH)",
    ),
    is_full_translation: bool = typer.Option(
        False, "--full/--no-full",
        help="Retranslate all content instead of only what changed",
    ),
    partial_config: Optional[str] = typer.Option(
        None, "--partial-config", "--partialConfig",
        help="Configuration override: inline JSON or path to a JSON file",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-e",
        help="Glob or substring of paths to skip (repeatable; default: EXCLUDED_TRANSLATION_PATH)",
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Root folder for translated files (default: TRANSLATION_OUTPUT_PATH or --path)",
    ),
):
    """Translate files and write them under <output>/<language>/."""
    settings = load_settings()

    result = run_translate(
        settings,
        path=path,
        is_full_translation=is_full_translation,
        partial_config=partial_config,
        excluded_paths=list(exclude) if exclude else None,
        output_path=output,
    )

    if result.written:
        table = Table(title="Translated files")
        table.add_column("Path", style="green")
        for written in result.written:
            table.add_row(written)
        console.print(table)

    if result.success:
        console.print(
            f"[bold green]Done:[/] {len(result.written)} written, "
            f"{len(result.skipped)} skipped"
        )
    else:
        console.print(f"[red]Translation finished with {len(result.errors)} error(s)[/]")


@app.command()
def upload(
    path: Optional[str] = typer.Option(
        None, "--path", "-p",
        help="Directory containing language folders (default: TRANSLATION_PATH)",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-e",
        help="Glob or substring of paths to skip (repeatable)",
    ),
):
    """Upload existing files as the baseline for future translations."""
    settings = load_settings()
    result = run_upload(settings, path=path, excluded_paths=list(exclude) if exclude else None)

    if result.success and result.uploaded:
        console.print(f"[bold green]Uploaded {len(result.uploaded)} file(s)[/]")
    elif not result.success:
        console.print(f"[red]Upload failed:[/] {'; '.join(result.errors)}")


@app.command()
def languages():
    """Show the languages and file types the service supports."""
    settings = load_settings()
    client = FrenglishClient(
        api_key=settings.api_key,
        backend_url=settings.backend_url,
        timeout=settings.request_timeout,
    )
    try:
        supported_languages = client.get_supported_languages()
        file_types = client.get_supported_file_types()
    except (FrenglishError, OSError) as e:
        logger.error("Error: %s", e)
        return

    table = Table(title="Supported by Frenglish")
    table.add_column("Languages", style="cyan")
    table.add_column("File types", style="green")
    for i in range(max(len(supported_languages), len(file_types))):
        table.add_row(
            supported_languages[i] if i < len(supported_languages) else "",
            file_types[i] if i < len(file_types) else "",
        )
    console.print(table)


@app.command()
def config():
    """Show local settings and the project's default configuration."""
    settings = load_settings()

    table = Table(title="Local settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in settings.to_dict().items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)

    try:
        client = FrenglishClient.from_settings(settings)
        configuration = client.get_default_configuration()
    except (FrenglishError, OSError) as e:
        logger.error("Error: %s", e)
        return
    console.print("\n[bold]Project default configuration:[/]")
    console.print_json(json.dumps(configuration.to_dict()))


@keys_app.command("set")
def keys_set(
    key: str = typer.Option(
        ..., "--key", "-k",
        prompt="Frenglish API key",
        hide_input=True,
        help="API key to store",
    ),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", hidden=True),
):
    """Store the API key in the OS keychain (or ~/.frenglish/keys.json)."""
    km = KeyManager(config_dir=config_dir)
    storage = km.set_key(key)
    console.print(f"[green]API key saved to {storage}[/]")
    if storage == "config":
        console.print(f"[yellow]Note:[/] Key stored in local file ({km.config_file})")
        console.print("       For better security, use environment variables")


@keys_app.command("show")
def keys_show(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", hidden=True),
):
    """Show where the API key comes from (masked)."""
    info = KeyManager(config_dir=config_dir).get_key_info()
    if info.is_set:
        console.print(f"[green]API key set[/] ({info.source}): {info.masked_value}")
    else:
        console.print("[yellow]No API key configured.[/] Set FRENGLISH_API_KEY or run: frenglish keys set")


@keys_app.command("delete")
def keys_delete(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", hidden=True),
):
    """Delete the stored API key."""
    if KeyManager(config_dir=config_dir).delete_key():
        console.print("[green]API key deleted[/]")
    else:
        console.print("[yellow]No stored API key to delete[/]")


if __name__ == "__main__":
    app()
