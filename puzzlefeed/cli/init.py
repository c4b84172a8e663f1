"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "puzzlefeed",
        "--config-dir",
        help="Directory to write config.yaml into",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file",
    ),
) -> None:
    """Write a default configuration file."""
    config_path = config_dir / "config.yaml"

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        console.print("Use --force to overwrite it.")
        raise typer.Exit(1)

    config = ConfigModel()
    save_config(config, config_path)

    console.print(
        Panel.fit(
            f"[green]✅ Wrote {config_path}[/green]\n\n"
            f"Data root: {config.data_root}\n"
            f"Batch size: {config.feed.batch_size}\n"
            f"Exploration ratio: {config.feed.exploration_ratio}",
            title="puzzlefeed",
        )
    )
