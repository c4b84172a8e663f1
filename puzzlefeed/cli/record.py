"""Record command implementation."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config, load_profile, save_profile
from ..models import DIFFICULTY_LEVELS, UserProfile
from ..tracking import GameplayRecorder, parse_puzzle_id

console = Console()


class GameplayEvent(str, Enum):
    ATTEMPT = "attempt"
    COMPLETE = "complete"
    SKIP = "skip"


def record_command(
    profile_path: Path = typer.Argument(..., help="Profile document to update (created if missing)"),
    puzzle_id: str = typer.Argument(..., help="Puzzle ID, e.g. riddle_easy_12"),
    event: GameplayEvent = typer.Option(..., "--event", "-e", help="Gameplay event"),
    time_taken: float = typer.Option(0.0, "--time", "-t", help="Seconds spent (completions)", min=0.0),
    category: Optional[str] = typer.Option(
        None, "--category", help="Category, when it can't be read from the puzzle ID"
    ),
    difficulty: Optional[str] = typer.Option(
        None, "--difficulty", help="easy, medium or hard, when it can't be read from the puzzle ID"
    ),
) -> None:
    """Apply a gameplay event to a profile document."""
    try:
        config = Config()
        path = config.resolve_data_path(profile_path)
        profile = load_profile(path) if path.exists() else UserProfile()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    parsed_category, parsed_difficulty = parse_puzzle_id(puzzle_id)
    category = category or parsed_category
    level = DIFFICULTY_LEVELS.get(difficulty.lower()) if difficulty else parsed_difficulty

    if category is None:
        console.print(
            f"[yellow]⚠️  Could not determine category for {puzzle_id}; "
            "only profile totals will change.[/yellow]"
        )

    recorder = GameplayRecorder()
    if event is GameplayEvent.ATTEMPT:
        profile = recorder.record_attempt(profile, category, level)
    elif event is GameplayEvent.COMPLETE:
        profile = recorder.record_completion(profile, puzzle_id, category, level, time_taken)
    else:
        profile = recorder.record_skip(profile, puzzle_id, category, level)

    save_profile(profile, path)
    console.print(f"[green]✅ Recorded {event.value} for {puzzle_id}[/green]")
