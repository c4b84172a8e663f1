"""Recommend and explain command implementations."""

from pathlib import Path
from typing import Optional, Set, Tuple

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, load_catalog, load_completed_ids, load_profile
from ..models import UserProfile
from ..ranking import PuzzleRanker, print_ranking_summary
from ..services import FeedService, TTLCache

console = Console()

LOCAL_USER = "local"


def _load_inputs(
    config: Config,
    profile_path: Optional[Path],
    completed_path: Optional[Path],
) -> Tuple[Optional[UserProfile], Set[str]]:
    profile: Optional[UserProfile] = None
    if profile_path is not None:
        profile = load_profile(config.resolve_data_path(profile_path))

    completed: Set[str] = set()
    if completed_path is not None:
        completed = load_completed_ids(config.resolve_data_path(completed_path))

    return profile, completed


def recommend_command(
    catalog: Path = typer.Argument(..., help="Catalog file (YAML or JSON list of puzzles)"),
    profile_path: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="User profile document"
    ),
    completed_path: Optional[Path] = typer.Option(
        None, "--completed", "-c", help="Completed puzzle IDs (YAML list or one per line)"
    ),
    batch_size: Optional[int] = typer.Option(
        None, "--batch-size", "-n", help="Puzzles to select", min=1
    ),
    strategy: str = typer.Option(
        "simple", "--strategy", "-s", help="Selection strategy: scored, hybrid or simple"
    ),
    exploration_ratio: Optional[float] = typer.Option(
        None, "--exploration-ratio", help="Exploration share for the hybrid strategy", min=0.0, max=1.0
    ),
    no_interleave: bool = typer.Option(
        False, "--no-interleave", help="Keep ranking order instead of alternating categories"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output"),
) -> None:
    """Select the next feed batch for a user."""
    try:
        config = Config()
        feed_config = config.config.feed
        if exploration_ratio is not None:
            if strategy != "hybrid":
                console.print(
                    f"[yellow]Warning: --exploration-ratio only applies to the hybrid strategy, "
                    f"ignored for {strategy}[/yellow]"
                )
            feed_config = feed_config.model_copy(update={"exploration_ratio": exploration_ratio})

        catalog_path = config.resolve_data_path(catalog)
        puzzles = load_catalog(catalog_path)
        profile, completed = _load_inputs(config, profile_path, completed_path)

        service = FeedService(
            catalog_fetcher=lambda: puzzles,
            profile_fetcher=lambda user_id: profile,
            completed_fetcher=lambda user_id: completed,
            ranker=PuzzleRanker(config.config.ranking, seed=seed),
            cache=TTLCache(feed_config.cache_ttl_seconds),
            config=feed_config,
        )

        console.print(f"[dim]Ranking puzzles from {catalog_path}...[/dim]")
        feed = service.build_feed(
            LOCAL_USER,
            batch_size=batch_size,
            strategy=strategy,
            interleave=not no_interleave,
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not feed:
        console.print("[yellow]No puzzles to recommend.[/yellow]")
        return

    table = Table(title=f"Feed ({strategy})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Difficulty", style="green")
    table.add_column("Completed", style="yellow", justify="center")

    for i, puzzle in enumerate(feed, 1):
        table.add_row(
            str(i),
            puzzle.id,
            puzzle.type,
            puzzle.difficulty_key,
            "✓" if puzzle.id in completed else "",
        )

    console.print(table)


def explain_command(
    catalog: Path = typer.Argument(..., help="Catalog file (YAML or JSON list of puzzles)"),
    profile_path: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="User profile document"
    ),
    completed_path: Optional[Path] = typer.Option(
        None, "--completed", "-c", help="Completed puzzle IDs (YAML list or one per line)"
    ),
    batch_size: Optional[int] = typer.Option(
        None, "--batch-size", "-n", help="Puzzles to select", min=1
    ),
    strategy: str = typer.Option("scored", "--strategy", "-s", help="scored, hybrid or simple"),
    top: int = typer.Option(20, "--top", help="Rows to show", min=1),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output"),
) -> None:
    """Show the score breakdown behind a feed batch."""
    try:
        config = Config()
        catalog_path = config.resolve_data_path(catalog)
        puzzles = load_catalog(catalog_path)
        profile, completed = _load_inputs(config, profile_path, completed_path)

        ranker = PuzzleRanker(config.config.ranking, seed=seed)
        result = ranker.rank(
            puzzles,
            profile,
            completed,
            batch_size=batch_size or config.config.feed.batch_size,
            strategy=strategy,
            exploration_ratio=config.config.feed.exploration_ratio,
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    print_ranking_summary(result, limit=top)
