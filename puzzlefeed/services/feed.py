"""Feed service that gathers collaborator data and runs the ranker."""

from typing import Callable, Iterable, List, Optional, Set

from rich.console import Console

from ..config import FeedConfig
from ..models import Puzzle, UserProfile
from ..ranking import PuzzleRanker, interleave_by_type
from ..ranking.ranker import STRATEGIES
from .cache import TTLCache

console = Console()

CatalogFetcher = Callable[[], Iterable[Puzzle]]
ProfileFetcher = Callable[[str], Optional[UserProfile]]
CompletedFetcher = Callable[[str], Iterable[str]]


class FeedService:
    """Build a user's next feed batch from the catalog, profile and history stores."""

    def __init__(
        self,
        catalog_fetcher: CatalogFetcher,
        profile_fetcher: ProfileFetcher,
        completed_fetcher: CompletedFetcher,
        ranker: Optional[PuzzleRanker] = None,
        cache: Optional[TTLCache] = None,
        config: Optional[FeedConfig] = None,
    ) -> None:
        """
        Initialize feed service.

        Args:
            catalog_fetcher: Returns the candidate puzzles
            profile_fetcher: Returns a user's profile (None if there is none)
            completed_fetcher: Returns the puzzle IDs a user has completed
            ranker: Ranker to use (default configuration if omitted)
            cache: Cache shared with other collaborators
            config: Feed defaults
        """
        self.catalog_fetcher = catalog_fetcher
        self.profile_fetcher = profile_fetcher
        self.completed_fetcher = completed_fetcher
        self.config = config or FeedConfig()
        self.ranker = ranker or PuzzleRanker()
        self.cache = cache if cache is not None else TTLCache(self.config.cache_ttl_seconds)

    def _load_catalog(self) -> List[Puzzle]:
        try:
            return self.cache.get_or_fetch("catalog", lambda: list(self.catalog_fetcher()))
        except Exception as e:
            console.print(f"[red]Failed to load puzzle catalog: {e}[/red]")
            return []

    def _load_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            return self.cache.get_or_fetch(
                f"profile:{user_id}", lambda: self.profile_fetcher(user_id)
            )
        except Exception as e:
            console.print(
                f"[yellow]Warning: could not load profile for {user_id}, "
                f"using new-user scoring: {e}[/yellow]"
            )
            return None

    def _load_completed(self, user_id: str) -> Set[str]:
        try:
            return self.cache.get_or_fetch(
                f"completed:{user_id}", lambda: set(self.completed_fetcher(user_id))
            )
        except Exception as e:
            console.print(
                f"[yellow]Warning: could not load completed puzzles for {user_id}: {e}[/yellow]"
            )
            return set()

    def build_feed(
        self,
        user_id: str,
        batch_size: Optional[int] = None,
        exclude_ids: Iterable[str] = (),
        strategy: str = "simple",
        drop_completed: bool = False,
        interleave: bool = True,
    ) -> List[Puzzle]:
        """
        Build the next batch of puzzles for a user.

        Args:
            user_id: User to build the feed for
            batch_size: Puzzles to return (config default if omitted)
            exclude_ids: Puzzles already shown in the current feed
            strategy: ``scored``, ``hybrid`` or ``simple``
            drop_completed: Remove completed puzzles instead of only penalizing them
            interleave: Reorder the batch round-robin by category

        Returns:
            Puzzles in presentation order
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{strategy}', expected one of {', '.join(STRATEGIES)}")

        if batch_size is None:
            batch_size = self.config.batch_size
        excluded = set(exclude_ids)

        catalog = self._load_catalog()
        profile = self._load_profile(user_id)
        completed = self._load_completed(user_id)

        candidates = [puzzle for puzzle in catalog if puzzle.id not in excluded]
        if drop_completed:
            candidates = [puzzle for puzzle in candidates if puzzle.id not in completed]

        if not candidates:
            return []

        if strategy == "scored":
            selected = self.ranker.get_scored_recommendations(
                candidates, profile, completed, batch_size
            )
        elif strategy == "hybrid":
            selected = self.ranker.get_hybrid_recommendations(
                candidates, profile, completed, batch_size, self.config.exploration_ratio
            )
        else:
            selected = self.ranker.get_hybrid_recommendations(
                candidates, profile, set(), batch_size, self.config.simple_exploration_ratio
            )

        if interleave:
            selected = interleave_by_type(selected, self.config.category_order)

        return selected

    def invalidate_user(self, user_id: str) -> None:
        """Forget cached documents for a user, e.g. after recording gameplay."""
        self.cache.invalidate(f"profile:{user_id}")
        self.cache.invalidate(f"completed:{user_id}")

    def invalidate_catalog(self) -> None:
        self.cache.invalidate("catalog")
