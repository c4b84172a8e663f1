"""Collaborator-facing services: caching and feed assembly."""

from .cache import TTLCache
from .feed import FeedService

__all__ = ["FeedService", "TTLCache"]
