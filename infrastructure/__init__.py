"""
infrastructure package

Shared infrastructure components for Shrdlite.
Provides the reasoning engine interface and the cache manager.

Modules:
    - interfaces: Base interface for the goal resolver and the planner
    - cache_manager: Centralized cache management system
"""

from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult
from infrastructure.cache_manager import CacheManager, get_cache_manager

__all__ = [
    "BaseReasoningEngine",
    "ReasoningResult",
    "CacheManager",
    "get_cache_manager",
]
