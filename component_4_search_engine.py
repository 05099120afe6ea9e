"""
Component 4: Search Engine

Generic best-first (A*) graph search, free of domain knowledge:
- Graph: interface providing the outgoing edges of a node
- Edge: labelled, weighted transition between two nodes
- SearchNode: frontier entry ordered by f = g + h
- AStarSearch: bounded search with visited set and path reconstruction

Nodes must be hashable with value equality; the visited set and the best
known g-scores are keyed by the node itself.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Set, TypeVar

from component_15_logging_config import get_logger

logger = get_logger(__name__)

N = TypeVar("N")


# ============================================================================
# Graph Abstraction
# ============================================================================


@dataclass(frozen=True)
class Edge(Generic[N]):
    """
    Transition between two nodes.

    Attributes:
        source: Node the edge leaves
        target: Node the edge reaches
        cost: Non-negative edge cost
        command: Label of the transition (e.g. an action token)
    """

    source: N
    target: N
    cost: float = 1.0
    command: str = ""


class Graph(ABC, Generic[N]):
    """Implicit graph explored by the search."""

    @abstractmethod
    def outgoing_edges(self, node: N) -> List[Edge[N]]:
        """All edges leaving ``node``."""


# ============================================================================
# Search Node / Result
# ============================================================================


@dataclass(order=True)
class SearchNode(Generic[N]):
    """
    Frontier entry for the A* algorithm.

    Ordered by f_score; equal f_scores pop in insertion order.

    Attributes:
        f_score: Total estimated cost (g + h)
        sequence: Insertion counter used as tie-breaker
        node: Graph node
        g_score: Cost from start to this node
        h_score: Heuristic estimate to goal
        parent: Predecessor entry on the best known path
    """

    f_score: float
    sequence: int
    node: N = field(compare=False)
    g_score: float = field(compare=False)
    h_score: float = field(compare=False)
    parent: Optional["SearchNode[N]"] = field(default=None, compare=False)

    def reconstruct_path(self) -> List[N]:
        """Nodes from the start node to this node (inclusive)."""
        path = []
        entry: Optional[SearchNode[N]] = self
        while entry is not None:
            path.append(entry.node)
            entry = entry.parent
        return list(reversed(path))


@dataclass
class SearchResult(Generic[N]):
    """
    Outcome of a successful search.

    Attributes:
        path: Nodes from start to goal, start included
        cost: Total path cost
        expansions: Nodes expanded
        generated: Successor entries pushed onto the frontier
    """

    path: List[N]
    cost: float
    expansions: int = 0
    generated: int = 0


# ============================================================================
# A* Search
# ============================================================================


class AStarSearch(Generic[N]):
    """
    Best-first search ordered by g + h with a hard expansion ceiling.

    The search is best-effort: when the ceiling is reached it stops and
    reports failure without claiming that no path exists.
    """

    REASON_BUDGET_EXCEEDED = "budget_exceeded"
    REASON_FRONTIER_EXHAUSTED = "frontier_exhausted"

    def __init__(self, max_expansions: int):
        if max_expansions <= 0:
            raise ValueError(f"max_expansions must be positive, got {max_expansions}")
        self.max_expansions = max_expansions
        self.stats: Dict[str, Any] = self._fresh_stats()

    @staticmethod
    def _fresh_stats() -> Dict[str, Any]:
        return {"expansions": 0, "generated": 0, "path_length": 0, "reason": None}

    def search(
        self,
        graph: Graph[N],
        start: N,
        is_goal: Callable[[N], bool],
        heuristic: Callable[[N], float],
    ) -> Optional[SearchResult[N]]:
        """
        Find a cheapest-looking path from ``start`` to a goal node.

        Args:
            graph: Graph to explore
            start: Start node
            is_goal: Goal test
            heuristic: Estimated remaining cost of a node

        Returns:
            SearchResult, or None if the budget ran out or the frontier emptied
            (see ``stats["reason"]``)
        """
        self.stats = self._fresh_stats()

        if is_goal(start):
            logger.debug("Start node already satisfies goal")
            return SearchResult(path=[start], cost=0.0)

        counter = itertools.count()
        h_start = heuristic(start)
        open_list: List[SearchNode[N]] = [
            SearchNode(
                f_score=h_start,
                sequence=next(counter),
                node=start,
                g_score=0.0,
                h_score=h_start,
            )
        ]
        closed_set: Set[N] = set()
        g_scores: Dict[N, float] = {start: 0.0}

        while open_list:
            current = heapq.heappop(open_list)

            # Stale entry superseded by a cheaper path
            if current.node in closed_set:
                continue

            if is_goal(current.node):
                path = current.reconstruct_path()
                self.stats["path_length"] = len(path) - 1
                logger.debug(
                    "Goal reached",
                    extra={
                        "cost": current.g_score,
                        "expansions": self.stats["expansions"],
                    },
                )
                return SearchResult(
                    path=path,
                    cost=current.g_score,
                    expansions=self.stats["expansions"],
                    generated=self.stats["generated"],
                )

            if self.stats["expansions"] >= self.max_expansions:
                self.stats["reason"] = self.REASON_BUDGET_EXCEEDED
                logger.debug(
                    "Expansion budget exhausted",
                    extra={"max_expansions": self.max_expansions},
                )
                return None

            closed_set.add(current.node)
            self.stats["expansions"] += 1

            for edge in graph.outgoing_edges(current.node):
                successor = edge.target
                if successor in closed_set:
                    continue

                tentative_g = current.g_score + edge.cost
                if successor in g_scores and tentative_g >= g_scores[successor]:
                    continue

                g_scores[successor] = tentative_g
                h_score = heuristic(successor)
                heapq.heappush(
                    open_list,
                    SearchNode(
                        f_score=tentative_g + h_score,
                        sequence=next(counter),
                        node=successor,
                        g_score=tentative_g,
                        h_score=h_score,
                        parent=current,
                    ),
                )
                self.stats["generated"] += 1

        self.stats["reason"] = self.REASON_FRONTIER_EXHAUSTED
        return None
