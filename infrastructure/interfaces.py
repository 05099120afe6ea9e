"""
infrastructure/interfaces.py

Base interface shared by the Shrdlite reasoning engines.

Both the goal resolver and the planner implement BaseReasoningEngine so a
driver can call them polymorphically and receive results in one format.

Interface Contract:
    - reason(query, context) performs the operation on explicit inputs
      passed through ``context`` (no global "current world")
    - get_capabilities() lists what the engine can do
    - estimate_cost(query) gives a relative cost for routing decisions

Usage:
    from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult

    class MyEngine(BaseReasoningEngine):
        def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
            ...

        def get_capabilities(self) -> List[str]:
            return ["goal_resolution"]

        def estimate_cost(self, query: str) -> float:
            return 0.2
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ReasoningResult:
    """
    Standardized result container for all reasoning engines.

    Attributes:
        success: Whether the engine produced a result
        answer: Human-readable answer (stringified formula or plan)
        confidence: Confidence score in [0.0, 1.0] range
        metadata: Engine-specific information (formula, plan, search stats)
        strategy_used: Name of the strategy employed
        computation_cost: Share of the engine's budget actually used

    Example:
        result = ReasoningResult(
            success=True,
            answer="inside(e,k) | inside(e,l)",
            confidence=1.0,
            strategy_used="goal_resolver",
        )
    """

    success: bool
    answer: str = ""
    confidence: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
    strategy_used: str = ""
    computation_cost: float = 0.0

    def __post_init__(self):
        """Validate confidence is in valid range."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be in [0.0, 1.0], got {self.confidence}"
            )


class BaseReasoningEngine(ABC):
    """
    Abstract base class for the Shrdlite engines.

    Engines are pure computations over the inputs handed to them: they keep
    no reference to a caller-owned world state between calls.
    """

    @abstractmethod
    def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
        """
        Execute the engine on the given query with provided context.

        Args:
            query: The raw utterance or a description of the task
            context: Engine-specific inputs, e.g. "command", "world_state",
                "interpretation"

        Returns:
            ReasoningResult describing success or failure
        """
        pass

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """
        Return list of capabilities this engine provides.

        Returns:
            List of capability identifiers (lowercase, underscore-separated)
        """
        pass

    @abstractmethod
    def estimate_cost(self, query: str) -> float:
        """
        Estimate the relative computational cost of a query.

        Cost is a relative measure where:
        - 0.0 - 0.3: Cheap (lookup, filtering)
        - 0.3 - 0.7: Medium (bounded search)
        - 0.7 - 1.0: Expensive (large search spaces)

        Args:
            query: The query string to estimate cost for

        Returns:
            Estimated cost
        """
        pass

    def supports_capability(self, capability: str) -> bool:
        """Check if this engine supports a specific capability."""
        return capability in self.get_capabilities()
