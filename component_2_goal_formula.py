"""
Component 2: Goal Formula

Disjunctive-normal-form goal representation:
- Literal: one (possibly negated) relation between one or two objects
- Conjunction: literals that must hold together
- DNFFormula: conjunctions of which at least one must hold

All three are frozen and hashable. Conjunction and DNFFormula behave as
ordered sets: duplicates are dropped, first-occurrence order is kept so
printed formulas are stable.

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


def _unique(items: Iterable) -> tuple:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class Literal:
    """
    Assertion that a relation does (polarity=True) or does not hold.

    Example: Literal("ontop", ("a", "floor")) means "a is on the floor".
    """

    relation: str
    args: Tuple[str, ...]
    polarity: bool = True

    def __post_init__(self):
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))
        if len(self.args) not in (1, 2):
            raise ValueError(
                f"Literal takes one or two arguments, got {len(self.args)}"
            )

    def __str__(self) -> str:
        return stringify_literal(self)


@dataclass(frozen=True)
class Conjunction:
    """Literals that must all hold simultaneously."""

    literals: Tuple[Literal, ...]

    def __post_init__(self):
        object.__setattr__(self, "literals", _unique(self.literals))

    def __iter__(self) -> Iterator[Literal]:
        return iter(self.literals)

    def __len__(self) -> int:
        return len(self.literals)

    def __str__(self) -> str:
        return " & ".join(stringify_literal(lit) for lit in self.literals)


@dataclass(frozen=True)
class DNFFormula:
    """Disjunction of conjunctions; satisfied if any conjunction holds."""

    conjunctions: Tuple[Conjunction, ...]

    def __post_init__(self):
        object.__setattr__(self, "conjunctions", _unique(self.conjunctions))

    @classmethod
    def of_literals(cls, literals: Iterable[Literal]) -> "DNFFormula":
        """One single-literal conjunction per literal."""
        return cls(tuple(Conjunction((lit,)) for lit in literals))

    def __iter__(self) -> Iterator[Conjunction]:
        return iter(self.conjunctions)

    def __len__(self) -> int:
        return len(self.conjunctions)

    def __bool__(self) -> bool:
        return bool(self.conjunctions)

    def __str__(self) -> str:
        return stringify_formula(self)


def stringify_literal(lit: Literal) -> str:
    """Render a literal as ``relation(a,b)``, prefixed by '-' when negated."""
    return ("" if lit.polarity else "-") + f"{lit.relation}({','.join(lit.args)})"


def stringify_formula(formula: DNFFormula) -> str:
    """Render a formula as ``a & b | c``."""
    return " | ".join(str(conjunction) for conjunction in formula)
