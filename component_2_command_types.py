"""
Component 2: Structured Command Types

Shape of the parser output consumed by the goal resolver. The grammar and
parser producing these values live outside this project; the resolver only
reads their fields.

    Command("put",
            entity=ObjectDescription(form="ball", color="white"),
            location=LocationDescription(
                "inside",
                ObjectDescription(form="box",
                                  location=LocationDescription(
                                      "ontop", ObjectDescription(form="floor")))))

    -> "put the white ball in the box on the floor"

Author: Shrdlite Development Team
Date: 2025-12-04
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ObjectDescription:
    """
    Filter over the world's objects.

    A None field matches anything; form 'anyform' matches any form and
    form 'floor' denotes the synthetic floor. An optional ``location``
    further restricts matches to objects standing in that relation.
    """

    form: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    location: Optional["LocationDescription"] = None

    def __str__(self) -> str:
        words = [w for w in (self.size, self.color, self.form) if w]
        text = " ".join(words) or "object"
        if self.location is not None:
            text += f" {self.location}"
        return text


@dataclass(frozen=True)
class LocationDescription:
    """Relation to the objects matching ``object``."""

    relation: str
    object: ObjectDescription

    def __str__(self) -> str:
        return f"{self.relation} {self.object}"


@dataclass(frozen=True)
class Command:
    """
    One parse of a user utterance.

    Attributes:
        command: take, grasp, pick up, move, put or drop
        entity: Description of the object to act on; None means the held object
        location: Destination for placement commands
    """

    command: str
    entity: Optional[ObjectDescription] = None
    location: Optional[LocationDescription] = None


@dataclass(frozen=True)
class ParseResult:
    """A parse together with the raw input it came from."""

    input: str
    parse: Command
