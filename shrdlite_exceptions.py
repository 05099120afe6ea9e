"""
shrdlite_exceptions.py

Central exception hierarchy for the Shrdlite interpreter and planner.
Defines specialised exception classes for the different failure scenarios.

Exception hierarchy:
    ShrdliteException (base)
    ├── WorldModelException
    │   └── InvalidWorldStateError
    ├── ResolutionException
    │   ├── ObjectNotFoundError
    │   ├── NoValidMoveError
    │   └── AmbiguousNoResolutionError
    ├── PlanningException
    │   ├── PlanNotFoundError
    │   └── PlanExecutionError
    └── ConfigurationException
        └── InvalidConfigError

Usage:
    from shrdlite_exceptions import ObjectNotFoundError, PlanNotFoundError

    try:
        formula = resolver.resolve(command, state)
    except ObjectNotFoundError as e:
        logger.error(f"Resolution failed: {e}")
        logger.error(f"Context: {e.context}")
"""

from typing import Any, Dict, Optional


class ShrdliteException(Exception):
    """
    Base exception for all Shrdlite-specific errors.

    All Shrdlite exceptions support:
    - A human-readable message
    - Contextual information (dict)
    - Chaining of an original exception
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# WORLD MODEL EXCEPTIONS
# ============================================================================


class WorldModelException(ShrdliteException):
    """Base exception for malformed world input."""


class InvalidWorldStateError(WorldModelException):
    """
    A world state violates the placement invariant.

    Causes:
    - An object key appears twice across stacks and the gripper
    - The arm is outside the range of columns
    - The world has no columns at all
    """


# ============================================================================
# RESOLUTION EXCEPTIONS
# ============================================================================


class ResolutionException(ShrdliteException):
    """Base exception for failures while resolving a command into a goal."""


class ObjectNotFoundError(ResolutionException):
    """
    No object in the world matches the object description.

    Causes:
    - Form, size or colour filters match nothing
    - A nested location relation holds for none of the candidates
    """

    def __init__(
        self,
        message: str = "No possible objects found",
        description: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        if description is not None:
            context["description"] = description
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class NoValidMoveError(ResolutionException):
    """
    Candidate objects exist but no destination passes the physical rules.

    Causes:
    - Every candidate location is physically invalid (e.g. ball on a brick)
    - The command refers to the held object but the arm is empty
    - A placement command names no location
    """

    def __init__(
        self,
        message: str = "No possible objects to move",
        command: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        if command is not None:
            context["command"] = command
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class AmbiguousNoResolutionError(ResolutionException):
    """
    Every parse or interpretation of an utterance failed.

    Only the first recorded error is surfaced; it is available as
    ``original_exception`` and its message becomes this error's message.
    """

    def __init__(self, first_error: Exception, attempts: int = 1, **kwargs):
        message = getattr(first_error, "message", None) or str(first_error)
        context = kwargs.get("context", {})
        context["attempts"] = attempts
        kwargs["context"] = context
        kwargs["original_exception"] = first_error
        super().__init__(message, **kwargs)
        self.first_error = first_error


# ============================================================================
# PLANNING EXCEPTIONS
# ============================================================================


class PlanningException(ShrdliteException):
    """Base exception for planner failures."""


class PlanNotFoundError(PlanningException):
    """
    The search stopped without reaching a goal state.

    Causes:
    - The expansion budget was exceeded (no plan found within budget)
    - The reachable state space was exhausted
    """

    def __init__(
        self,
        message: str = "No plan found within budget",
        expansions: Optional[int] = None,
        max_expansions: Optional[int] = None,
        reason: Optional[str] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["expansions"] = expansions
        context["max_expansions"] = max_expansions
        context["reason"] = reason
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class PlanExecutionError(PlanningException):
    """
    An action cannot be applied to the current state.

    Causes:
    - Arm moved past the first or last column
    - Pick with a full gripper or from an empty column
    - Drop with an empty gripper or onto a physically invalid object
    - Unknown action token
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        step_index: Optional[int] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["command"] = command
        context["step_index"] = step_index
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(ShrdliteException):
    """Base exception for configuration errors."""


class InvalidConfigError(ConfigurationException):
    """
    Invalid configuration value.

    Causes:
    - Non-numeric override in an environment variable
    - Non-positive expansion budget
    - Negative clearance cost
    """


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def wrap_exception(
    exc: Exception,
    shrdlite_exception_class: type[ShrdliteException],
    message: str,
    **context,
) -> ShrdliteException:
    """
    Convert a generic exception into a Shrdlite-specific exception.

    Args:
        exc: Original exception
        shrdlite_exception_class: Target exception class (e.g. InvalidConfigError)
        message: Custom error message
        **context: Additional context information

    Returns:
        Shrdlite exception chained to the original exception

    Example:
        try:
            value = int(raw)
        except ValueError as e:
            raise wrap_exception(e, InvalidConfigError, "Bad override", value=raw)
    """
    return shrdlite_exception_class(
        message=message, context=context, original_exception=exc
    )


def get_user_friendly_message(exc: Exception, include_details: bool = False) -> str:
    """
    Build a user-facing message from an exception.

    Args:
        exc: Exception object
        include_details: Whether to append technical details (debug mode)

    Returns:
        Message suitable for showing in a dialogue
    """
    if isinstance(exc, AmbiguousNoResolutionError):
        return get_user_friendly_message(exc.first_error, include_details)

    friendly_messages = {
        ObjectNotFoundError: "I cannot find any object matching that description.",
        NoValidMoveError: "I cannot move anything like that.",
        PlanNotFoundError: "I could not find a way to do that.",
        PlanExecutionError: "That action sequence cannot be carried out.",
        InvalidWorldStateError: "The world description is inconsistent.",
        InvalidConfigError: "The planner configuration is invalid.",
    }

    default_message = "Something unexpected went wrong."

    user_message = friendly_messages.get(type(exc), default_message)

    if isinstance(exc, ObjectNotFoundError) and exc.context.get("description"):
        user_message = (
            f"I cannot find any object matching '{exc.context['description']}'."
        )

    if include_details and isinstance(exc, ShrdliteException):
        user_message += f"\n\nDetails: {exc.message}"
        if exc.context:
            user_message += f"\n   Context: {exc.context}"

    return user_message
