"""Argument validation for task names and dependency lists.

Provides consistent checks for the TaskRunner's public operations.
"""

from __future__ import annotations

from collections.abc import Iterable


def require_name(name: str | None, entity: str = "task") -> str:
    """Validate a task name.

    Rules:
    - Must be given (not None, not empty)
    - Must be a string

    Args:
        name: The name to validate.
        entity: What the name is for (used in error messages).

    Returns:
        The validated name.

    Raises:
        ValueError: If the name is missing or not a string.

    Example:
        >>> require_name("build")  # OK
        >>> require_name("")       # ValueError
    """
    if name is None or name == "":
        raise ValueError(f"Missing {entity} name")
    if not isinstance(name, str):
        raise ValueError(f"{entity.capitalize()} name must be a string, got {type(name).__name__}")
    return name


def normalize_dependencies(dependencies: str | Iterable[str] | None) -> list[str]:
    """Normalize a dependency argument into a list of unique names.

    Accepts None (no dependencies), a single name, or an iterable of names.
    Duplicates are collapsed, keeping first-seen order.

    Args:
        dependencies: Dependency argument as passed by the caller.

    Returns:
        List of dependency names.

    Raises:
        ValueError: If any dependency name is invalid.
    """
    if dependencies is None:
        return []
    if isinstance(dependencies, str):
        dependencies = [dependencies]

    names: list[str] = []
    for dependency in dependencies:
        require_name(dependency, "dependency")
        if dependency not in names:
            names.append(dependency)
    return names


def require_dependencies(dependencies: str | Iterable[str] | None) -> list[str]:
    """Like normalize_dependencies(), but the argument itself is required.

    Raises:
        ValueError: If dependencies is None.
    """
    if dependencies is None:
        raise ValueError("Missing dependencies")
    return normalize_dependencies(dependencies)
