"""
Variable Environment for Workflow Engine.

The environment is the single mutable scope that flows through one
execution. It is seeded from the caller's inputs and every node handler
reads from and writes to it; it is how one node's output reaches a later
node.

Values are dynamically typed JSON scalars, so every read goes through an
accessor that checks the shape the caller expects and raises a descriptive
error otherwise. The same applies to node metadata.
"""

from typing import Any, Dict, List, Mapping, Optional

from alertflow.engine.errors import InvalidMetadataError, MissingVariableError


def is_number(value: Any) -> bool:
    """True for ints and floats. Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Environment:
    """
    Mutable variable scope for one workflow execution.

    The initial mapping is copied, so the caller's inputs are never
    modified by the nodes.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._vars: Dict[str, Any] = dict(initial or {})

    def __contains__(self, key: str) -> bool:
        return key in self._vars

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw value from the environment."""
        return self._vars.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a value in the environment."""
        self._vars[key] = value

    def require_string(self, key: str) -> str:
        """Get a value that must be a string."""
        value = self._vars.get(key)
        if not isinstance(value, str):
            raise MissingVariableError(key)
        return value

    def require_number(self, key: str) -> float:
        """Get a value that must be numeric. Integers are coerced to float."""
        value = self._vars.get(key)
        if not is_number(value):
            raise MissingVariableError(key)
        return float(value)

    def get_string(self, key: str) -> Optional[str]:
        """Get a string value, or None if absent or not a string."""
        value = self._vars.get(key)
        return value if isinstance(value, str) else None

    def get_bool(self, key: str) -> Optional[bool]:
        """Get a boolean value, or None if absent or not a boolean."""
        value = self._vars.get(key)
        return value if isinstance(value, bool) else None

    def snapshot(self) -> Dict[str, Any]:
        """Return a shallow copy of the current variables."""
        return dict(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


# ============================================================
# Metadata Accessors
# ============================================================

def require_string_list(metadata: Mapping[str, Any], key: str) -> List[str]:
    """
    Read a list of strings from node metadata.

    Raises:
        InvalidMetadataError: if the key is missing, is not a list,
            or holds anything other than strings.
    """
    value = metadata.get(key)
    if not isinstance(value, list):
        raise InvalidMetadataError(f"invalid {key} in node metadata")
    for item in value:
        if not isinstance(item, str):
            raise InvalidMetadataError(
                f"invalid {key} in node metadata: expected strings, "
                f"got {type(item).__name__}"
            )
    return value


def require_records(metadata: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    """
    Read a list of mappings from node metadata.

    Entries that are not mappings are skipped.

    Raises:
        InvalidMetadataError: if the key is missing or is not a list.
    """
    value = metadata.get(key)
    if not isinstance(value, list):
        raise InvalidMetadataError(f"invalid {key} in node metadata")
    return [item for item in value if isinstance(item, Mapping)]
