"""Error types for streaming deserialization."""

from __future__ import annotations

from collections.abc import Sequence

PathPart = str | int


def format_path(path: Sequence[PathPart]) -> str:
    """Render a path like ``a.b[2]``; the root is ``$``."""
    rendered = "$"
    for part in path:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}"
    return rendered


class DeserializeError(Exception):
    """Base error for everything that aborts a streaming traversal.

    Attributes:
        path: Location of the failure, as map keys and sequence positions
    """

    def __init__(self, message: str, path: Sequence[PathPart] = ()) -> None:
        self.path = tuple(path)
        if self.path:
            message = f"{message} at {format_path(self.path)}"
        super().__init__(message)


class StructuralMismatch(DeserializeError):
    """Error raised when a value does not have the expected shape."""

    def __init__(
        self,
        expected: str,
        found: str,
        path: Sequence[PathPart] = (),
        message: str | None = None,
    ) -> None:
        self.expected = expected
        self.found = found
        super().__init__(message or f"invalid type: {found}, expected {expected}", path)


class DecodeError(DeserializeError):
    """Error raised when a value cannot be reconstructed into its target type.

    This error preserves the raw value for debugging purposes.
    """

    def __init__(self, message: str, raw_value: object = None, path: Sequence[PathPart] = ()) -> None:
        self.raw_value = raw_value
        super().__init__(message, path)

    def __repr__(self) -> str:
        return f"DecodeError({super().__repr__()}, raw_value={self.raw_value!r})"


class FormatError(DeserializeError):
    """Error raised when the serialized input itself is malformed."""


class HandleConsumedError(RuntimeError):
    """Error raised when a single-use deserializer handle is used twice."""
