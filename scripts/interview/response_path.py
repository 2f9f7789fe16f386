"""
Response Paths for the Interview Engine
Hierarchical dot-separated keys addressing every collected answer
"""

from typing import Iterator, Optional, Tuple, Union


# Reserved leaf segments recording which variant(s) were chosen
SELECTED_VARIANT_KEY = "selected_variant"
SELECTED_VARIANTS_KEY = "selected_variants"

SEPARATOR = "."


class ResponsePath:
    """
    Immutable path to a response value, e.g. ``address.street``.

    Stored as a tuple of non-empty segments; the empty path is the tree
    root. Equality and hashing are structural.
    """

    __slots__ = ("_segments",)

    def __init__(self, path: Union[str, "ResponsePath", None] = None):
        if path is None:
            segments: Tuple[str, ...] = ()
        elif isinstance(path, ResponsePath):
            segments = path._segments
        else:
            segments = _split(str(path))
        object.__setattr__(self, "_segments", segments)

    def __setattr__(self, name, value):
        raise AttributeError("ResponsePath is immutable")

    @classmethod
    def empty(cls) -> "ResponsePath":
        return cls()

    @classmethod
    def from_segments(cls, segments) -> "ResponsePath":
        path = cls()
        for segment in segments:
            path = path.child(segment)
        return path

    # ===================
    # Construction
    # ===================

    def child(self, name: Union[str, int, "ResponsePath"]) -> "ResponsePath":
        """Append a segment (or a whole sub-path); an empty name is a no-op."""
        if isinstance(name, ResponsePath):
            extra = name._segments
        else:
            extra = _split(str(name))
        if not extra:
            return self
        result = ResponsePath()
        object.__setattr__(result, "_segments", self._segments + extra)
        return result

    def parent(self) -> "ResponsePath":
        """Drop the last segment; the parent of a single segment is empty."""
        result = ResponsePath()
        object.__setattr__(result, "_segments", self._segments[:-1])
        return result

    # ===================
    # Inspection
    # ===================

    def as_str(self) -> str:
        return SEPARATOR.join(self._segments)

    def segments(self) -> Iterator[str]:
        return iter(self._segments)

    def is_empty(self) -> bool:
        return not self._segments

    def first(self) -> Optional[str]:
        return self._segments[0] if self._segments else None

    def last(self) -> Optional[str]:
        return self._segments[-1] if self._segments else None

    def strip_prefix(self, prefix: Union[str, "ResponsePath"]) -> Optional["ResponsePath"]:
        """
        Remove a whole-segment prefix.

        Returns the empty path on an exact match, the remainder when
        ``prefix`` is a proper dotted prefix, and None otherwise. Partial
        segments never match: ``address.x`` does not start with ``add``.
        """
        prefix_segments = ResponsePath(prefix)._segments
        size = len(prefix_segments)
        if self._segments[:size] != prefix_segments:
            return None
        result = ResponsePath()
        object.__setattr__(result, "_segments", self._segments[size:])
        return result

    def strip_path_prefix(self, prefix: "ResponsePath") -> Optional["ResponsePath"]:
        return self.strip_prefix(prefix)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other) -> bool:
        if isinstance(other, ResponsePath):
            return self._segments == other._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def __lt__(self, other: "ResponsePath") -> bool:
        return self._segments < ResponsePath(other)._segments

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f"ResponsePath({self.as_str()!r})"


PathLike = Union[str, ResponsePath]


def _split(text: str) -> Tuple[str, ...]:
    return tuple(segment for segment in text.split(SEPARATOR) if segment)


def as_path(path: PathLike) -> ResponsePath:
    """Coerce text or a path into a ResponsePath."""
    if isinstance(path, ResponsePath):
        return path
    return ResponsePath(path)
