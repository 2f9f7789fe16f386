"""
Response Values and Collected Responses
Typed answer values, question defaults, and the flat path -> value map
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import MissingPath, TypeMismatch
from .response_path import PathLike, ResponsePath, as_path


class ValueKind(Enum):
    """Closed set of response value kinds."""
    STRING = "String"
    INT = "Int"
    FLOAT = "Float"
    BOOL = "Bool"
    CHOSEN_VARIANT = "ChosenVariant"
    CHOSEN_VARIANTS = "ChosenVariants"
    STRING_LIST = "StringList"
    INT_LIST = "IntList"
    FLOAT_LIST = "FloatList"


_LIST_KINDS = (ValueKind.CHOSEN_VARIANTS, ValueKind.STRING_LIST,
               ValueKind.INT_LIST, ValueKind.FLOAT_LIST)


@dataclass(frozen=True)
class ResponseValue:
    """A single collected answer. List payloads are stored as tuples."""
    kind: ValueKind
    value: Any

    def __post_init__(self):
        if self.kind in _LIST_KINDS and not isinstance(self.value, tuple):
            object.__setattr__(self, "value", tuple(self.value))

    # ===================
    # Constructors
    # ===================

    @classmethod
    def string(cls, value: str) -> "ResponseValue":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def integer(cls, value: int) -> "ResponseValue":
        return cls(ValueKind.INT, int(value))

    @classmethod
    def floating(cls, value: float) -> "ResponseValue":
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def boolean(cls, value: bool) -> "ResponseValue":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def chosen_variant(cls, index: int) -> "ResponseValue":
        return cls(ValueKind.CHOSEN_VARIANT, int(index))

    @classmethod
    def chosen_variants(cls, indices) -> "ResponseValue":
        return cls(ValueKind.CHOSEN_VARIANTS, tuple(int(i) for i in indices))

    @classmethod
    def string_list(cls, items) -> "ResponseValue":
        return cls(ValueKind.STRING_LIST, tuple(str(i) for i in items))

    @classmethod
    def int_list(cls, items) -> "ResponseValue":
        return cls(ValueKind.INT_LIST, tuple(int(i) for i in items))

    @classmethod
    def float_list(cls, items) -> "ResponseValue":
        return cls(ValueKind.FLOAT_LIST, tuple(float(i) for i in items))

    @classmethod
    def from_python(cls, value: Any) -> "ResponseValue":
        """
        Coerce a native Python value.

        bool is checked before int. Homogeneous lists map to the matching
        list kind; mixed int/float lists become float lists. Variant
        choices must be built explicitly with chosen_variant(s).
        """
        if isinstance(value, ResponseValue):
            return value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.floating(value)
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, PurePath):
            return cls.string(str(value))
        if isinstance(value, (list, tuple)):
            items = list(value)
            if all(isinstance(i, str) for i in items):
                return cls.string_list(items)
            if any(isinstance(i, bool) for i in items):
                raise TypeError("Boolean lists are not a response value kind")
            if all(isinstance(i, int) for i in items):
                return cls.int_list(items)
            if all(isinstance(i, (int, float)) for i in items):
                return cls.float_list(items)
        raise TypeError(f"Cannot convert {type(value).__name__} to a response value")

    # ===================
    # Accessors
    # ===================

    @property
    def type_name(self) -> str:
        return self.kind.value

    def as_str(self) -> Optional[str]:
        return self.value if self.kind is ValueKind.STRING else None

    def as_int(self) -> Optional[int]:
        return self.value if self.kind is ValueKind.INT else None

    def as_float(self) -> Optional[float]:
        return self.value if self.kind is ValueKind.FLOAT else None

    def as_bool(self) -> Optional[bool]:
        return self.value if self.kind is ValueKind.BOOL else None

    def as_chosen_variant(self) -> Optional[int]:
        return self.value if self.kind is ValueKind.CHOSEN_VARIANT else None

    def as_chosen_variants(self) -> Optional[List[int]]:
        return list(self.value) if self.kind is ValueKind.CHOSEN_VARIANTS else None

    def to_python(self) -> Any:
        """Native value: lists for list kinds, scalars otherwise."""
        if self.kind in _LIST_KINDS:
            return list(self.value)
        return self.value

    def __str__(self) -> str:
        return f"{self.type_name}({self.to_python()!r})"


class DefaultMode(Enum):
    """How a question's default is applied."""
    NONE = "none"             # user must answer
    SUGGESTED = "suggested"   # pre-filled, still asked
    ASSUMED = "assumed"       # question skipped, value used as-is


@dataclass(frozen=True)
class DefaultValue:
    """Default attached to a question."""
    mode: DefaultMode = DefaultMode.NONE
    value: Optional[ResponseValue] = None

    @classmethod
    def none(cls) -> "DefaultValue":
        return cls()

    @classmethod
    def suggested(cls, value: Any) -> "DefaultValue":
        return cls(DefaultMode.SUGGESTED, ResponseValue.from_python(value))

    @classmethod
    def assumed(cls, value: Any) -> "DefaultValue":
        return cls(DefaultMode.ASSUMED, ResponseValue.from_python(value))

    def is_none(self) -> bool:
        return self.mode is DefaultMode.NONE

    def is_suggested(self) -> bool:
        return self.mode is DefaultMode.SUGGESTED

    def is_assumed(self) -> bool:
        return self.mode is DefaultMode.ASSUMED


class Responses:
    """
    Collected responses keyed by ResponsePath.

    The map is flat: a nested field like ``address.street`` is a single
    key. ``filter_prefix`` extracts the sub-map of a nested structure with
    the prefix stripped, which is how reconstruction recurses.
    """

    def __init__(self, values: Optional[Dict[PathLike, Any]] = None):
        self._values: Dict[ResponsePath, ResponseValue] = {}
        for path, value in (values or {}).items():
            self.insert(path, value)

    # ===================
    # Mutation
    # ===================

    def insert(self, path: PathLike, value: Any) -> None:
        """Insert (or overwrite) the value at path."""
        self._values[as_path(path)] = ResponseValue.from_python(value)

    def remove(self, path: PathLike) -> Optional[ResponseValue]:
        return self._values.pop(as_path(path), None)

    def extend(self, other: "Responses") -> None:
        """Merge another collection; its values win on conflicting keys."""
        self._values.update(other._values)

    # ===================
    # Lookup
    # ===================

    def get(self, path: PathLike) -> Optional[ResponseValue]:
        return self._values.get(as_path(path))

    def contains(self, path: PathLike) -> bool:
        return as_path(path) in self._values

    def has_value(self, path: PathLike) -> bool:
        """False when missing or an empty string (a skipped optional field)."""
        value = self.get(path)
        if value is None:
            return False
        if value.kind is ValueKind.STRING:
            return value.value != ""
        return True

    def filter_prefix(self, prefix: PathLike) -> "Responses":
        """Entries under prefix (or equal to it) with the prefix removed."""
        prefix = as_path(prefix)
        filtered = Responses()
        for path, value in self._values.items():
            stripped = path.strip_prefix(prefix)
            if stripped is not None:
                filtered._values[stripped] = value
        return filtered

    def copy(self) -> "Responses":
        duplicate = Responses()
        duplicate._values = dict(self._values)
        return duplicate

    def items(self) -> List[Tuple[ResponsePath, ResponseValue]]:
        return sorted(self._values.items(), key=lambda item: item[0])

    def to_dict(self) -> Dict[str, Any]:
        """Plain ``{"a.b": native_value}`` mapping, sorted by path."""
        return {path.as_str(): value.to_python() for path, value in self.items()}

    def __contains__(self, path) -> bool:
        return self.contains(path)

    def __iter__(self) -> Iterator[ResponsePath]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Responses):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"Responses({self.to_dict()!r})"

    # ===================
    # Typed accessors
    # ===================

    def _typed(self, path: PathLike, kind: ValueKind) -> ResponseValue:
        path = as_path(path)
        value = self._values.get(path)
        if value is None:
            raise MissingPath(path)
        if value.kind is not kind:
            raise TypeMismatch(path, kind.value, value.type_name)
        return value

    def get_string(self, path: PathLike) -> str:
        return self._typed(path, ValueKind.STRING).value

    def get_int(self, path: PathLike) -> int:
        return self._typed(path, ValueKind.INT).value

    def get_float(self, path: PathLike) -> float:
        return self._typed(path, ValueKind.FLOAT).value

    def get_bool(self, path: PathLike) -> bool:
        return self._typed(path, ValueKind.BOOL).value

    def get_chosen_variant(self, path: PathLike) -> int:
        return self._typed(path, ValueKind.CHOSEN_VARIANT).value

    def get_chosen_variants(self, path: PathLike) -> List[int]:
        return list(self._typed(path, ValueKind.CHOSEN_VARIANTS).value)

    def get_string_list(self, path: PathLike) -> List[str]:
        return list(self._typed(path, ValueKind.STRING_LIST).value)

    def get_int_list(self, path: PathLike) -> List[int]:
        return list(self._typed(path, ValueKind.INT_LIST).value)

    def get_float_list(self, path: PathLike) -> List[float]:
        return list(self._typed(path, ValueKind.FLOAT_LIST).value)
