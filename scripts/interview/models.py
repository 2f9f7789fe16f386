"""
Data Models for the Interview Engine
Declarative question tree: questions, question kinds, variants and surveys
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .response_path import SEPARATOR, PathLike, ResponsePath, as_path
from .responses import DefaultValue, ValueKind


class QuestionKind:
    """Base for every question kind. Leaves answer once; structural kinds recurse."""

    def is_unit(self) -> bool:
        return False

    def is_basic(self) -> bool:
        return False

    def is_structural(self) -> bool:
        return False

    def value_kind(self) -> Optional[ValueKind]:
        """The only response kind legal for an answer to this question."""
        return None


class LeafKind(QuestionKind):
    """Answered with one primitive backend interaction."""

    def is_basic(self) -> bool:
        return True

    def static_default(self) -> Any:
        return getattr(self, "default", None)


class StructuralKind(QuestionKind):
    """Answer requires asking nested questions."""

    def is_structural(self) -> bool:
        return True


@dataclass
class Unit(QuestionKind):
    """No data to collect (unit variants, field-less types)."""

    def is_unit(self) -> bool:
        return True


# ===================
# Leaf kinds
# ===================

@dataclass
class InputQuestion(LeafKind):
    """Single-line text input."""
    default: Optional[str] = None

    def value_kind(self) -> ValueKind:
        return ValueKind.STRING


@dataclass
class MultilineQuestion(LeafKind):
    """Multi-line text (editor or textarea)."""
    default: Optional[str] = None

    def value_kind(self) -> ValueKind:
        return ValueKind.STRING


@dataclass
class MaskedQuestion(LeafKind):
    """Password-style input; never pre-filled from a static default."""
    mask: str = "*"

    def value_kind(self) -> ValueKind:
        return ValueKind.STRING


@dataclass
class IntQuestion(LeafKind):
    default: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None

    def value_kind(self) -> ValueKind:
        return ValueKind.INT


@dataclass
class FloatQuestion(LeafKind):
    default: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None

    def value_kind(self) -> ValueKind:
        return ValueKind.FLOAT


@dataclass
class ConfirmQuestion(LeafKind):
    """Yes/no confirmation. Never validated, cannot fail."""
    default: bool = False

    def value_kind(self) -> ValueKind:
        return ValueKind.BOOL


class ListElementKind(Enum):
    """Element type of a list question."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"


_LIST_VALUE_KINDS = {
    ListElementKind.STRING: ValueKind.STRING_LIST,
    ListElementKind.INT: ValueKind.INT_LIST,
    ListElementKind.FLOAT: ValueKind.FLOAT_LIST,
}


@dataclass
class ListQuestion(LeafKind):
    """A bounded list of homogeneous primitive values."""
    element_kind: ListElementKind = ListElementKind.STRING
    min: Optional[float] = None        # per-element bounds (numeric lists)
    max: Optional[float] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None

    def value_kind(self) -> ValueKind:
        return _LIST_VALUE_KINDS[self.element_kind]

    @classmethod
    def strings(cls, **kwargs) -> "ListQuestion":
        return cls(element_kind=ListElementKind.STRING, **kwargs)

    @classmethod
    def ints(cls, **kwargs) -> "ListQuestion":
        return cls(element_kind=ListElementKind.INT, **kwargs)

    @classmethod
    def floats(cls, **kwargs) -> "ListQuestion":
        return cls(element_kind=ListElementKind.FLOAT, **kwargs)


# ===================
# Structural kinds
# ===================

@dataclass
class AllOfQuestion(StructuralKind):
    """A group of questions that are all answered (struct, struct variant)."""
    questions: List["Question"] = field(default_factory=list)


@dataclass
class Variant:
    """One labelled alternative of a OneOf/AnyOf; Unit kind carries no data."""
    name: str
    kind: QuestionKind = field(default_factory=Unit)

    @classmethod
    def unit(cls, name: str) -> "Variant":
        return cls(name, Unit())


@dataclass
class OneOfQuestion(StructuralKind):
    """Pick exactly one variant, then answer its follow-up questions."""
    variants: List[Variant] = field(default_factory=list)
    default: Optional[int] = None

    def variant_names(self) -> List[str]:
        return [variant.name for variant in self.variants]


@dataclass
class AnyOfQuestion(StructuralKind):
    """Pick any number of variants (repeats allowed), each with its own follow-ups."""
    variants: List[Variant] = field(default_factory=list)
    defaults: List[int] = field(default_factory=list)

    def variant_names(self) -> List[str]:
        return [variant.name for variant in self.variants]


# ===================
# Questions
# ===================

@dataclass
class Question:
    """A single question addressed by a (relative) response path."""
    path: ResponsePath
    ask: str
    kind: QuestionKind
    default: DefaultValue = field(default_factory=DefaultValue)

    def __post_init__(self):
        self.path = as_path(self.path)

    @classmethod
    def new(cls, path: PathLike, ask: str, kind: QuestionKind) -> "Question":
        return cls(as_path(path), ask, kind)

    def set_suggestion(self, value: Any) -> None:
        self.default = DefaultValue.suggested(value)

    def set_assumption(self, value: Any) -> None:
        self.default = DefaultValue.assumed(value)

    def clear_default(self) -> None:
        self.default = DefaultValue.none()

    def is_assumed(self) -> bool:
        return self.default.is_assumed()

    def display_prompt(self, full_path: Optional[ResponsePath] = None) -> str:
        """The prompt, or a label derived from the last path segment."""
        if self.ask:
            return self.ask
        path = full_path if full_path is not None else self.path
        return label_from_segment(path.last() or "")


def label_from_segment(segment: str) -> str:
    """``user_name`` -> ``User Name``."""
    return " ".join(word[:1].upper() + word[1:] for word in segment.split("_") if word)


@dataclass
class SurveyDefinition:
    """Top-level question tree plus optional messages shown around it."""
    questions: List[Question] = field(default_factory=list)
    prelude: Optional[str] = None
    epilogue: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.questions

    def __len__(self) -> int:
        return len(self.questions)


def variant_segment(name: str) -> str:
    """Path segment under which a non-struct variant stores its follow-up."""
    return name.replace(SEPARATOR, "_")
