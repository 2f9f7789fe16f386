"""
Response Reconstruction
Rebuild structured values from a finished response map and its question tree
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

from .errors import InvalidVariant, MissingPath, TypeMismatch
from .models import (
    AllOfQuestion,
    AnyOfQuestion,
    LeafKind,
    OneOfQuestion,
    Question,
    QuestionKind,
    SurveyDefinition,
    Variant,
    variant_segment,
)
from .response_path import SELECTED_VARIANT_KEY, SELECTED_VARIANTS_KEY, ResponsePath
from .responses import Responses


@dataclass
class SelectedVariant:
    """A chosen OneOf/AnyOf variant and its follow-up data (None for unit variants)."""
    index: int
    name: str
    value: Any = None


def reconstruct(definition: Union[SurveyDefinition, Sequence[Question]],
                responses: Responses) -> Dict[str, Any]:
    """
    Rebuild plain data from collected responses.

    Groups become dicts keyed by question path, leaves their native value,
    single choices a SelectedVariant and multi choices a list of them.

    Raises:
        MissingPath: A required response is absent
        TypeMismatch: A stored response has the wrong kind
        InvalidVariant: A stored selection names no variant
    """
    questions = definition.questions if isinstance(definition, SurveyDefinition) else definition
    return _read_group(questions, responses)


def _read_group(questions: Sequence[Question], responses: Responses) -> Dict[str, Any]:
    return {
        question.path.as_str(): read_kind(question.kind, responses, question.path)
        for question in questions
    }


def read_kind(kind: QuestionKind, responses: Responses, path: ResponsePath) -> Any:
    """Read the value of one question of ``kind`` stored at ``path``."""
    if kind.is_unit():
        return None

    if isinstance(kind, LeafKind):
        value = responses.get(path)
        if value is None:
            raise MissingPath(path)
        if value.kind is not kind.value_kind():
            raise TypeMismatch(path, kind.value_kind().value, value.type_name)
        return value.to_python()

    if isinstance(kind, AllOfQuestion):
        return _read_group(kind.questions, responses.filter_prefix(path))

    if isinstance(kind, OneOfQuestion):
        index = responses.get_chosen_variant(path.child(SELECTED_VARIANT_KEY))
        variant = _variant_at(kind.variants, index, path)
        return SelectedVariant(index, variant.name,
                               _read_variant(variant, responses.filter_prefix(path)))

    if isinstance(kind, AnyOfQuestion):
        items: List[SelectedVariant] = []
        selection = responses.get_chosen_variants(path.child(SELECTED_VARIANTS_KEY))
        for item_index, variant_index in enumerate(selection):
            item_path = path.child(str(item_index))
            variant = _variant_at(kind.variants, variant_index, path)

            stored = responses.get_chosen_variant(item_path.child(SELECTED_VARIANT_KEY))
            if stored != variant_index:
                raise InvalidVariant(item_path, stored,
                                     f"item records variant {stored}, selection says {variant_index}")

            items.append(SelectedVariant(variant_index, variant.name,
                                         _read_variant(variant, responses.filter_prefix(item_path))))
        return items

    raise TypeError(f"Unsupported question kind: {type(kind).__name__}")


def _read_variant(variant: Variant, scoped: Responses) -> Any:
    """Follow-up data of a chosen variant, read from its prefix-filtered sub-map."""
    if variant.kind.is_unit():
        return None
    if isinstance(variant.kind, AllOfQuestion):
        return _read_group(variant.kind.questions, scoped)
    return read_kind(variant.kind, scoped, ResponsePath(variant_segment(variant.name)))


def _variant_at(variants: List[Variant], index: int, path: ResponsePath) -> Variant:
    if not 0 <= index < len(variants):
        raise InvalidVariant(path, index, f"{len(variants)} variants available")
    return variants[index]
