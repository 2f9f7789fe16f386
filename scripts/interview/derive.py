"""
Survey Derivation
Build question trees, validators and builders from annotated dataclasses
"""

import dataclasses
import logging
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .errors import InvalidVariant, ValidationError
from .interview_engine import InterviewBackend
from .models import (
    AllOfQuestion,
    AnyOfQuestion,
    ConfirmQuestion,
    FloatQuestion,
    InputQuestion,
    IntQuestion,
    ListQuestion,
    MaskedQuestion,
    MultilineQuestion,
    OneOfQuestion,
    Question,
    QuestionKind,
    SurveyDefinition,
    Variant,
    variant_segment,
)
from .response_path import SELECTED_VARIANT_KEY, SELECTED_VARIANTS_KEY, PathLike, ResponsePath, as_path
from .responses import ResponseValue, Responses, ValueKind

logger = logging.getLogger(__name__)

SURVEY_ATTR = "__survey__"
FIELD_METADATA_KEY = "interview"

WILDCARD = "*"

_NO_DEFAULT = object()
_UNION_TYPES = tuple(t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None)

# Field validators receive the native value; they return an error message
# (or raise ValidationError) to reject it and None to accept it.
FieldValidator = Callable[[Any, Responses, ResponsePath], Optional[str]]


# ===================
# Declarations
# ===================

@dataclass
class SurveyOptions:
    """Options attached to a class by @survey."""
    prelude: Optional[str] = None
    epilogue: Optional[str] = None
    validate_fields: Optional[FieldValidator] = None
    newtype: bool = False


@dataclass
class FieldSpec:
    """Per-field settings recorded by ask()."""
    prompt: str = ""
    min: Optional[float] = None
    max: Optional[float] = None
    validate: Optional[FieldValidator] = None
    mask: Optional[str] = None
    multiline: bool = False
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    default: Any = _NO_DEFAULT

    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT


def survey(cls=None, *, prelude: Optional[str] = None, epilogue: Optional[str] = None,
           validate_fields: Optional[FieldValidator] = None, newtype: bool = False):
    """
    Mark a dataclass as a survey.

    ``validate_fields`` runs for every leaf of the type, including leaves of
    nested types. ``newtype=True`` makes a one-field dataclass behave as a
    newtype variant when it is a member of a one_of() union: its single
    field is asked directly under the variant's name.

    Usable bare (``@survey``) or with options (``@survey(prelude=...)``).
    """
    def wrap(target):
        if newtype and len(dataclasses.fields(target)) != 1:
            raise TypeError(f"newtype survey {target.__name__} must have exactly one field")
        setattr(target, SURVEY_ATTR, SurveyOptions(prelude, epilogue, validate_fields, newtype))
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def one_of(*members: type):
    """Declare a single-choice type whose variants are the given dataclasses."""
    if len(members) < 2:
        raise ValueError("one_of() needs at least two variants")
    for member in members:
        if not dataclasses.is_dataclass(member):
            raise TypeError(f"one_of() variant {member!r} is not a dataclass")
    return Union[members]


def ask(prompt: str = "", *, min: Optional[float] = None, max: Optional[float] = None,
        validate: Optional[FieldValidator] = None, mask: Optional[str] = None,
        multiline: bool = False, min_items: Optional[int] = None,
        max_items: Optional[int] = None, default: Any = _NO_DEFAULT):
    """
    Dataclass field carrying question settings.

    ``default`` becomes both the dataclass default and the question's
    pre-filled answer (or pre-selected variant for enums).
    """
    spec = FieldSpec(prompt, min, max, validate, mask, multiline, min_items, max_items, default)
    metadata = {FIELD_METADATA_KEY: spec}
    if default is _NO_DEFAULT:
        return field(metadata=metadata)
    if isinstance(default, list):
        return field(default_factory=lambda: list(default), metadata=metadata)
    return field(default=default, metadata=metadata)


def options_of(cls) -> SurveyOptions:
    return cls.__dict__.get(SURVEY_ATTR) or SurveyOptions()


def _field_spec(f: dataclasses.Field) -> FieldSpec:
    return f.metadata.get(FIELD_METADATA_KEY) or FieldSpec()


# ===================
# Type inspection
# ===================

def _is_union(tp) -> bool:
    return typing.get_origin(tp) in _UNION_TYPES


def _unwrap_optional(tp) -> Tuple[Any, bool]:
    """``Optional[T]`` -> (T, True); anything else -> (tp, False)."""
    if _is_union(tp):
        args = typing.get_args(tp)
        remaining = tuple(arg for arg in args if arg is not type(None))
        if len(remaining) < len(args):
            if len(remaining) == 1:
                return remaining[0], True
            return Union[remaining], True
    return tp, False


def _is_enum(tp) -> bool:
    return isinstance(tp, type) and issubclass(tp, Enum)


def _is_choice(tp) -> bool:
    return _is_enum(tp) or _is_union(tp)


def _union_members(tp) -> Tuple[type, ...]:
    return typing.get_args(tp)


def _is_newtype(member: type) -> bool:
    return options_of(member).newtype


def _choice_names(tp) -> List[str]:
    if _is_enum(tp):
        return [member.name for member in tp]
    return [member.__name__ for member in _union_members(tp)]


def _choice_index(tp, choice: Any) -> int:
    """Variant index of an enum member, union member class or instance, or a raw index."""
    if isinstance(choice, bool):
        raise TypeError("A boolean is not a variant choice")
    if isinstance(choice, int) and not isinstance(choice, Enum):
        return choice
    if _is_enum(tp):
        return list(tp).index(tp(choice))
    members = _union_members(tp)
    member = choice if isinstance(choice, type) else type(choice)
    if member not in members:
        raise TypeError(f"{member.__name__} is not a variant of {tp}")
    return members.index(member)


# ===================
# Validator dispatch
# ===================

@dataclass
class _Rule:
    """Validators for every path matching ``pattern`` while ``guards`` hold."""
    pattern: Tuple[str, ...]
    guards: Tuple[Tuple[int, int], ...]         # (prefix depth, required variant index)
    validators: List[FieldValidator]
    convert: Callable[[ResponseValue], Any] = ResponseValue.to_python

    def matches(self, segments: Tuple[str, ...], responses: Responses) -> bool:
        if len(segments) != len(self.pattern):
            return False
        for expected, actual in zip(self.pattern, segments):
            if expected == WILDCARD:
                if not actual.isdigit():
                    return False
            elif expected != actual:
                return False
        for depth, index in self.guards:
            selected = ResponsePath.from_segments(segments[:depth]).child(SELECTED_VARIANT_KEY)
            if responses.get(selected) != ResponseValue.chosen_variant(index):
                return False
        return True


def _run_validators(rule: _Rule, value: ResponseValue, responses: Responses,
                    path: ResponsePath) -> None:
    native = rule.convert(value)
    for validator in rule.validators:
        error = validator(native, responses, path)
        if error:
            raise ValidationError(error)


# ===================
# Schema
# ===================

class SurveySchema:
    """
    Question tree, reconstruction and validation for one survey dataclass.

    Obtain instances with schema_for(); they are cached per class.
    """

    def __init__(self, cls: type):
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"{cls!r} is not a dataclass")
        self.cls = cls
        self.options = options_of(cls)
        self._rules: List[_Rule] = []
        self._compile()

    # ===================
    # Tree
    # ===================

    def build(self) -> SurveyDefinition:
        """A fresh question tree; callers may attach defaults to it."""
        return SurveyDefinition(
            questions=self._compile(),
            prelude=self.options.prelude,
            epilogue=self.options.epilogue,
        )

    def _compile(self) -> List[Question]:
        self._rules = []
        return self._struct_questions(self.cls, (), (), [])

    def _struct_questions(self, cls: type, pattern: Tuple[str, ...],
                          guards: Tuple[Tuple[int, int], ...],
                          inherited: List[FieldValidator]) -> List[Question]:
        type_validator = options_of(cls).validate_fields
        if type_validator is not None:
            inherited = inherited + [type_validator]

        hints = typing.get_type_hints(cls)
        questions = []
        for f in dataclasses.fields(cls):
            spec = _field_spec(f)
            kind = self._kind_for(hints[f.name], spec, pattern + (f.name,), guards, inherited)
            questions.append(Question(ResponsePath(f.name), spec.prompt, kind))
        return questions

    def _kind_for(self, tp, spec: FieldSpec, pattern: Tuple[str, ...],
                  guards: Tuple[Tuple[int, int], ...],
                  inherited: List[FieldValidator]) -> QuestionKind:
        tp, _optional = _unwrap_optional(tp)
        default = spec.default if spec.has_default() else None

        if tp is bool:
            return ConfirmQuestion(default=bool(default))

        if tp is str or tp is Path:
            self._add_rule(pattern, guards, spec.validate, inherited)
            text = None if default is None else str(default)
            if spec.mask:
                return MaskedQuestion(mask=spec.mask)
            if spec.multiline:
                return MultilineQuestion(default=text)
            return InputQuestion(default=text)

        if tp is int:
            self._add_rule(pattern, guards, spec.validate, inherited)
            return IntQuestion(default=default, min=spec.min, max=spec.max)

        if tp is float:
            self._add_rule(pattern, guards, spec.validate, inherited)
            return FloatQuestion(default=None if default is None else float(default),
                                 min=spec.min, max=spec.max)

        if typing.get_origin(tp) is list:
            (element,) = typing.get_args(tp) or (str,)
            if _is_choice(element):
                return self._any_of(element, spec, pattern, guards, inherited)
            return self._list(element, spec, pattern, guards, inherited)

        if _is_choice(tp):
            if spec.validate is not None:
                raise TypeError(f"Field '{'.'.join(pattern)}': single-choice fields cannot be validated")
            return OneOfQuestion(
                variants=self._variants(tp, pattern, guards, inherited),
                default=None if default is None else _choice_index(tp, default),
            )

        if dataclasses.is_dataclass(tp):
            return AllOfQuestion(self._struct_questions(tp, pattern, guards, inherited))

        raise TypeError(f"Field '{'.'.join(pattern)}' has unsupported type {tp!r}")

    def _list(self, element, spec: FieldSpec, pattern, guards, inherited) -> ListQuestion:
        factories = {str: ListQuestion.strings, int: ListQuestion.ints, float: ListQuestion.floats}
        if element not in factories:
            raise TypeError(f"Field '{'.'.join(pattern)}' has unsupported list element {element!r}")
        self._add_rule(pattern, guards, spec.validate, inherited)
        return factories[element](min=spec.min, max=spec.max,
                                  min_items=spec.min_items, max_items=spec.max_items)

    def _any_of(self, element, spec: FieldSpec, pattern, guards, inherited) -> AnyOfQuestion:
        if spec.validate is not None:
            self._rules.append(_Rule(pattern, guards, [spec.validate],
                                     convert=_selection_converter(element)))
        defaults = spec.default if spec.has_default() else []
        return AnyOfQuestion(
            variants=self._variants(element, pattern + (WILDCARD,), guards, inherited),
            defaults=[_choice_index(element, choice) for choice in defaults],
        )

    def _variants(self, tp, scope: Tuple[str, ...], guards: Tuple[Tuple[int, int], ...],
                  inherited: List[FieldValidator]) -> List[Variant]:
        """Variants of a choice type whose follow-ups live under ``scope``."""
        if _is_enum(tp):
            return [Variant.unit(member.name) for member in tp]

        variants = []
        for index, member in enumerate(_union_members(tp)):
            if not dataclasses.is_dataclass(member):
                raise TypeError(f"Variant {member!r} of {tp!r} is not a dataclass")
            variant_guards = guards + ((len(scope), index),)
            fields = dataclasses.fields(member)

            if _is_newtype(member):
                (only,) = fields
                hint = typing.get_type_hints(member)[only.name]
                kind = self._kind_for(hint, _field_spec(only),
                                      scope + (variant_segment(member.__name__),),
                                      variant_guards, inherited)
                variants.append(Variant(member.__name__, kind))
            elif not fields:
                variants.append(Variant.unit(member.__name__))
            else:
                variants.append(Variant(member.__name__, AllOfQuestion(
                    self._struct_questions(member, scope, variant_guards, inherited))))
        return variants

    def _add_rule(self, pattern, guards, validator: Optional[FieldValidator],
                  inherited: List[FieldValidator]) -> None:
        validators = ([validator] if validator is not None else []) + inherited
        if validators:
            self._rules.append(_Rule(pattern, guards, validators))

    # ===================
    # Validation
    # ===================

    def validate_field(self, value: ResponseValue, responses: Responses,
                       path: ResponsePath) -> None:
        """Route a value to the validators registered for its path."""
        segments = tuple(path.segments())
        for rule in self._rules:
            if rule.matches(segments, responses):
                _run_validators(rule, value, responses, path)

    def validate_all(self, responses: Responses) -> Dict[ResponsePath, str]:
        """
        Re-run every validator over a finished response map.

        Each value is checked against the map without itself, the way the
        interview checked it. Assumed answers never went through a validator
        during the interview, so this is where they get caught.

        Returns:
            First error message per failing path; empty when all pass
        """
        errors: Dict[ResponsePath, str] = {}
        for key, value in responses.items():
            if key.last() == SELECTED_VARIANT_KEY:
                continue
            path = key.parent() if key.last() == SELECTED_VARIANTS_KEY else key

            others = responses.copy()
            others.remove(key)
            try:
                self.validate_field(value, others, path)
            except ValidationError as e:
                errors[path] = e.message
        if errors:
            logger.info("validate_all failures=%d survey=%s", len(errors), self.cls.__name__)
        return errors

    # ===================
    # Reconstruction
    # ===================

    def from_responses(self, responses: Responses):
        """Rebuild an instance of the survey class."""
        return _read_struct(self.cls, responses)

    def to_responses(self, instance) -> Responses:
        """Flatten an instance into the responses an interview would produce."""
        responses = Responses()
        _write_struct(instance, responses, ResponsePath.empty())
        return responses


def _selection_converter(element) -> Callable[[ResponseValue], Any]:
    if _is_enum(element):
        members = list(element)
    else:
        members = list(_union_members(element))

    def convert(value: ResponseValue) -> List[Any]:
        return [members[index] for index in value.value]
    return convert


def _read_struct(cls: type, scoped: Responses):
    """Build ``cls`` from a sub-map whose keys are relative to the struct."""
    hints = typing.get_type_hints(cls)
    values = {}
    for f in dataclasses.fields(cls):
        values[f.name] = _read_value(hints[f.name], scoped, ResponsePath(f.name))
    return cls(**values)


def _read_value(tp, scoped: Responses, path: ResponsePath):
    tp, optional = _unwrap_optional(tp)

    if optional and not scoped.has_value(path) and not _is_structured(tp):
        return None
    if tp is bool:
        return scoped.get_bool(path)
    if tp is str:
        return scoped.get_string(path)
    if tp is Path:
        return Path(scoped.get_string(path))
    if tp is int:
        return scoped.get_int(path)
    if tp is float:
        return scoped.get_float(path)

    if typing.get_origin(tp) is list:
        (element,) = typing.get_args(tp) or (str,)
        if _is_choice(element):
            items = []
            selection = scoped.get_chosen_variants(path.child(SELECTED_VARIANTS_KEY))
            for item_index, variant_index in enumerate(selection):
                item_scope = scoped.filter_prefix(path.child(str(item_index)))
                items.append(_read_choice(element, variant_index, item_scope, path))
            return items
        readers = {str: scoped.get_string_list, int: scoped.get_int_list,
                   float: scoped.get_float_list}
        return readers[element](path)

    if _is_choice(tp):
        index = scoped.get_chosen_variant(path.child(SELECTED_VARIANT_KEY))
        return _read_choice(tp, index, scoped.filter_prefix(path), path)

    if dataclasses.is_dataclass(tp):
        return _read_struct(tp, scoped.filter_prefix(path))

    raise TypeError(f"Unsupported type {tp!r} at '{path}'")


def _is_structured(tp) -> bool:
    return _is_choice(tp) or dataclasses.is_dataclass(tp) or typing.get_origin(tp) is list


def _read_choice(tp, index: int, scoped: Responses, path: ResponsePath):
    names = _choice_names(tp)
    if not 0 <= index < len(names):
        raise InvalidVariant(path, index, f"{len(names)} variants available")
    if _is_enum(tp):
        return list(tp)[index]

    member = _union_members(tp)[index]
    if _is_newtype(member):
        (only,) = dataclasses.fields(member)
        hint = typing.get_type_hints(member)[only.name]
        return member(_read_value(hint, scoped, ResponsePath(variant_segment(member.__name__))))
    return _read_struct(member, scoped)


def _write_struct(instance, responses: Responses, prefix: ResponsePath) -> None:
    hints = typing.get_type_hints(type(instance))
    for f in dataclasses.fields(instance):
        _write_value(hints[f.name], getattr(instance, f.name), responses, prefix.child(f.name))


def _write_value(tp, value, responses: Responses, path: ResponsePath) -> None:
    tp, optional = _unwrap_optional(tp)

    if value is None:
        if optional and tp in (str, Path):
            responses.insert(path, "")
        return
    if tp is Path:
        responses.insert(path, str(value))
    elif tp is float:
        responses.insert(path, ResponseValue.floating(value))
    elif typing.get_origin(tp) is list:
        (element,) = typing.get_args(tp) or (str,)
        if _is_choice(element):
            indices = [_choice_index(element, item) for item in value]
            responses.insert(path.child(SELECTED_VARIANTS_KEY), ResponseValue.chosen_variants(indices))
            for item_index, (variant_index, item) in enumerate(zip(indices, value)):
                _write_choice(element, variant_index, item, responses, path.child(str(item_index)))
        else:
            builders = {str: ResponseValue.string_list, int: ResponseValue.int_list,
                        float: ResponseValue.float_list}
            responses.insert(path, builders[element](value))
    elif _is_choice(tp):
        _write_choice(tp, _choice_index(tp, value), value, responses, path)
    elif dataclasses.is_dataclass(tp):
        _write_struct(value, responses, path)
    else:
        responses.insert(path, value)


def _write_choice(tp, index: int, value, responses: Responses, path: ResponsePath) -> None:
    responses.insert(path.child(SELECTED_VARIANT_KEY), ResponseValue.chosen_variant(index))
    if _is_enum(tp):
        return
    member = type(value)
    if _is_newtype(member):
        (only,) = dataclasses.fields(member)
        hint = typing.get_type_hints(member)[only.name]
        _write_value(hint, getattr(value, only.name), responses,
                     path.child(variant_segment(member.__name__)))
    else:
        _write_struct(value, responses, path)


_SCHEMAS: Dict[type, SurveySchema] = {}


def schema_for(cls: type) -> SurveySchema:
    """Cached schema for a survey dataclass."""
    schema = _SCHEMAS.get(cls)
    if schema is None:
        schema = SurveySchema(cls)
        _SCHEMAS[cls] = schema
    return schema


# ===================
# Builder
# ===================

class SurveyBuilder:
    """
    Attach suggestions and assumptions to a survey before running it.

    ``suggest_<field>(value)`` and ``assume_<field>(value)`` are generated
    from the tree; nested fields join their path segments with ``_``
    (``assume_address_city``). Assumptions win over suggestions.
    """

    def __init__(self, cls: type):
        self.schema = schema_for(cls)
        self._suggestions: Dict[ResponsePath, Any] = {}
        self._assumptions: Dict[ResponsePath, Any] = {}
        self._bulk: Dict[ResponsePath, ResponseValue] = {}
        self._kinds = _index_kinds(self.schema.build().questions)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        for verb, target in (("suggest_", self.suggest), ("assume_", self.assume)):
            if name.startswith(verb):
                path = self._field_path(name[len(verb):])
                if path is not None:
                    return lambda value: target(path, value)
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    def _field_path(self, flat_name: str) -> Optional[ResponsePath]:
        for path in self._kinds:
            if path.as_str().replace(".", "_") == flat_name:
                return path
        return None

    def suggest(self, path: PathLike, value: Any) -> "SurveyBuilder":
        """Pre-fill the question at path; the user may still change it."""
        path = as_path(path)
        self._suggestions[path] = self._coerce(path, value)
        return self

    def assume(self, path: PathLike, value: Any) -> "SurveyBuilder":
        """Answer the question at path without asking."""
        path = as_path(path)
        self._assumptions[path] = self._coerce(path, value)
        return self

    def with_suggestions(self, instance) -> "SurveyBuilder":
        """Suggest every answer of a previous value (enum choices pre-select)."""
        for path, value in self.schema.to_responses(instance).items():
            if path.last() in (SELECTED_VARIANT_KEY, SELECTED_VARIANTS_KEY):
                path = path.parent()
            if path in self._kinds:
                self._bulk[path] = value
        return self

    def build(self) -> SurveyDefinition:
        definition = self.schema.build()
        _apply_defaults(definition.questions, ResponsePath.empty(),
                        {**self._bulk, **self._suggestions}, self._assumptions)
        return definition

    def run(self, backend: InterviewBackend, max_attempts: Optional[int] = None):
        """Run the interview and rebuild the answered instance."""
        logger.info("survey_run survey=%s suggestions=%d assumptions=%d",
                    self.schema.cls.__name__,
                    len(self._suggestions) + len(self._bulk), len(self._assumptions))
        responses = backend.collect(self.build(), self.schema.validate_field,
                                    max_attempts=max_attempts)
        return self.schema.from_responses(responses)

    def _coerce(self, path: ResponsePath, value: Any) -> ResponseValue:
        kind = self._kinds.get(path)
        if kind is None:
            raise KeyError(f"Unknown survey path: {path}")
        return coerce_default(kind, value, self._choice_type(path))

    def _choice_type(self, path: ResponsePath):
        """Host choice type behind the question at path, when there is one."""
        tp = self.schema.cls
        for segment in path.segments():
            candidates = _union_members(tp) if _is_union(tp) else (tp,)
            owners = [c for c in candidates
                      if dataclasses.is_dataclass(c) and segment in typing.get_type_hints(c)]
            if not owners:
                return None
            tp, _optional = _unwrap_optional(typing.get_type_hints(owners[0])[segment])
            if typing.get_origin(tp) is list:
                tp = (typing.get_args(tp) or (str,))[0]
        return tp if _is_choice(tp) else None


def builder(cls: type) -> SurveyBuilder:
    return SurveyBuilder(cls)


def coerce_default(kind: QuestionKind, value: Any, choice_type=None) -> ResponseValue:
    """Turn a caller-supplied default into the value kind the question expects."""
    if isinstance(kind, OneOfQuestion):
        if isinstance(value, ResponseValue):
            return value
        index = _choice_index(choice_type, value) if choice_type is not None else value
        return ResponseValue.chosen_variant(index)
    if isinstance(kind, AnyOfQuestion):
        if isinstance(value, ResponseValue):
            return value
        if choice_type is not None:
            value = [_choice_index(choice_type, item) for item in value]
        return ResponseValue.chosen_variants(value)

    if isinstance(value, Path):
        value = str(value)
    result = ResponseValue.from_python(value)
    expected = kind.value_kind()
    if expected is ValueKind.FLOAT and result.kind is ValueKind.INT:
        return ResponseValue.floating(result.value)
    if expected is ValueKind.FLOAT_LIST and result.kind is ValueKind.INT_LIST:
        return ResponseValue.float_list(result.value)
    if expected is not None and result.kind is not expected:
        raise TypeError(f"Expected {expected.value} default, got {result.type_name}")
    return result


def _index_kinds(questions: List[Question],
                 prefix: ResponsePath = ResponsePath.empty()) -> Dict[ResponsePath, QuestionKind]:
    """Every addressable question path (groups and struct-variant fields included)."""
    kinds: Dict[ResponsePath, QuestionKind] = {}
    for question in questions:
        path = prefix.child(question.path)
        kinds[path] = question.kind
        if isinstance(question.kind, AllOfQuestion):
            kinds.update(_index_kinds(question.kind.questions, path))
        elif isinstance(question.kind, OneOfQuestion):
            for variant in question.kind.variants:
                if isinstance(variant.kind, AllOfQuestion):
                    kinds.update(_index_kinds(variant.kind.questions, path))
    return kinds


def _apply_defaults(questions: List[Question], prefix: ResponsePath,
                    suggestions: Dict[ResponsePath, ResponseValue],
                    assumptions: Dict[ResponsePath, ResponseValue]) -> None:
    for question in questions:
        path = prefix.child(question.path)
        if path in assumptions:
            question.set_assumption(assumptions[path])
        elif path in suggestions:
            question.set_suggestion(suggestions[path])

        kind = question.kind
        if isinstance(kind, AllOfQuestion):
            _apply_defaults(kind.questions, path, suggestions, assumptions)
        elif isinstance(kind, OneOfQuestion):
            for variant in kind.variants:
                if isinstance(variant.kind, AllOfQuestion):
                    _apply_defaults(variant.kind.questions, path, suggestions, assumptions)
