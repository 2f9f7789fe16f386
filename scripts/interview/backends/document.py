"""
Document Renderers
One-way Markdown and HTML forms generated from a question tree
"""

import html
from typing import List, Optional, Tuple

from ..models import (
    AllOfQuestion,
    AnyOfQuestion,
    ConfirmQuestion,
    FloatQuestion,
    InputQuestion,
    IntQuestion,
    ListElementKind,
    ListQuestion,
    MaskedQuestion,
    MultilineQuestion,
    OneOfQuestion,
    Question,
    QuestionKind,
    SurveyDefinition,
    Variant,
    label_from_segment,
    variant_segment,
)
from ..response_path import ResponsePath

_LIST_NOUNS = {
    ListElementKind.STRING: "text",
    ListElementKind.INT: "whole numbers",
    ListElementKind.FLOAT: "numbers",
}


def describe_kind(kind: QuestionKind) -> str:
    """Short answer-format hint, e.g. ``whole number, 0 to 120``."""
    if isinstance(kind, (IntQuestion, FloatQuestion)):
        noun = "whole number" if isinstance(kind, IntQuestion) else "number"
        return noun + _range_hint(kind.min, kind.max)
    if isinstance(kind, ConfirmQuestion):
        return "yes / no"
    if isinstance(kind, MaskedQuestion):
        return "secret"
    if isinstance(kind, MultilineQuestion):
        return "multi-line text"
    if isinstance(kind, InputQuestion):
        return "text"
    if isinstance(kind, ListQuestion):
        hint = f"list of {_LIST_NOUNS[kind.element_kind]}" + _range_hint(kind.min, kind.max)
        if kind.min_items is not None or kind.max_items is not None:
            hint += f", {_count_hint(kind.min_items, kind.max_items)}"
        return hint
    if isinstance(kind, OneOfQuestion):
        return "choose one"
    if isinstance(kind, AnyOfQuestion):
        return "choose any"
    return ""


def _range_hint(minimum, maximum) -> str:
    if minimum is not None and maximum is not None:
        return f", {minimum} to {maximum}"
    if minimum is not None:
        return f", at least {minimum}"
    if maximum is not None:
        return f", at most {maximum}"
    return ""


def _count_hint(minimum: Optional[int], maximum: Optional[int]) -> str:
    if minimum is not None and maximum is not None:
        return f"{minimum} to {maximum} items"
    if minimum is not None:
        return f"at least {minimum} items"
    return f"at most {maximum} items"


def _suggestion(question: Question) -> Optional[str]:
    # Secrets are never printed, pre-filled or not
    if not question.default.is_suggested() or isinstance(question.kind, MaskedQuestion):
        return None
    value = question.default.value.to_python()
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


# ===================
# Markdown
# ===================

def render_markdown(definition: SurveyDefinition, title: Optional[str] = None) -> str:
    """Render the survey as a nested Markdown list; assumed questions are omitted."""
    lines = [f"# {title or 'Survey'}", ""]
    if definition.prelude:
        lines += [definition.prelude, ""]

    for question in definition.questions:
        lines += _markdown_question(question, ResponsePath.empty(), 0)

    if definition.epilogue:
        lines += ["", definition.epilogue]
    return "\n".join(lines) + "\n"


def _markdown_question(question: Question, prefix: ResponsePath, depth: int) -> List[str]:
    path = prefix.child(question.path)
    if question.is_assumed():
        lines = []
        for scope, nested in _assumed_follow_ups(question, path):
            lines += _markdown_question(nested, scope, depth)
        return lines
    if question.kind.is_unit():
        return []

    indent = "  " * depth
    kind = question.kind
    line = f"{indent}- **{question.display_prompt(path)}**"

    hint = describe_kind(kind)
    if hint:
        line += f" _({hint})_"
    suggestion = _suggestion(question)
    if suggestion:
        line += f" [suggested: {suggestion}]"

    lines = [line]
    if isinstance(kind, AllOfQuestion):
        for nested in kind.questions:
            lines += _markdown_question(nested, path, depth + 1)
    elif isinstance(kind, (OneOfQuestion, AnyOfQuestion)):
        box = "( )" if isinstance(kind, OneOfQuestion) else "[ ]"
        for variant in kind.variants:
            lines.append(f"{indent}  - {box} {variant.name}")
            for nested in _follow_ups(variant):
                lines += _markdown_question(nested, path, depth + 2)
    return lines


def _follow_ups(variant: Variant) -> List[Question]:
    """Questions asked after a variant is chosen."""
    if variant.kind.is_unit():
        return []
    if isinstance(variant.kind, AllOfQuestion):
        return variant.kind.questions
    return [Question(ResponsePath(variant_segment(variant.name)),
                     label_from_segment(variant.name), variant.kind)]


def _assumed_follow_ups(question: Question,
                        path: ResponsePath) -> List[Tuple[ResponsePath, Question]]:
    """
    Follow-ups still asked under an assumed selection, with their prefixes.

    The assumed menu itself is skipped; items of a multi-select are keyed
    by item index.
    """
    kind = question.kind
    chosen = question.default.value.value
    if isinstance(kind, OneOfQuestion):
        return [(path, nested) for nested in _follow_ups(kind.variants[chosen])]
    if isinstance(kind, AnyOfQuestion):
        return [(path.child(str(item)), nested)
                for item, index in enumerate(chosen)
                for nested in _follow_ups(kind.variants[index])]
    return []


# ===================
# HTML
# ===================

def render_html(definition: SurveyDefinition, title: Optional[str] = None) -> str:
    """Render the survey as a standalone HTML form skeleton."""
    heading = html.escape(title or "Survey")
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        f"<head><meta charset=\"utf-8\"><title>{heading}</title></head>",
        "<body>",
        f"<h1>{heading}</h1>",
    ]
    if definition.prelude:
        parts.append(f"<p class=\"prelude\">{html.escape(definition.prelude)}</p>")

    parts.append("<form>")
    parts += _html_questions(definition.questions, ResponsePath.empty())
    parts.append("</form>")

    if definition.epilogue:
        parts.append(f"<p class=\"epilogue\">{html.escape(definition.epilogue)}</p>")
    parts += ["</body>", "</html>"]
    return "\n".join(parts) + "\n"


def _html_questions(questions: List[Question], prefix: ResponsePath) -> List[str]:
    parts = []
    for question in questions:
        if question.is_assumed():
            for scope, nested in _assumed_follow_ups(question, prefix.child(question.path)):
                parts += _html_questions([nested], scope)
            continue
        if question.kind.is_unit():
            continue
        parts += _html_question(question, prefix)
    return parts


def _html_question(question: Question, prefix: ResponsePath) -> List[str]:
    path = prefix.child(question.path)
    name = html.escape(path.as_str(), quote=True)
    label = html.escape(question.display_prompt(path))
    kind = question.kind
    suggestion = _suggestion(question) or ""
    value = f" value=\"{html.escape(suggestion, quote=True)}\"" if suggestion else ""

    if isinstance(kind, AllOfQuestion):
        return ([f"<fieldset><legend>{label}</legend>"]
                + _html_questions(kind.questions, path)
                + ["</fieldset>"])

    if isinstance(kind, (OneOfQuestion, AnyOfQuestion)):
        input_type = "radio" if isinstance(kind, OneOfQuestion) else "checkbox"
        parts = [f"<fieldset><legend>{label}</legend>"]
        for index, variant in enumerate(kind.variants):
            parts.append(
                f"<label><input type=\"{input_type}\" name=\"{name}\" value=\"{index}\"> "
                f"{html.escape(variant.name)}</label>"
            )
            follow_ups = _html_questions(_follow_ups(variant), path)
            if follow_ups:
                parts += ["<div class=\"follow-up\">"] + follow_ups + ["</div>"]
        parts.append("</fieldset>")
        return parts

    hint = html.escape(describe_kind(kind))
    if isinstance(kind, ConfirmQuestion):
        control = f"<input type=\"checkbox\" name=\"{name}\">"
    elif isinstance(kind, MultilineQuestion):
        control = f"<textarea name=\"{name}\">{html.escape(suggestion)}</textarea>"
    elif isinstance(kind, MaskedQuestion):
        control = f"<input type=\"password\" name=\"{name}\">"
    elif isinstance(kind, (IntQuestion, FloatQuestion)):
        step = "1" if isinstance(kind, IntQuestion) else "any"
        bounds = "".join(f" {attr}=\"{bound}\"" for attr, bound in
                         (("min", kind.min), ("max", kind.max)) if bound is not None)
        control = f"<input type=\"number\" step=\"{step}\" name=\"{name}\"{bounds}{value}>"
    else:
        control = f"<input type=\"text\" name=\"{name}\"{value}>"
    return [f"<p><label>{label} <small>({hint})</small> {control}</label></p>"]
