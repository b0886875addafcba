"""
Apply Stimulus options to a rendered node's attribute mapping.

Entry points:
    - `decorate(attrs, options)`: fold the three stimulus options of one node into its
      attribute mapping.
    - `build_view(view, options)`: decorate a field node and its `row_attr` /
      `choice_attr` sub-views.
    - `resolve_options(raw, context=...)`: apply defaults, reject unknown keys and
      resolve callables before decoding.

Each node gets its own `StimulusAttributes`; the accumulator is passed through the
`fold_*` helpers and returned, never stored on a module or instance.
"""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

from stimulus_forms.attributes import StimulusAttributes
from stimulus_forms.bindings import (
    DetailedController,
    decode_actions,
    decode_controllers,
    decode_targets,
)
from stimulus_forms.exceptions import InvalidOptionShape

logger = logging.getLogger(__name__)

CONTROLLER = "stimulus_controller"
TARGET = "stimulus_target"
ACTION = "stimulus_action"
STIMULUS_KEYS = (CONTROLLER, TARGET, ACTION)

ROW_ATTR = "row_attr"
CHOICE_ATTR = "choice_attr"
SUB_VIEW_KEYS = (ROW_ATTR, CHOICE_ATTR)

OPTION_KEYS = STIMULUS_KEYS + SUB_VIEW_KEYS

_ALLOWED_TYPES = (str, list, tuple, Mapping)


# ----------------------
# Fold steps
# ----------------------
def fold_controllers(attributes: StimulusAttributes, raw: Any) -> StimulusAttributes:
    for spec in decode_controllers(raw):
        if isinstance(spec, DetailedController):
            attributes.add_controller(spec.name, spec.values, spec.classes, spec.outlets)
        else:
            attributes.add_controller(spec.name)
    return attributes


def fold_targets(attributes: StimulusAttributes, raw: Any) -> StimulusAttributes:
    for binding in decode_targets(raw):
        attributes.add_target(binding.controller, binding.joined)
    return attributes


def fold_actions(attributes: StimulusAttributes, raw: Any) -> StimulusAttributes:
    for binding in decode_actions(raw):
        attributes.add_action(binding.controller, binding.action, binding.event, binding.params)
    return attributes


def has_stimulus_options(options: Optional[Mapping]) -> bool:
    return bool(options) and any(options.get(key) is not None for key in STIMULUS_KEYS)


def build_attributes(options: Mapping) -> StimulusAttributes:
    """
    Build a fresh accumulator from the three stimulus options of one node.

    Controllers are folded first, then targets, then actions.
    """
    attributes = StimulusAttributes()
    attributes = fold_controllers(attributes, options.get(CONTROLLER))
    attributes = fold_targets(attributes, options.get(TARGET))
    attributes = fold_actions(attributes, options.get(ACTION))
    return attributes


def decorate(attrs: MutableMapping, options: Optional[Mapping]) -> None:
    """
    Merge the Stimulus attributes described by `options` into `attrs` in place.

    Args:
        attrs (MutableMapping): The node's existing attribute mapping, e.g.
            `field.widget.attrs`.
        options (Mapping | None): May hold `stimulus_controller`, `stimulus_target`
            and `stimulus_action`; other keys are ignored.

    Returns:
        None

    Raises:
        InvalidOptionShape: If one of the options has an unsupported shape.
        InvalidActionFormat: If an action descriptor string cannot be parsed.

    Notes:
        - When every stimulus option is missing or None, `attrs` is left untouched.
        - Keys already in `attrs` that the options also produce are overwritten;
          all other keys are kept.
    """
    if not has_stimulus_options(options):
        return
    serialized = build_attributes(options).to_dict()
    logger.debug("Applying stimulus attributes %s", serialized)
    attrs.update(serialized)


def sub_view_attrs(sub_options: Optional[Mapping]) -> Dict[str, Any]:
    """
    Build the attribute mapping of a sub-view (row wrapper or choice option).

    Plain attributes are kept as given; the stimulus option keys are removed and
    replaced by the attributes they describe.
    """
    if not sub_options:
        return {}
    plain = {key: value for key, value in sub_options.items() if key not in STIMULUS_KEYS}
    decorate(plain, sub_options)
    return plain


# ----------------------
# Field nodes
# ----------------------
@dataclass
class FieldView:
    """
    Attribute bags of one rendered field.

    Attributes:
        attrs (dict): Attributes of the field's own element (the widget).
        row_attr (dict): Attributes of the wrapper around label, widget and errors.
        choice_attr (dict | callable): Attributes applied to every choice of a choice
            widget, or a callable `(value, label, index) -> dict` evaluated per choice.
    """
    attrs: Dict[str, Any] = field(default_factory=dict)
    row_attr: Dict[str, Any] = field(default_factory=dict)
    choice_attr: Any = field(default_factory=dict)


def choice_attr_resolver(choice_attr: Any) -> Any:
    """
    Turn a `choice_attr` option into what a choice widget consumes.

    A mapping is decorated once and shared by every choice. A callable is wrapped so
    each choice's returned options are decorated as that choice is rendered.
    """
    if choice_attr is None:
        return {}
    if callable(choice_attr):
        def resolve(value, label, index):
            return sub_view_attrs(choice_attr(value, label, index))
        return resolve
    if isinstance(choice_attr, Mapping):
        return sub_view_attrs(choice_attr)
    raise InvalidOptionShape(
        f"{CHOICE_ATTR}: expected a mapping or a callable, got {type(choice_attr).__name__}."
    )


def build_view(view: FieldView, options: Mapping) -> FieldView:
    """
    Decorate a field node and its sub-views.

    Args:
        view (FieldView): The node to mutate.
        options (Mapping): Resolved options (see `resolve_options`).

    Returns:
        FieldView: the same `view`, for chaining.
    """
    decorate(view.attrs, options)

    row_attr = options.get(ROW_ATTR)
    if row_attr is not None:
        if not isinstance(row_attr, Mapping):
            raise InvalidOptionShape(
                f"{ROW_ATTR}: expected a mapping, got {type(row_attr).__name__}."
            )
        view.row_attr.update(sub_view_attrs(row_attr))

    view.choice_attr = choice_attr_resolver(options.get(CHOICE_ATTR))
    return view


# ----------------------
# Options resolver
# ----------------------
def _resolve_value(key: str, value: Any, context: Any) -> Any:
    if key == CHOICE_ATTR and callable(value):
        # evaluated per choice by the widget
        return value
    if callable(value):
        value = value(context)
    if value is None:
        return None
    if key in SUB_VIEW_KEYS:
        if not isinstance(value, Mapping):
            raise InvalidOptionShape(f"{key}: expected a mapping, got {type(value).__name__}.")
        resolved = dict(value)
        for sub_key in STIMULUS_KEYS:
            if sub_key in resolved:
                resolved[sub_key] = _resolve_value(sub_key, resolved[sub_key], context)
        return resolved
    if not isinstance(value, _ALLOWED_TYPES):
        raise InvalidOptionShape(
            f"{key}: expected a string, list, mapping, callable or None, "
            f"got {type(value).__name__}."
        )
    return value


def resolve_options(raw: Optional[Mapping], *, context: Any = None) -> Dict[str, Any]:
    """
    Normalize a per-field options mapping.

    Args:
        raw (Mapping | None): Options as declared, e.g. in `Meta.stimulus`.
        context (Any): Passed to callable option values; the form instance when called
            from `StimulusFormMixin`.

    Returns:
        Dict[str, Any]: every key of `OPTION_KEYS`, missing ones set to None, callables
        evaluated (except a callable `choice_attr`, which is evaluated per choice).

    Raises:
        InvalidOptionShape: For unknown keys or values of an unsupported type.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise InvalidOptionShape(f"Stimulus options must be a mapping, got {type(raw).__name__}.")
    unknown = sorted(set(raw) - set(OPTION_KEYS))
    if unknown:
        raise InvalidOptionShape(
            f"Unknown stimulus option(s) {unknown}; allowed options are {list(OPTION_KEYS)}."
        )
    return {key: _resolve_value(key, raw.get(key), context) for key in OPTION_KEYS}


def apply_options(view: FieldView, raw: Optional[Mapping], *, context: Any = None) -> FieldView:
    """Resolve `raw` and decorate `view` with it."""
    return build_view(view, resolve_options(raw, context=context))
