"""
Decoding of raw Stimulus options into binding records.

Options arrive in several shapes (a bare string, a list, nested dicts). Each shape is
recognized here once and turned into a small immutable record, so the rest of the
package only deals with `BareController`, `DetailedController`, `TargetBinding` and
`ActionBinding`.

Accepted shapes:

    stimulus_controller:
        "modal"
        ["modal", "tooltip"]
        {"modal": {"values": {...}, "classes": {...}, "outlets": {...}}}
        {"modal": None}                       # same as "modal"

    stimulus_target:
        {"search": "input"}
        {"search": ["input", "results"]}

    stimulus_action:
        "search#query"
        "input->search#query"
        {"search": "query"}
        {"search": {"input": "query"}}
        {"search": {"input": {"query": {"limit": 10}}}}

Limitation: any string containing `#` is read as an action descriptor.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from stimulus_forms.exceptions import InvalidActionFormat, InvalidOptionShape

DETAIL_KEYS = ("values", "classes", "outlets")


# ----------------------
# Records
# ----------------------
@dataclass(frozen=True)
class BareController:
    name: str


@dataclass(frozen=True)
class DetailedController:
    name: str
    values: Dict[str, Any] = field(default_factory=dict)
    classes: Dict[str, Any] = field(default_factory=dict)
    outlets: Dict[str, Any] = field(default_factory=dict)


ControllerSpec = Union[BareController, DetailedController]


@dataclass(frozen=True)
class TargetBinding:
    controller: str
    names: Tuple[str, ...]

    @property
    def joined(self) -> str:
        return " ".join(self.names)


@dataclass(frozen=True)
class ActionBinding:
    controller: str
    action: str
    event: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


# ----------------------
# Helpers
# ----------------------
def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _mapping_or_empty(value: Any, *, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidOptionShape(f"{where} must be a mapping, got {_type_name(value)}.")
    return dict(value)


def parse_action_descriptor(descriptor: str) -> ActionBinding:
    """
    Parse "controller#action" or "event->controller#action".

    The string is split on the first "->" (when present) and the remainder on the
    first "#".

    Raises:
        InvalidActionFormat: If there is no "#" or either side of it is empty.
    """
    if "#" not in descriptor:
        raise InvalidActionFormat(
            f"stimulus_action: {descriptor!r} is not an action descriptor; expected "
            f"'controller#action' or 'event->controller#action'."
        )
    event = None
    rest = descriptor
    if "->" in descriptor:
        event, rest = descriptor.split("->", 1)
    if "#" not in rest:
        raise InvalidActionFormat(
            f"stimulus_action: {descriptor!r} has no '#' after its event; expected "
            f"'event->controller#action'."
        )
    controller, action = rest.split("#", 1)
    if not controller or not action:
        raise InvalidActionFormat(
            f"stimulus_action: {descriptor!r} has an empty controller or action name."
        )
    return ActionBinding(controller=controller, action=action, event=event or None)


# ----------------------
# Decoders
# ----------------------
def decode_controllers(raw: Any) -> List[ControllerSpec]:
    """
    Decode the `stimulus_controller` option.

    Args:
        raw: `None`, a name, a list of names, or a mapping of name to detail.

    Returns:
        List[ControllerSpec]: in declaration order; empty names are dropped.

    Raises:
        InvalidOptionShape: For any other type, or a detail that is not a mapping.

    Notes:
        - A mapping entry whose value is a string registers the *value* as a bare
          controller (the key is only a label), mirroring list-like mappings.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return [BareController(raw)] if raw else []
    if _is_sequence(raw):
        specs: List[ControllerSpec] = []
        for name in raw:
            if not isinstance(name, str):
                raise InvalidOptionShape(
                    f"stimulus_controller: list entries must be strings, got {_type_name(name)}."
                )
            if name:
                specs.append(BareController(name))
        return specs
    if isinstance(raw, Mapping):
        specs = []
        for name, detail in raw.items():
            if isinstance(detail, str):
                if detail:
                    specs.append(BareController(detail))
            elif detail is None:
                if name:
                    specs.append(BareController(str(name)))
            elif isinstance(detail, Mapping):
                unknown = sorted(set(detail) - set(DETAIL_KEYS))
                if unknown:
                    raise InvalidOptionShape(
                        f"stimulus_controller: unknown keys {unknown} for controller '{name}'; "
                        f"allowed keys are {list(DETAIL_KEYS)}."
                    )
                where = f"stimulus_controller: controller '{name}'"
                specs.append(DetailedController(
                    name=str(name),
                    values=_mapping_or_empty(detail.get("values"), where=f"{where} values"),
                    classes=_mapping_or_empty(detail.get("classes"), where=f"{where} classes"),
                    outlets=_mapping_or_empty(detail.get("outlets"), where=f"{where} outlets"),
                ))
            else:
                raise InvalidOptionShape(
                    f"stimulus_controller: controller '{name}' must map to a string, a mapping "
                    f"or None, got {_type_name(detail)}."
                )
        return specs
    raise InvalidOptionShape(
        f"stimulus_controller: expected a string, list or mapping, got {_type_name(raw)}."
    )


def decode_targets(raw: Any) -> List[TargetBinding]:
    """Decode the `stimulus_target` option (mapping of controller to target name(s))."""
    if raw is None:
        return []
    if not isinstance(raw, Mapping):
        raise InvalidOptionShape(
            f"stimulus_target: expected a mapping of controller to target names, "
            f"got {_type_name(raw)}."
        )
    bindings = []
    for controller, names in raw.items():
        if names is None:
            continue
        if isinstance(names, str):
            tokens = tuple(names.split())
        elif _is_sequence(names):
            tokens = tuple(str(n) for n in names if n)
        else:
            raise InvalidOptionShape(
                f"stimulus_target: targets of '{controller}' must be a string or a list, "
                f"got {_type_name(names)}."
            )
        if tokens:
            bindings.append(TargetBinding(controller=str(controller), names=tokens))
    return bindings


def decode_actions(raw: Any) -> List[ActionBinding]:
    """
    Decode the `stimulus_action` option.

    Precedence, first match wins:
        1. a string: parsed as a single descriptor and nothing else is registered.
        2. a mapping: each controller maps to an action name, to `{event: action}`
           or to `{event: {action: params}}`.

    Raises:
        InvalidActionFormat: For a non-empty string without "#".
        InvalidOptionShape: For unsupported types at any nesting level.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return [parse_action_descriptor(raw)] if raw else []
    if not isinstance(raw, Mapping):
        raise InvalidOptionShape(
            f"stimulus_action: expected a descriptor string or a mapping, got {_type_name(raw)}."
        )

    bindings = []
    for controller, value in raw.items():
        if isinstance(value, str):
            if value:
                bindings.append(ActionBinding(controller=str(controller), action=value))
        elif isinstance(value, Mapping):
            for event, action in value.items():
                if isinstance(action, str):
                    if action:
                        bindings.append(ActionBinding(str(controller), action, str(event)))
                elif isinstance(action, Mapping):
                    for action_name, params in action.items():
                        bindings.append(ActionBinding(
                            controller=str(controller),
                            action=str(action_name),
                            event=str(event),
                            params=_mapping_or_empty(params, where=f"stimulus_action: params of '{controller}#{action_name}'"),
                        ))
                else:
                    raise InvalidOptionShape(
                        f"stimulus_action: '{controller}' event '{event}' must map to an action "
                        f"name or to {{action: params}}, got {_type_name(action)}."
                    )
        elif value is not None:
            raise InvalidOptionShape(
                f"stimulus_action: '{controller}' must map to an action name or a mapping of "
                f"events, got {_type_name(value)}."
            )
    return bindings
