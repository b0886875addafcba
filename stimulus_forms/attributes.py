"""
Accumulator that turns Stimulus declarations into HTML data attributes.

`StimulusAttributes` collects controllers, targets and actions for one rendered node
and flattens them once into a plain `{attribute name: string value}` mapping:

    >>> attrs = StimulusAttributes()
    >>> attrs.add_controller("search", values={"url": "/api/search"})
    >>> attrs.add_target("search", ["input", "results"])
    >>> attrs.add_action("search", "query", "input")
    >>> attrs.to_dict()
    {'data-controller': 'search',
     'data-action': 'input->search#query',
     'data-search-target': 'input results',
     'data-search-url-value': '/api/search'}

Values are kept raw (unescaped); escaping happens when the mapping is rendered, either
by the Django widget templates or by `flatatt` in `__str__`. Rendered HTML lists the
attributes sorted by name, not in `to_dict()` order.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Union
import json
import re

from django.forms.utils import flatatt
from django.utils.encoding import force_str
from django.utils.safestring import SafeString

from stimulus_forms import conf
from stimulus_forms.exceptions import InvalidActionFormat

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def normalize_controller_name(name: str) -> str:
    """
    Convert a controller reference to its Stimulus identifier.

    "@acme/ui/date_picker" -> "acme--ui--date-picker". Returned unchanged when
    `STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES` is False.
    """
    name = force_str(name)
    if not conf.normalize_controller_names():
        return name
    name = name.replace("/", "--").replace("_", "-")
    if name.startswith("@"):
        name = name[1:]
    return name


def normalize_key_name(key: str) -> str:
    """camelCase / snake_case key -> kebab-case attribute fragment ("maxItems" -> "max-items")."""
    key = force_str(key).replace("_", "-")
    key = _ACRONYM_BOUNDARY.sub(r"\1-\2", key)
    key = _CAMEL_BOUNDARY.sub(r"\1-\2", key)
    return key.lower()


def format_value(value: Any) -> str:
    """
    Render a value/param for an attribute.

    Booleans become "true"/"false" (what Stimulus' Boolean type parses), mappings and
    sequences become JSON, everything else goes through `force_str` so lazy
    translation strings are evaluated.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, cls=conf.get_json_encoder(), separators=(",", ":"))
    return force_str(value)


class StimulusAttributes:
    """
    Ordered accumulation of Stimulus bindings for a single node.

    Build one instance per node: a field widget, a row wrapper or a choice option.
    Controllers, targets and actions are additive; value/class/outlet/param attributes
    are keyed by their full attribute name, so a later write to the same key wins.
    """

    def __init__(self) -> None:
        self._controllers: List[str] = []
        self._actions: List[str] = []
        self._targets: Dict[str, List[str]] = {}
        self._attributes: Dict[str, str] = {}

    def add_controller(
        self,
        name: str,
        values: Optional[Mapping] = None,
        classes: Optional[Mapping] = None,
        outlets: Optional[Mapping] = None,
    ) -> None:
        """
        Register a controller and its values, classes and outlets.

        Args:
            name (str): Controller reference; an empty name is a no-op.
            values (Mapping | None): `data-<controller>-<key>-value` entries.
            classes (Mapping | None): `data-<controller>-<key>-class` entries.
            outlets (Mapping | None): `data-<controller>-<outlet>-outlet` entries,
                values are CSS selectors.
            `None` entries of any of the three maps are skipped.

        Notes:
            - No de-duplication: registering "modal" twice yields
              `data-controller="modal modal"`; the maps of both registrations are
              combined with last-key-wins.
        """
        if not name:
            return
        controller = normalize_controller_name(name)
        self._controllers.append(controller)

        for key, value in (values or {}).items():
            if value is None:
                continue
            self._attributes[f"data-{controller}-{normalize_key_name(key)}-value"] = format_value(value)

        for key, css_class in (classes or {}).items():
            if css_class is None:
                continue
            self._attributes[f"data-{controller}-{normalize_key_name(key)}-class"] = force_str(css_class)

        for outlet, selector in (outlets or {}).items():
            if selector is None:
                continue
            self._attributes[f"data-{controller}-{normalize_controller_name(outlet)}-outlet"] = force_str(selector)

    def add_target(self, controller: str, names: Union[str, Sequence[str], None]) -> None:
        """
        Register target names for `controller`.

        A list is joined with a single space. Repeated calls for the same controller
        append names that are not registered yet instead of replacing them.
        """
        if names is None:
            return
        if not isinstance(names, str):
            names = " ".join(force_str(n) for n in names)
        tokens = names.split()
        if not tokens:
            return
        registered = self._targets.setdefault(normalize_controller_name(controller), [])
        for token in tokens:
            if token not in registered:
                registered.append(token)

    def add_action(
        self,
        controller: str,
        action: str,
        event: Optional[str] = None,
        params: Optional[Mapping] = None,
    ) -> None:
        """
        Register an action descriptor, `[event->]controller#action`.

        Without `event` the descriptor carries no prefix and Stimulus applies the
        element's default event (click for buttons, input for text inputs, change for
        selects...). Each entry of `params` becomes a
        `data-<controller>-<key>-param` attribute.

        Raises:
            InvalidActionFormat: If the controller or action name is empty.
        """
        if not controller or not action:
            raise InvalidActionFormat(
                f"Action needs both a controller and an action name, got "
                f"controller={controller!r}, action={action!r}."
            )
        identifier = normalize_controller_name(controller)
        descriptor = f"{identifier}#{force_str(action)}"
        if event:
            descriptor = f"{force_str(event)}->{descriptor}"
        self._actions.append(descriptor)

        for key, value in (params or {}).items():
            if value is None:
                continue
            self._attributes[f"data-{identifier}-{normalize_key_name(key)}-param"] = format_value(value)

    def to_dict(self) -> Dict[str, str]:
        """
        Flatten the accumulated bindings.

        Key order of the mapping: `data-controller`, `data-action`, target attributes,
        then the value, class, outlet and param attributes in registration order.
        Binding kinds with no registrations emit nothing. Calling it again returns an
        equal mapping.
        """
        flat: Dict[str, str] = {}
        if self._controllers:
            flat["data-controller"] = " ".join(self._controllers)
        if self._actions:
            flat["data-action"] = " ".join(self._actions)
        for controller, names in self._targets.items():
            flat[f"data-{controller}-target"] = " ".join(names)
        flat.update(self._attributes)
        return flat

    def __bool__(self) -> bool:
        return bool(self._controllers or self._actions or self._targets or self._attributes)

    def __str__(self) -> SafeString:
        # flatatt escapes values and emits the pairs sorted by attribute name.
        return flatatt(self.to_dict())

    def __html__(self) -> SafeString:
        return str(self)

    def __repr__(self) -> str:
        return f"<StimulusAttributes {self.to_dict()!r}>"
