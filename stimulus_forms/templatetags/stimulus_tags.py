"""
Template tags and filters for Stimulus attributes.

Provides:
- `{% stimulus_controller "name" key=value ... %}` to render controller attributes.
- `{% stimulus_action "controller" "action" "event" key=value ... %}` to render an action.
- `{% stimulus_target "controller" "a b" %}` to render a target attribute.
- `{{ attrs|html_attrs }}` to render any attribute mapping.
- `{{ form|row_attrs:"field" }}` to render the row attributes of a `StimulusFormMixin` field.

All of them return escaped, safe strings starting with a space, ready to be placed
inside an opening tag:

    <div{% stimulus_controller "search" url="/api/search" %}>
"""

from typing import Any, Mapping, Optional

from django import template
from django.forms.utils import flatatt
from django.utils.safestring import SafeString

from stimulus_forms.attributes import StimulusAttributes

register = template.Library()


@register.simple_tag
def stimulus_controller(name: str, **values: Any) -> SafeString:
    """
    Render `data-controller` plus one `-value` attribute per keyword argument.

    Keyword names are converted to kebab-case, so `max_items=3` becomes
    `data-<controller>-max-items-value="3"`.

    Example (template):
        <form{% stimulus_controller "autosave" delay=500 enabled=True %}>
    """
    attributes = StimulusAttributes()
    attributes.add_controller(name, values=values)
    return str(attributes)


@register.simple_tag
def stimulus_action(controller: str, action: str, event: Optional[str] = None, **params: Any) -> SafeString:
    """
    Render `data-action` plus one `-param` attribute per keyword argument.

    Example (template):
        <button{% stimulus_action "cart" "remove" "click" id=item.pk %}>
    """
    attributes = StimulusAttributes()
    attributes.add_action(controller, action, event or None, params)
    return str(attributes)


@register.simple_tag
def stimulus_target(controller: str, targets: str) -> SafeString:
    """Render `data-<controller>-target`; `targets` may hold several space-separated names."""
    attributes = StimulusAttributes()
    attributes.add_target(controller, targets)
    return str(attributes)


@register.filter
def html_attrs(attrs: Optional[Mapping]) -> SafeString:
    """
    Render an attribute mapping as ` key="value"` pairs.

    Values are escaped. `True` renders a bare boolean attribute and `False` / `None`
    drop the attribute, following `django.forms.utils.flatatt`.
    """
    return flatatt(dict(attrs or {}))


@register.filter
def row_attrs(form: Any, field_name: str) -> SafeString:
    """
    Render the row wrapper attributes of `field_name`.

    Forms without `row_attrs` (plain Django forms) and fields without row options
    render an empty string.

    Example (template):
        <div{{ form|row_attrs:"email" }}>{{ form.email.label_tag }}{{ form.email }}</div>
    """
    return html_attrs(getattr(form, "row_attrs", {}).get(field_name))
