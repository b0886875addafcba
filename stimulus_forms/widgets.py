"""
Choice widgets that accept per-choice attributes.

Django's `ChoiceWidget.create_option()` builds one context dict per option with its
own `attrs`. `ChoiceAttrsMixin` layers `choice_attrs` on top of those, which is how the
`choice_attr` option reaches each rendered `<option>`, radio or checkbox.
"""

from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Type, Union

from django import forms
from django.forms.widgets import ChoiceWidget

ChoiceAttrs = Union[Dict[str, Any], Callable[[Any, Any, int], Dict[str, Any]]]


class ChoiceAttrsMixin:
    """
    Merge `choice_attrs` into the attributes of every rendered choice.

    Attributes:
        choice_attrs (dict | callable): A mapping applied to every choice, or a
            callable `(value, label, index) -> dict` called once per choice.

    Notes:
        - For grouped choices `index` is the option's position within its group
          (Django's `subindex`) when one is available, else the group index.
        - The empty placeholder choice of a `Select` receives the attributes as well.
    """

    choice_attrs: ChoiceAttrs = None

    def __init__(self, *args, choice_attrs: Optional[ChoiceAttrs] = None, **kwargs):
        super().__init__(*args, **kwargs)
        if choice_attrs is not None:
            self.choice_attrs = choice_attrs

    def attrs_for_choice(self, value, label, index) -> Dict[str, Any]:
        if not self.choice_attrs:
            return {}
        if callable(self.choice_attrs):
            return dict(self.choice_attrs(value, label, index) or {})
        return dict(self.choice_attrs)

    def create_option(self, name, value, label, selected, index, subindex=None, attrs=None):
        option = super().create_option(
            name, value, label, selected, index, subindex=subindex, attrs=attrs
        )
        position = subindex if subindex is not None else index
        extra = self.attrs_for_choice(value, label, position)
        if extra:
            option["attrs"] = {**option["attrs"], **extra}
        return option


class Select(ChoiceAttrsMixin, forms.Select):
    pass


class SelectMultiple(ChoiceAttrsMixin, forms.SelectMultiple):
    pass


class RadioSelect(ChoiceAttrsMixin, forms.RadioSelect):
    pass


class CheckboxSelectMultiple(ChoiceAttrsMixin, forms.CheckboxSelectMultiple):
    pass


_KNOWN = {
    forms.Select: Select,
    forms.SelectMultiple: SelectMultiple,
    forms.RadioSelect: RadioSelect,
    forms.CheckboxSelectMultiple: CheckboxSelectMultiple,
}


@lru_cache(maxsize=None)
def choice_attrs_class(widget_class: Type[ChoiceWidget]) -> Type[ChoiceWidget]:
    """
    Return the choice-attribute-aware variant of `widget_class`.

    Known Django widgets map to the classes above; any other `ChoiceWidget` subclass
    gets a mixed-in subclass built once and cached.
    """
    if issubclass(widget_class, ChoiceAttrsMixin):
        return widget_class
    if widget_class in _KNOWN:
        return _KNOWN[widget_class]
    return type(f"ChoiceAttrs{widget_class.__name__}", (ChoiceAttrsMixin, widget_class), {})


def with_choice_attrs(widget: ChoiceWidget, choice_attrs: ChoiceAttrs) -> ChoiceWidget:
    """
    Return a choice widget like `widget` that renders `choice_attrs` on every choice.

    A widget that already mixes in `ChoiceAttrsMixin` is updated and returned as is.
    Any other widget is rebuilt as its `ChoiceAttrsMixin` variant from its `attrs` and
    `choices`; the caller assigns the result back to the field.
    """
    if isinstance(widget, ChoiceAttrsMixin):
        widget.choice_attrs = choice_attrs
        return widget
    rebuilt = choice_attrs_class(type(widget))(
        attrs=widget.attrs, choices=widget.choices, choice_attrs=choice_attrs
    )
    rebuilt.is_required = widget.is_required
    rebuilt.is_localized = widget.is_localized
    return rebuilt
