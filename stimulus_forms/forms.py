from typing import Any, Dict, Mapping

from django import forms
from django.core.exceptions import ImproperlyConfigured
from django.forms.widgets import ChoiceWidget

from stimulus_forms.extension import FieldView, apply_options
from stimulus_forms.widgets import with_choice_attrs


class StimulusFormMixin:
    """
    Form mixin that applies Stimulus options declared on the form's `Meta`.

    Declaration:
        class Meta:
            stimulus = {
                "<field name>": {
                    "stimulus_controller": ...,
                    "stimulus_target": ...,
                    "stimulus_action": ...,
                    "row_attr": {...},      # plain attrs and/or stimulus_* keys
                    "choice_attr": {...},   # or callable(value, label, index)
                },
            }
            stimulus_form = {"stimulus_controller": ...}   # the <form> element

    After `__init__`:
        - `self.fields[name].widget.attrs` holds the field's data attributes.
        - `self.row_attrs[name]` holds the row wrapper attributes.
        - `self.form_attrs` holds the <form> element attributes.
        - choice widgets render the `choice_attr` attributes on every option.

    Callable option values are called with the form instance, so options can depend
    on `self.instance`, `self.initial` or anything set before `super().__init__()`
    returns. A callable `choice_attr` is the exception: it is called per choice.

    Raises:
        ImproperlyConfigured: If `Meta.stimulus` names a field the form does not have,
            or gives `choice_attr` to a field whose widget has no choices.
        stimulus_forms.exceptions.InvalidOptionShape: If an option has an unsupported shape.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.row_attrs: Dict[str, Dict[str, Any]] = {}
        self.form_attrs: Dict[str, Any] = {}
        self.apply_stimulus_options()

    def get_stimulus_options(self) -> Dict[str, Mapping]:
        meta = getattr(self, "Meta", None)
        return dict(getattr(meta, "stimulus", None) or {})

    def get_stimulus_form_options(self) -> Mapping:
        meta = getattr(self, "Meta", None)
        return getattr(meta, "stimulus_form", None) or {}

    def apply_stimulus_options(self) -> None:
        options = self.get_stimulus_options()
        unknown = sorted(set(options) - set(self.fields))
        if unknown:
            raise ImproperlyConfigured(
                f"{type(self).__name__}.Meta.stimulus refers to unknown field(s) {unknown}."
            )

        for name, raw in options.items():
            widget = self.fields[name].widget
            view = apply_options(
                FieldView(attrs=widget.attrs, row_attr=self.row_attrs.setdefault(name, {})),
                raw,
                context=self,
            )
            if view.choice_attr:
                if not isinstance(widget, ChoiceWidget):
                    raise ImproperlyConfigured(
                        f"Field '{name}' of {type(self).__name__} uses choice_attr but its "
                        f"widget {type(widget).__name__} renders no choices."
                    )
                self.fields[name].widget = with_choice_attrs(widget, view.choice_attr)

        form_options = self.get_stimulus_form_options()
        if form_options:
            apply_options(FieldView(attrs=self.form_attrs), form_options, context=self)


class StimulusForm(StimulusFormMixin, forms.Form):
    pass


class StimulusModelForm(StimulusFormMixin, forms.ModelForm):
    pass
