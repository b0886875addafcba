"""
Tests for `StimulusFormMixin` and the choice-attribute widgets.

Forms used here are declared at module level, the way project forms are; a fresh
instance is built per test. Nothing touches the database.
"""

import pytest
from django import forms
from django.contrib.auth.models import User
from django.core.exceptions import ImproperlyConfigured

from stimulus_forms.exceptions import InvalidOptionShape
from stimulus_forms.forms import StimulusForm, StimulusModelForm
from stimulus_forms.widgets import (
    ChoiceAttrsMixin,
    RadioSelect,
    Select,
    choice_attrs_class,
    with_choice_attrs,
)

COLORS = [("red", "Red"), ("green", "Green"), ("blue", "Blue")]


# ----------------------
# Forms under test
# ----------------------
class SearchForm(StimulusForm):
    query = forms.CharField(widget=forms.TextInput(attrs={"class": "form-control"}))
    color = forms.ChoiceField(choices=COLORS, widget=forms.RadioSelect)
    size = forms.ChoiceField(choices=[("s", "S"), ("m", "M")])
    notes = forms.CharField(required=False)

    class Meta:
        stimulus_form = {"stimulus_controller": "search", "stimulus_action": "submit->search#run"}
        stimulus = {
            "query": {
                "stimulus_target": {"search": "input"},
                "stimulus_action": {"search": {"input": "suggest"}},
                "row_attr": {"class": "mb-3", "stimulus_target": {"search": "row"}},
            },
            "color": {
                "choice_attr": {"stimulus_target": {"search": "color"}},
            },
            "size": {
                "choice_attr": lambda value, label, index: {"data-index": index, "title": label},
            },
            "notes": {
                "stimulus_controller": lambda form: "autosize" if not form.is_bound else None,
            },
        }


class UsernameForm(StimulusModelForm):
    class Meta:
        model = User
        fields = ["username"]
        stimulus = {
            "username": {"stimulus_controller": {"availability": {"values": {"url": "/check"}}}},
        }


def option_attrs(widget, name="field"):
    """Collect the per-option attribute dicts of a rendered choice widget."""
    context = widget.get_context(name, None, {})
    return [
        option["attrs"]
        for _group, options, _index in context["widget"]["optgroups"]
        for option in options
    ]


# ----------------------
# StimulusFormMixin
# ----------------------
class TestStimulusFormMixin:

    def test_field_widget_attrs_are_decorated(self):
        form = SearchForm()

        assert form.fields["query"].widget.attrs == {
            "class": "form-control",
            "data-action": "input->search#suggest",
            "data-search-target": "input",
        }

    def test_row_attrs(self):
        form = SearchForm()

        assert form.row_attrs["query"] == {"class": "mb-3", "data-search-target": "row"}
        assert form.row_attrs["color"] == {}

    def test_form_attrs(self):
        form = SearchForm()

        assert form.form_attrs == {
            "data-controller": "search",
            "data-action": "submit->search#run",
        }

    def test_callable_options_receive_the_form(self):
        unbound = SearchForm()
        bound = SearchForm(data={"query": "x"})

        assert unbound.fields["notes"].widget.attrs.get("data-controller") == "autosize"
        assert "data-controller" not in bound.fields["notes"].widget.attrs

    def test_class_level_fields_are_not_mutated(self):
        SearchForm()

        assert SearchForm.base_fields["query"].widget.attrs == {"class": "form-control"}
        assert not isinstance(SearchForm.base_fields["size"].widget, ChoiceAttrsMixin)

    def test_choice_attr_mapping_on_every_option(self):
        form = SearchForm()
        attrs = option_attrs(form.fields["color"].widget)

        assert len(attrs) == 3
        assert all(a["data-search-target"] == "color" for a in attrs)

    def test_choice_attr_callable_per_option(self):
        form = SearchForm()
        attrs = option_attrs(form.fields["size"].widget)

        assert [(a["data-index"], a["title"]) for a in attrs] == [(0, "S"), (1, "M")]

    def test_plain_widgets_are_upgraded(self):
        form = SearchForm()
        widget = form.fields["size"].widget

        assert isinstance(widget, ChoiceAttrsMixin)
        assert isinstance(widget, forms.Select)

    def test_rendered_radio_options_carry_choice_attrs(self):
        html = str(SearchForm()["color"])

        assert html.count('data-search-target="color"') == 3

    def test_model_form(self):
        form = UsernameForm()

        attrs = form.fields["username"].widget.attrs
        assert attrs["data-controller"] == "availability"
        assert attrs["data-availability-url-value"] == "/check"

    def test_form_without_options(self):
        class PlainForm(StimulusForm):
            name = forms.CharField()

        form = PlainForm()

        assert form.row_attrs == {}
        assert form.form_attrs == {}
        assert "data-controller" not in form.fields["name"].widget.attrs

    def test_unknown_field_raises(self):
        class BrokenForm(StimulusForm):
            name = forms.CharField()

            class Meta:
                stimulus = {"nme": {"stimulus_controller": "x"}}

        with pytest.raises(ImproperlyConfigured):
            BrokenForm()

    def test_choice_attr_on_non_choice_widget_raises(self):
        class BrokenForm(StimulusForm):
            name = forms.CharField()

            class Meta:
                stimulus = {"name": {"choice_attr": {"class": "x"}}}

        with pytest.raises(ImproperlyConfigured):
            BrokenForm()

    def test_invalid_option_shape_propagates(self):
        class BrokenForm(StimulusForm):
            name = forms.CharField()

            class Meta:
                stimulus = {"name": {"stimulus_target": "not-a-mapping"}}

        with pytest.raises(InvalidOptionShape):
            BrokenForm()


# ----------------------
# Widgets
# ----------------------
class TestChoiceAttrsWidgets:

    def test_mapping_applies_to_every_option(self):
        widget = Select(choices=COLORS, choice_attrs={"class": "opt"})

        assert [a["class"] for a in option_attrs(widget)] == ["opt", "opt", "opt"]

    def test_callable_receives_value_label_and_index(self):
        calls = []

        def choice_attrs(value, label, index):
            calls.append((value, label, index))
            return {}

        RadioSelect(choices=COLORS, choice_attrs=choice_attrs).get_context("c", None, {})

        assert calls == [("red", "Red", 0), ("green", "Green", 1), ("blue", "Blue", 2)]

    def test_grouped_choices_use_position_in_group(self):
        choices = [("Warm", [("red", "Red"), ("orange", "Orange")]), ("Cold", [("blue", "Blue")])]
        widget = Select(choices=choices, choice_attrs=lambda value, label, index: {"data-pos": index})

        assert [a["data-pos"] for a in option_attrs(widget)] == [0, 1, 0]

    def test_without_choice_attrs_behaves_like_django(self):
        assert option_attrs(Select(choices=COLORS)) == option_attrs(forms.Select(choices=COLORS))

    def test_choice_attrs_class_known_widgets(self):
        assert choice_attrs_class(forms.RadioSelect) is RadioSelect
        assert choice_attrs_class(RadioSelect) is RadioSelect

    def test_choice_attrs_class_custom_widget_is_cached(self):
        class FancySelect(forms.Select):
            pass

        upgraded = choice_attrs_class(FancySelect)

        assert issubclass(upgraded, ChoiceAttrsMixin)
        assert issubclass(upgraded, FancySelect)
        assert choice_attrs_class(FancySelect) is upgraded

    def test_with_choice_attrs_rebuilds_the_widget(self):
        widget = forms.Select(attrs={"class": "form-select"}, choices=COLORS)
        widget.is_required = True
        rebuilt = with_choice_attrs(widget, {"data-x": "1"})

        assert rebuilt is not widget
        assert type(widget) is forms.Select
        assert type(rebuilt) is Select
        assert rebuilt.attrs == {"class": "form-select"}
        assert rebuilt.is_required
        assert all(a["data-x"] == "1" for a in option_attrs(rebuilt))
        assert not any("data-x" in a for a in option_attrs(widget))

    def test_with_choice_attrs_updates_an_aware_widget(self):
        widget = Select(choices=COLORS)

        assert with_choice_attrs(widget, {"data-x": "1"}) is widget
        assert widget.choice_attrs == {"data-x": "1"}
