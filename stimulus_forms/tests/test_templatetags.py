"""
Tests for the `stimulus_tags` template library.

Templates are rendered from strings with Django's template engine, exactly as a
project template would load the library.
"""

from types import SimpleNamespace

from django.template import Context, Template


def render(source: str, **context) -> str:
    return Template("{% load stimulus_tags %}" + source).render(Context(context))


class TestStimulusController:

    def test_name_only(self):
        assert render('<div{% stimulus_controller "search" %}>') == '<div data-controller="search">'

    def test_keyword_arguments_become_values(self):
        html = render('<div{% stimulus_controller "search" max_items=3 enabled=True %}>')

        assert html == (
            '<div data-controller="search" data-search-enabled-value="true" '
            'data-search-max-items-value="3">'
        )

    def test_values_from_context_are_escaped(self):
        html = render('<div{% stimulus_controller "search" label=label %}>', label='<b>"x"</b>')

        assert 'data-search-label-value="&lt;b&gt;&quot;x&quot;&lt;/b&gt;"' in html


class TestStimulusAction:

    def test_action_with_event_and_params(self):
        html = render('<button{% stimulus_action "cart" "remove" "click" item_id=7 %}>')

        assert html == '<button data-action="click-&gt;cart#remove" data-cart-item-id-param="7">'

    def test_action_without_event(self):
        assert render('<a{% stimulus_action "nav" "open" %}>') == '<a data-action="nav#open">'


class TestStimulusTarget:

    def test_several_targets(self):
        html = render('<input{% stimulus_target "search" "input results" %}>')

        assert html == '<input data-search-target="input results">'


class TestFilters:

    def test_html_attrs(self):
        html = render("<div{{ attrs|html_attrs }}>", attrs={"class": "row", "data-x": 'a"b'})

        assert html == '<div class="row" data-x="a&quot;b">'

    def test_html_attrs_empty(self):
        assert render("<div{{ attrs|html_attrs }}>", attrs=None) == "<div>"

    def test_row_attrs(self):
        form = SimpleNamespace(row_attrs={"email": {"data-controller": "row"}})

        assert render('<div{{ form|row_attrs:"email" }}>', form=form) == '<div data-controller="row">'

    def test_row_attrs_missing(self):
        form = SimpleNamespace()

        assert render('<div{{ form|row_attrs:"email" }}>', form=form) == "<div>"
