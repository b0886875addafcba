"""
Demo page for `stimulus_forms`.

`newsletter` renders a form whose fields, row wrappers and choices carry Stimulus
attributes, which makes it a convenient page to check markup in a browser.
"""

from django import forms
from django.shortcuts import render

from stimulus_forms.forms import StimulusForm

FREQUENCIES = [("daily", "Daily"), ("weekly", "Weekly"), ("monthly", "Monthly")]


class NewsletterForm(StimulusForm):
    """
    Sign-up form wired to a `newsletter` controller.

    - `email` is a target of the controller and validates on blur.
    - `frequency` radios report their value on change.
    """
    email = forms.EmailField()
    frequency = forms.ChoiceField(choices=FREQUENCIES, widget=forms.RadioSelect)

    class Meta:
        stimulus_form = {
            "stimulus_controller": {"newsletter": {"values": {"endpoint": "/subscribe"}}},
            "stimulus_action": "submit->newsletter#subscribe",
        }
        stimulus = {
            "email": {
                "stimulus_target": {"newsletter": "email"},
                "stimulus_action": {"newsletter": {"blur": "validate"}},
                "row_attr": {"class": "field", "stimulus_target": {"newsletter": "row"}},
            },
            "frequency": {
                "choice_attr": lambda value, label, index: {
                    "stimulus_action": {"newsletter": {"change": {"pick": {"frequency": value}}}},
                },
            },
        }


def newsletter(request):
    form = NewsletterForm(data=request.POST or None)
    return render(request, "stimulus_site/newsletter.html", {"form": form})
