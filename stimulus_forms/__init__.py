"""
Stimulus data attributes for Django forms.

Public surface re-exported here so callers can write:
    from stimulus_forms import StimulusAttributes, decorate
"""

from stimulus_forms.attributes import StimulusAttributes
from stimulus_forms.exceptions import (
    InvalidActionFormat,
    InvalidOptionShape,
    StimulusFormsError,
)
from stimulus_forms.extension import FieldView, build_view, decorate, resolve_options

__all__ = (
    "FieldView",
    "InvalidActionFormat",
    "InvalidOptionShape",
    "StimulusAttributes",
    "StimulusFormsError",
    "build_view",
    "decorate",
    "resolve_options",
)
