"""
Exceptions raised while turning Stimulus form options into attributes.

All of them derive from `django.core.exceptions.ImproperlyConfigured`: a bad option
shape is a developer configuration mistake, and Django surfaces it the same way as any
other misconfigured form or setting.
"""

from django.core.exceptions import ImproperlyConfigured


class StimulusFormsError(ImproperlyConfigured):
    """Base class for every error raised by `stimulus_forms`."""


class InvalidOptionShape(StimulusFormsError):
    """
    An option value does not match any recognized shape.

    Raised for unknown option keys, values of an unsupported type (e.g. a plain string
    given for `stimulus_target`) and nested entries that are neither a string nor a
    mapping where one of those is required.
    """


class InvalidActionFormat(InvalidOptionShape):
    """
    An action descriptor string cannot be split into controller and action.

    Example:
        "nocontrollerhere"   -> no `#` delimiter
        "click->#save"       -> empty controller part
    """
