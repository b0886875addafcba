"""
Settings access for `stimulus_forms`.

Values are read from `django.conf.settings` on every call so `override_settings`
works in tests without any cache invalidation.

Supported settings:
    STIMULUS_FORMS_JSON_ENCODER (str):
        Dotted path to the `json.JSONEncoder` subclass used to render mapping and
        sequence values. Default: "django.core.serializers.json.DjangoJSONEncoder".
    STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES (bool):
        Rewrite controller identifiers to Stimulus' naming convention
        ("@acme/ui/date_picker" -> "acme--ui--date-picker"). Default: True.
"""

from typing import Type
import json

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULT_JSON_ENCODER = "django.core.serializers.json.DjangoJSONEncoder"


def json_encoder_path() -> str:
    return getattr(settings, "STIMULUS_FORMS_JSON_ENCODER", None) or DEFAULT_JSON_ENCODER


def get_json_encoder() -> Type[json.JSONEncoder]:
    """
    Import and return the configured JSON encoder class.

    Raises:
        ImportError: If the dotted path cannot be imported. The system check
            `stimulus_forms.E001` reports this at startup.
    """
    return import_string(json_encoder_path())


def normalize_controller_names() -> bool:
    return bool(getattr(settings, "STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES", True))
