from django.conf import settings
from django.core.checks import Error, register
from django.utils.module_loading import import_string

from stimulus_forms import conf


@register()
def check_stimulus_forms_settings(app_configs, **kwargs):
    errors = []

    path = conf.json_encoder_path()
    try:
        encoder = import_string(path)
    except ImportError:
        errors.append(Error(
            f"STIMULUS_FORMS_JSON_ENCODER '{path}' cannot be imported.",
            hint="Use a dotted path to a json.JSONEncoder subclass.",
            id="stimulus_forms.E001",
        ))
    else:
        if not callable(getattr(encoder, "encode", None)):
            errors.append(Error(
                f"STIMULUS_FORMS_JSON_ENCODER '{path}' is not a JSON encoder.",
                hint="Use a dotted path to a json.JSONEncoder subclass.",
                id="stimulus_forms.E001",
            ))

    normalize = getattr(settings, "STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES", True)
    if not isinstance(normalize, bool):
        errors.append(Error(
            "STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES must be a boolean.",
            id="stimulus_forms.E002",
        ))
    return errors
