"""
App configuration for the `stimulus_forms` Django application.

`StimulusFormsConfig.ready()` imports `stimulus_forms.checks` so the settings checks
are registered exactly once, after the app registry is populated.
"""

from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class StimulusFormsConfig(AppConfig):
    """
    AppConfig for the `stimulus_forms` app.

    The app has no models; it is installed so Django finds the `stimulus_tags`
    template library and runs the settings checks.

    Example:
        In settings.py:
            INSTALLED_APPS = [
                "stimulus_forms.apps.StimulusFormsConfig",
                ...
            ]
    """
    default_auto_field = "django.db.models.BigAutoField"
    name = "stimulus_forms"
    verbose_name = "Stimulus forms"

    def ready(self) -> None:
        from stimulus_forms import checks  # noqa: F401
        logger.info("stimulus_forms ready")
