"""
Minimal Django project hosting the `stimulus_forms` app.

It exists so the test suite (and `django-admin` commands) have a settings module:
`DJANGO_SETTINGS_MODULE=stimulus_site.settings`.
"""
