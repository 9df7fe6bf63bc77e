import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rail_sanitizer.conf.test_settings")
django.setup()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated tests")


@pytest.fixture(autouse=True)
def _reset_sanitizer_state():
    from rail_sanitizer.config_proxy import clear_runtime_settings
    from rail_sanitizer.sanitizer import reset_default_sanitizer

    yield
    clear_runtime_settings()
    reset_default_sanitizer()


@pytest.fixture(scope="session")
def django_db_setup(django_db_setup, django_db_blocker):
    # rail_sanitizer has no models module, so syncdb skips models that tests
    # register under its label; create their tables explicitly.
    from django.apps import apps
    from django.db import connection

    with django_db_blocker.unblock():
        existing = set(connection.introspection.table_names())
        with connection.schema_editor() as editor:
            for model in apps.get_app_config("rail_sanitizer").get_models():
                if model._meta.db_table not in existing:
                    editor.create_model(model)
