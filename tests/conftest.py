import pytest

from envindicator.core.config import IndicatorSettings, get_settings
from envindicator.gate import EnvironmentGate
from envindicator.resolver import Resolver
from envindicator.security import authenticated_viewer

_SETTINGS_VARS = [name for name in IndicatorSettings.model_fields] + ["CONFIG_DEBUG"]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep host environment variables and stray config.yaml files out of tests."""
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("APP_CONFIG_FILE", str(tmp_path / "absent-config.yaml"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def resolver():
    return Resolver()


@pytest.fixture
def gate(resolver):
    return EnvironmentGate(resolver)


@pytest.fixture
def admin():
    return authenticated_viewer("admin_user", {"manage_options", "publish_posts"})


@pytest.fixture
def developer():
    return authenticated_viewer("developer_user", {"edit_posts"})


@pytest.fixture
def write_config(tmp_path, monkeypatch):
    """Write a config.yaml and point APP_CONFIG_FILE at it."""
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        monkeypatch.setenv("APP_CONFIG_FILE", str(path))
        return path
    return _write
