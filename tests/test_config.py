"""Tests for configuration loading and startup registration."""

from unittest.mock import Mock

import pytest

from random_sample.errors import ConfigurationError
from random_sample.registration import RegistrationResult
from random_sample.server import main
from random_sample.settings import SECTION_KEY
from random_sample.utils.config import DEFAULTS, load_config, validate_config


def write_config(tmp_path, text):
    path = tmp_path / "random_sample.yaml"
    path.write_text(text)
    return str(path)


class TestLoadConfig:

    def test_defaults_without_file(self):
        config = load_config(None, use_env=False)

        assert config.host.url == "http://localhost:8096"
        assert config.plugin.store == "jellyfin"
        assert config.sampling.per_library_limit == 1000
        assert config.registration.on_startup is False

    def test_file_values_merge_with_defaults(self, tmp_path):
        path = write_config(tmp_path, "host:\n  url: http://media:8096\n")

        config = load_config(path, use_env=False)

        assert config.host.url == "http://media:8096"
        assert config.host.timeout == 30

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, "host:\n  url: http://media:8096\n")
        monkeypatch.setenv("JELLYFIN_URL", "http://override:8096")
        monkeypatch.setenv("JELLYFIN_API_KEY", "secret")

        config = load_config(path)

        assert config.host.url == "http://override:8096"
        assert config.host.api_key == "secret"
        assert DEFAULTS["host"]["api_key"] == ""

    def test_unknown_store(self, tmp_path):
        path = write_config(tmp_path, "plugin:\n  store: redis\n")

        with pytest.raises(ConfigurationError):
            load_config(path, use_env=False)

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "host: [unclosed\n")

        with pytest.raises(ConfigurationError):
            load_config(path, use_env=False)

    def test_non_mapping_file(self, tmp_path):
        path = write_config(tmp_path, "- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            load_config(path, use_env=False)

    def test_validate_config_warnings(self):
        warnings = validate_config(load_config(None, use_env=False))

        assert any("api_key" in w for w in warnings)
        assert any("plugin.id" in w for w in warnings)


class TestStartupRegistration:

    @pytest.fixture
    def registrar(self, monkeypatch):
        registrar = Mock()
        registrar.register.return_value = RegistrationResult(success=True, status_code=204)
        monkeypatch.setattr(main, "get_section_registrar", lambda: registrar)
        return registrar

    def test_disabled_by_default(self, registrar):
        assert main.register_section_on_startup(load_config(None, use_env=False)) is None
        registrar.register.assert_not_called()

    def test_requires_api_key(self, tmp_path, registrar):
        path = write_config(tmp_path, "registration:\n  on_startup: true\n")

        assert main.register_section_on_startup(load_config(path, use_env=False)) is None
        registrar.register.assert_not_called()

    def test_registers_with_saved_settings(self, tmp_path, registrar):
        store_path = tmp_path / "plugin.json"
        store_path.write_text('{"%s": {"selectedLibraries": ["L1"], "sampleSize": 4}}' % SECTION_KEY)
        path = write_config(tmp_path, (
            "host:\n  api_key: key\n"
            "registration:\n  on_startup: true\n"
            f"plugin:\n  store: file\n  file_path: {store_path}\n"
        ))

        result = main.register_section_on_startup(load_config(path, use_env=False))

        assert result.success is True
        descriptor, token = registrar.register.call_args[0]
        assert token == "key"
        assert '"libraryIds": ["L1"]' in descriptor.additionalData
        assert '"sampleSize": 4' in descriptor.additionalData
