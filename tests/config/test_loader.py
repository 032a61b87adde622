"""Tests for configuration loader."""

from pathlib import Path

import pytest
import yaml

from promptmock.config import (
    CONFIG_ENV_VAR,
    ENV_VAR_OVERRIDES,
    ConfigLoader,
    ConfigurationError,
    LogLevel,
    PromptMockConfig,
    get_config,
    load_config,
    load_config_from_env,
    reset_config,
    reset_environment,
)


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch, tmp_path):
    """Isolate tests from global state, .env files and PROMPTMOCK_* variables."""
    import promptmock.config.environment as env_module

    reset_config()
    reset_environment()
    for var in [CONFIG_ENV_VAR, *ENV_VAR_OVERRIDES]:
        monkeypatch.delenv(var, raising=False)
    # Prevent a developer's .env from leaking into tests
    monkeypatch.setattr(env_module, "_dotenv_loaded", True)
    monkeypatch.chdir(tmp_path)

    yield

    reset_config()
    reset_environment()


@pytest.fixture
def write_config(tmp_path: Path):
    def _write(data, name: str = "promptmock.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
        return path

    return _write


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_defaults_without_file(self):
        config = ConfigLoader().load()
        assert config == PromptMockConfig()
        assert config.generation.max_tokens == 16
        assert config.logging.level == LogLevel.INFO

    def test_load_yaml(self, write_config):
        path = write_config(
            {
                "generation": {"max_tokens": 64, "n": 2, "stop": "END", "stream": False},
                "fixtures": {"root": "tests/fixtures", "recursive": False},
                "logging": {"level": "debug"},
                "model": "fixture-model",
            }
        )
        loader = ConfigLoader(path)
        config = loader.load()

        assert config.generation.max_tokens == 64
        assert config.generation.n == 2
        assert config.generation.stop == "END"
        assert config.generation.stream is False
        assert config.fixtures.recursive is False
        assert config.logging.level == LogLevel.DEBUG
        assert config.model == "fixture-model"
        assert loader.loaded_from_path == path
        assert loader.get() is config

    def test_empty_sections_use_defaults(self, write_config):
        path = write_config("generation:\nfixtures:\n")
        config = ConfigLoader(path).load()
        assert config.generation.max_tokens == 16

    def test_env_substitution(self, write_config, monkeypatch):
        monkeypatch.setenv("FIXTURE_TOKENS", "128")
        path = write_config(
            {
                "generation": {"max_tokens": "${FIXTURE_TOKENS}", "top_p": "${TOP_P:-1}"},
                "fixtures": {"root": "${FIXTURE_BASE:-/srv}/prompts"},
            }
        )
        config = ConfigLoader(path).load()

        assert config.generation.max_tokens == 128
        assert config.generation.top_p == 1
        assert config.fixtures.root == "/srv/prompts"

    def test_env_overrides_take_precedence(self, write_config, monkeypatch):
        monkeypatch.setenv("PROMPTMOCK_MAX_TOKENS", "256")
        monkeypatch.setenv("PROMPTMOCK_STREAM", "true")
        monkeypatch.setenv("PROMPTMOCK_STOP", "42")
        path = write_config({"generation": {"max_tokens": 64}})

        config = ConfigLoader(path).load()
        assert config.generation.max_tokens == 256
        assert config.generation.stream is True
        assert config.generation.stop == "42"

    def test_invalid_values_raise_configuration_error(self, write_config):
        path = write_config({"generation": {"max_tokens": 0}})
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader(path).load()
        assert exc_info.value.path == path
        assert "generation.max_tokens" in str(exc_info.value)

    def test_invalid_yaml_raises(self, write_config):
        path = write_config("generation: [unclosed")
        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_non_mapping_root_raises(self, write_config):
        path = write_config("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader(path).load()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(tmp_path / "absent.yaml").load()

    def test_get_before_load_raises(self):
        with pytest.raises(RuntimeError):
            ConfigLoader().get()

    def test_save_round_trip(self, write_config, tmp_path):
        loader = ConfigLoader(write_config({"generation": {"max_tokens": 99}}))
        loader.load()
        saved = tmp_path / "saved.yaml"
        loader.save(saved)

        assert ConfigLoader(saved).load().generation.max_tokens == 99


class TestLoadFromEnv:
    """Tests for config discovery."""

    def test_env_var_path(self, write_config, monkeypatch):
        path = write_config({"model": "from-env"}, name="custom.yaml")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert ConfigLoader().load_from_env().model == "from-env"

    def test_env_var_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yaml"))
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_from_env()

    def test_default_location(self, write_config):
        write_config({"model": "discovered"}, name=".promptmock.yml")
        assert ConfigLoader().load_from_env().model == "discovered"

    def test_no_file_uses_defaults(self):
        loader = ConfigLoader()
        assert loader.load_from_env() == PromptMockConfig()
        assert loader.loaded_from_path is None


class TestGlobalConfig:
    """Tests for module-level helpers."""

    def test_get_config_requires_load(self):
        with pytest.raises(RuntimeError):
            get_config()

    def test_load_config_caches(self, write_config):
        config = load_config(write_config({"model": "cached"}))
        assert get_config() is config

    def test_load_config_from_env_caches(self):
        config = load_config_from_env()
        assert get_config() is config
