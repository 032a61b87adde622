"""Tests for the promptmock command line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from promptmock.cli import main
from promptmock.config import CONFIG_ENV_VAR, ENV_VAR_OVERRIDES, reset_config
from promptmock.version import __version__


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every command without a config file or PROMPTMOCK_* variables."""
    import promptmock.config.environment as env_module

    for var in [CONFIG_ENV_VAR, *ENV_VAR_OVERRIDES]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(env_module, "_dotenv_loaded", True)
    monkeypatch.chdir(tmp_path)
    yield
    reset_config()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestInspect:
    """Tests for the inspect command."""

    def test_json_output(self, runner, translate_example):
        result = runner.invoke(
            main,
            ["inspect", str(translate_example), "--max-tokens", "32", "--format", "json"],
        )

        assert result.exit_code == 0, result.output
        pairs = json.loads(result.output)
        assert [p["outputs"] for p in pairs] == [["Bonjour", "Salut"], ["World"]]
        assert pairs[0]["request"]["prompt"] == "Translate: hello"
        assert pairs[0]["request"]["temperature"] == "0.7"
        assert pairs[0]["request"]["max_tokens"] == 32

    def test_table_output(self, runner, translate_example):
        result = runner.invoke(main, ["inspect", str(translate_example)])

        assert result.exit_code == 0, result.output
        assert "Bonjour" in result.output
        assert "World" in result.output

    def test_unsupported_directory_fails(self, runner, make_example):
        example = make_example(outputs={})
        result = runner.invoke(main, ["inspect", str(example)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_bad_temperature_fails(self, runner, make_example):
        example = make_example(outputs={"output_hot.txt": "Translate: helloChaud"})
        result = runner.invoke(main, ["inspect", str(example)])

        assert result.exit_code == 1


class TestScan:
    """Tests for the scan command."""

    def test_lists_examples(self, runner, tmp_path, make_example):
        root = tmp_path / "fixtures"
        make_example("greeting", outputs={"output_0_7.txt": "Translate: helloBonjour"}, parent=root)

        result = runner.invoke(main, ["scan", str(root)])

        assert result.exit_code == 0, result.output
        assert "greeting" in result.output

    def test_no_examples(self, runner, tmp_path):
        (tmp_path / "empty").mkdir()
        result = runner.invoke(main, ["scan", str(tmp_path / "empty")])

        assert result.exit_code == 0
        assert "No fixture directories" in result.output


class TestConfigCommand:
    """Tests for the config command."""

    def test_shows_defaults(self, runner):
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0, result.output
        assert "Max Tokens: 16" in result.output

    def test_invalid_config_exits(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("generation:\n  max_tokens: 0\n")
        result = runner.invoke(main, ["config", "--config", str(path)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert __version__ in result.output


class TestLogging:
    """Tests for CLI logging setup."""

    @pytest.fixture
    def promptmock_logger(self):
        logger = logging.getLogger("promptmock")
        yield logger
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
                handler.close()

    def test_repeated_runs_share_one_file_handler(self, runner, tmp_path, translate_example, promptmock_logger):
        config_path = tmp_path / "promptmock.yaml"
        config_path.write_text(f"logging:\n  file: {tmp_path / 'promptmock.log'}\n")

        for _ in range(3):
            result = runner.invoke(main, ["inspect", str(translate_example), "--config", str(config_path)])
            assert result.exit_code == 0, result.output

        file_handlers = [h for h in promptmock_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(tmp_path / "promptmock.log")
