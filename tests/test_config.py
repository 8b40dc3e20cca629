"""Tests for configuration loading and the CLI surface."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from copilot_console.cli import cli
from copilot_console.config import (
    AppConfig,
    ConfigurationError,
    OpenAIConfig,
    ProviderType,
    SamplingConfig,
)
from copilot_console.plugins import PluginContext

CONFIG_YAML = """\
openai:
  provider: azure
  api_key: file-key
  endpoint: https://contoso.openai.azure.com
  model: gpt-4-deployment
github:
  token: gh-file-token
  org: contoso
bing:
  api_key: bing-file-key
chat:
  plugins_enabled: false
log_level: DEBUG
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["LOG_LEVEL", "OPENAI_API_KEY", "OPENAI_ENDPOINT", "OPENAI_PROVIDER", "OPENAI_MODEL", "QUICK_PROMPT_MODEL"]:
        monkeypatch.delenv(name, raising=False)


class TestAppConfig:

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")

        config = AppConfig.load(path)

        assert config.openai.provider_type == ProviderType.AZURE
        assert config.openai.api_key == "file-key"
        assert config.openai.model == "gpt-4-deployment"
        assert config.openai.resolve_quick_prompt_model() == "gpt-35-turbo"
        assert config.github.org == "contoso"
        assert config.bing.api_key == "bing-file-key"
        assert config.chat.plugins_enabled is False
        assert config.log_level == "DEBUG"
        assert config.config_file == path

    def test_env_overrides_log_level(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        assert AppConfig.load(path).log_level == "WARNING"

    def test_invalid_provider_is_configuration_error(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("openai:\n  provider: bard\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="bard"):
            AppConfig.load(path)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "env-key")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")

        config = OpenAIConfig.from_env()

        assert config.provider_type == ProviderType.OPENAI
        assert config.api_key == "env-key"
        assert config.model == "gpt-4o"

    @pytest.mark.parametrize("provider_type, expected", [
        (ProviderType.AZURE, "gpt-35-turbo"),
        (ProviderType.OPENAI, "gpt-3.5-turbo"),
    ])
    def test_quick_prompt_model_defaults_per_provider(self, provider_type, expected):
        assert OpenAIConfig(provider_type=provider_type).resolve_quick_prompt_model() == expected

    def test_explicit_quick_prompt_model_wins(self, monkeypatch):
        monkeypatch.setenv("OPENAI_PROVIDER", "openai")
        monkeypatch.setenv("QUICK_PROMPT_MODEL", "gpt-4o-mini")

        assert OpenAIConfig.from_env().resolve_quick_prompt_model() == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_openai_provider_quick_prompt_sends_openai_model_id(self, app_config, provider):
        app_config.openai = OpenAIConfig(provider_type=ProviderType.OPENAI, api_key="sk-test", model="gpt-4o")
        provider.replies = ["summary"]
        context = PluginContext(config=app_config, provider=provider)

        assert await context.quick_prompt("data") == "summary"
        assert provider.message_calls[0]["model"] == "gpt-3.5-turbo"

    def test_sampling_defaults(self):
        assert SamplingConfig().as_kwargs() == {
            "temperature": 0.0,
            "top_p": 0.95,
            "max_tokens": 200,
            "frequency_penalty": 0.2,
            "presence_penalty": 0.2,
        }


class TestValidate:

    def test_missing_chat_credentials(self, app_config):
        app_config.openai.api_key = ""
        app_config.openai.endpoint = ""

        with pytest.raises(ConfigurationError) as exc_info:
            app_config.validate()

        assert "openai.api_key" in str(exc_info.value)
        assert "openai.endpoint" in str(exc_info.value)

    def test_openai_needs_no_endpoint(self, app_config):
        app_config.openai.provider_type = ProviderType.OPENAI
        app_config.openai.endpoint = ""
        app_config.validate()

    def test_missing_plugin_credentials_only_warn(self, app_config, caplog):
        app_config.github.token = ""
        app_config.bing.api_key = ""

        app_config.validate()

        assert "GitHub credentials not configured" in caplog.text
        assert "Bing API key not configured" in caplog.text


class TestCli:

    def test_init_config_writes_yaml(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["init-config", "-o", "settings.yaml"])

            assert result.exit_code == 0, result.output
            data = yaml.safe_load(Path("settings.yaml").read_text(encoding="utf-8"))
            assert set(data) >= {"openai", "github", "bing", "chat"}
            assert data["openai"]["quick_prompt_model"] == ""

    def test_plugins_lists_builtins(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["plugins"], env={"COLUMNS": "200"})

        assert result.exit_code == 0, result.output
        for name in ["Weather", "WorkflowAutomation", "Doctor", "licensePlate"]:
            assert name in result.output

    def test_chat_without_credentials_exits(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("config.yaml").write_text("openai:\n  provider: azure\n", encoding="utf-8")
            result = runner.invoke(cli, ["chat"])

        assert result.exit_code == 1
        assert "Missing required settings" in result.output
