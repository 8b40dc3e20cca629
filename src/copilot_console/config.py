"""
Configuration management for Copilot Console

Handles loading and managing configuration from environment variables
and the settings file. The resulting AppConfig is built once at startup
and handed to the components that need credentials.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_VALUES = ["true", "1", "yes"]


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid"""
    pass


class ProviderType(Enum):
    """Supported chat completion providers"""
    AZURE = "azure"
    OPENAI = "openai"


# Azure deployment name vs. OpenAI model id for the same model
DEFAULT_QUICK_PROMPT_MODELS = {
    ProviderType.AZURE: "gpt-35-turbo",
    ProviderType.OPENAI: "gpt-3.5-turbo",
}


@dataclass
class OpenAIConfig:
    """Chat completion service settings"""
    provider_type: ProviderType = ProviderType.AZURE
    api_key: str = ""
    endpoint: str = ""
    model: str = "gpt-4"
    api_version: str = "2024-02-01"
    quick_prompt_model: str = ""
    image_deployment: str = "Dalle3"
    image_api_version: str = "2023-12-01-preview"

    @classmethod
    def from_env(cls) -> "OpenAIConfig":
        """Create chat service config from environment variables"""
        load_dotenv()

        return cls(
            provider_type=ProviderType(os.getenv("OPENAI_PROVIDER", "azure")),
            api_key=os.getenv("OPENAI_API_KEY", ""),
            endpoint=os.getenv("OPENAI_ENDPOINT", ""),
            model=os.getenv("OPENAI_MODEL", "gpt-4"),
            api_version=os.getenv("OPENAI_API_VERSION", "2024-02-01"),
            quick_prompt_model=os.getenv("QUICK_PROMPT_MODEL", ""),
            image_deployment=os.getenv("IMAGE_DEPLOYMENT", "Dalle3"),
            image_api_version=os.getenv("IMAGE_API_VERSION", "2023-12-01-preview"),
        )

    def resolve_quick_prompt_model(self) -> str:
        """Model used for quick prompts, defaulting per provider when unset"""
        return self.quick_prompt_model or DEFAULT_QUICK_PROMPT_MODELS[self.provider_type]


@dataclass
class GitHubConfig:
    """GitHub Actions credentials"""
    token: str = ""
    org: str = ""
    api_url: str = "https://api.github.com"

    @classmethod
    def from_env(cls) -> "GitHubConfig":
        load_dotenv()

        return cls(
            token=os.getenv("GITHUB_TOKEN", ""),
            org=os.getenv("GITHUB_ORG", ""),
            api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
        )


@dataclass
class BingConfig:
    """Bing News Search credentials"""
    endpoint: str = "https://api.bing.microsoft.com/v7.0/news/search"
    api_key: str = ""

    @classmethod
    def from_env(cls) -> "BingConfig":
        load_dotenv()

        return cls(
            endpoint=os.getenv("BING_ENDPOINT", "https://api.bing.microsoft.com/v7.0/news/search"),
            api_key=os.getenv("BING_API_KEY", ""),
        )


@dataclass
class SamplingConfig:
    """Model invocation parameters, fixed for the whole session"""
    temperature: float = 0.0
    top_p: float = 0.95
    max_tokens: int = 200
    frequency_penalty: float = 0.2
    presence_penalty: float = 0.2

    def as_kwargs(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "frequency_penalty": self.frequency_penalty,
            "presence_penalty": self.presence_penalty,
        }


@dataclass
class ChatConfig:
    """Configuration for the chat engine"""
    system_prompt: str = "You are an AI assistant."
    plugins_enabled: bool = True
    sampling: SamplingConfig = field(default_factory=SamplingConfig)

    @classmethod
    def from_env(cls) -> "ChatConfig":
        """Create chat config from environment variables"""
        load_dotenv()

        return cls(
            system_prompt=os.getenv("SYSTEM_PROMPT", "You are an AI assistant."),
            plugins_enabled=os.getenv("PLUGINS_ENABLED", "true").lower() in TRUE_VALUES,
        )


@dataclass
class AppConfig:
    """Main application configuration"""
    openai: OpenAIConfig = field(default_factory=OpenAIConfig.from_env)
    github: GitHubConfig = field(default_factory=GitHubConfig.from_env)
    bing: BingConfig = field(default_factory=BingConfig.from_env)
    chat: ChatConfig = field(default_factory=ChatConfig.from_env)
    log_level: str = "INFO"
    http_timeout: float = 60.0
    config_file: Optional[Path] = None

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "AppConfig":
        """Load configuration from file and environment variables"""
        load_dotenv()

        if config_file and config_file.exists():
            config = cls._load_from_file(config_file)
        else:
            config = cls()

        config.config_file = config_file

        if os.getenv("LOG_LEVEL"):
            config.log_level = os.getenv("LOG_LEVEL")

        return config

    @classmethod
    def _load_from_file(cls, config_file: Path) -> "AppConfig":
        """Load configuration from YAML file"""
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file {config_file}: {e}") from e

        openai_data = data.get('openai', {})
        github_data = data.get('github', {})
        bing_data = data.get('bing', {})
        chat_data = data.get('chat', {})

        try:
            openai = OpenAIConfig(
                provider_type=ProviderType(openai_data.get('provider', 'azure')),
                api_key=openai_data.get('api_key', ''),
                endpoint=openai_data.get('endpoint', ''),
                model=openai_data.get('model', 'gpt-4'),
                api_version=openai_data.get('api_version', '2024-02-01'),
                quick_prompt_model=openai_data.get('quick_prompt_model', ''),
                image_deployment=openai_data.get('image_deployment', 'Dalle3'),
                image_api_version=openai_data.get('image_api_version', '2023-12-01-preview'),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid openai settings in {config_file}: {e}") from e

        github = GitHubConfig(
            token=github_data.get('token', ''),
            org=github_data.get('org', ''),
            api_url=github_data.get('api_url', 'https://api.github.com'),
        )

        bing = BingConfig(
            endpoint=bing_data.get('endpoint', 'https://api.bing.microsoft.com/v7.0/news/search'),
            api_key=bing_data.get('api_key', ''),
        )

        chat = ChatConfig(
            system_prompt=chat_data.get('system_prompt', 'You are an AI assistant.'),
            plugins_enabled=chat_data.get('plugins_enabled', True),
        )

        return cls(
            openai=openai,
            github=github,
            bing=bing,
            chat=chat,
            log_level=data.get('log_level', 'INFO'),
            http_timeout=float(data.get('http_timeout', 60.0)),
            config_file=config_file,
        )

    def validate(self) -> None:
        """
        Check that the chat service credentials are present

        Raises:
            ConfigurationError: If a required setting is missing
        """
        missing = []
        if not self.openai.api_key:
            missing.append("openai.api_key")
        if self.openai.provider_type == ProviderType.AZURE and not self.openai.endpoint:
            missing.append("openai.endpoint")
        if not self.openai.model:
            missing.append("openai.model")

        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        if not self.github.token or not self.github.org:
            logger.warning("GitHub credentials not configured; workflow plugins will fail")
        if not self.bing.api_key:
            logger.warning("Bing API key not configured; news plugin will fail")

    def save(self, config_file: Optional[Path] = None) -> None:
        """Save configuration to YAML file"""
        file_path = config_file or self.config_file
        if not file_path:
            raise ValueError("No config file specified")

        data = {
            'openai': {
                'provider': self.openai.provider_type.value,
                'api_key': self.openai.api_key,
                'endpoint': self.openai.endpoint,
                'model': self.openai.model,
                'api_version': self.openai.api_version,
                'quick_prompt_model': self.openai.quick_prompt_model,
                'image_deployment': self.openai.image_deployment,
                'image_api_version': self.openai.image_api_version,
            },
            'github': {
                'token': self.github.token,
                'org': self.github.org,
                'api_url': self.github.api_url,
            },
            'bing': {
                'endpoint': self.bing.endpoint,
                'api_key': self.bing.api_key,
            },
            'chat': {
                'system_prompt': self.chat.system_prompt,
                'plugins_enabled': self.chat.plugins_enabled,
            },
            'log_level': self.log_level,
            'http_timeout': self.http_timeout,
        }

        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, indent=2)
