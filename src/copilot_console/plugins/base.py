"""
Base plugin interface for Copilot Console

Defines the contract every plugin implements: a function descriptor the
model can call, and a text-in/text-out ``process`` method that validates
the raw JSON arguments into a typed request before running the plugin.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console

from ..config import AppConfig
from ..providers.base import BaseProvider
from ..utils import open_url_in_browser, quick_prompt

logger = logging.getLogger(__name__)

PLUGIN_SUFFIX = "Plugin"

RequestT = TypeVar("RequestT", bound=BaseModel)


def canonical_plugin_name(name: str) -> str:
    """Registry key for a plugin or function name: the name without its 'Plugin' suffix"""
    return name.removesuffix(PLUGIN_SUFFIX)


class PluginRequestError(Exception):
    """Base exception for invalid plugin arguments"""
    pass


class DeserializationError(PluginRequestError):
    """Raised when the arguments cannot be turned into the request shape"""

    def __init__(self, shape: str, detail: Optional[str] = None):
        self.shape = shape
        self.detail = detail
        message = f"could not deserialize JSON to {shape}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MissingRequiredFieldError(PluginRequestError):
    """Raised when required fields are absent or null"""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"missing required field(s): {', '.join(self.fields)}")


class PluginParameter(BaseModel):
    """A parameter advertised to the model and the request field it fills"""
    name: str = Field(description="Property name as seen by the model")
    type: str = Field(default="string", description="JSON schema type")
    description: str = Field(description="Parameter description")
    required: bool = Field(default=True, description="Whether the model must supply it")
    target: Optional[str] = Field(default=None, description="Request model field, defaults to name")

    @property
    def field_name(self) -> str:
        return self.target or self.name


class FunctionDescriptor(BaseModel):
    """Machine-readable description of a callable plugin"""
    name: str = Field(description="Function name")
    description: str = Field(description="Function description")
    parameters: Dict[str, Any] = Field(description="JSON schema for function parameters")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


@dataclass
class PluginContext:
    """Everything a plugin may need, built once at startup"""
    config: AppConfig
    provider: BaseProvider
    console: Console = field(default_factory=Console)
    open_url: Callable[[str], Any] = open_url_in_browser
    http_transport: Optional[httpx.AsyncBaseTransport] = None

    async def quick_prompt(self, data: str, prompt: str = "Summarize this: ") -> str:
        return await quick_prompt(self.provider, data, prompt, model=self.config.openai.resolve_quick_prompt_model())

    def service_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments shared by every service client"""
        return {"timeout": self.config.http_timeout, "transport": self.http_transport}


class BasePlugin(ABC):
    """Uniform shape for any capability exposed to the model"""

    name: ClassVar[str]
    description: ClassVar[str]

    @property
    @abstractmethod
    def descriptor(self) -> FunctionDescriptor:
        """Get the function descriptor"""
        pass

    @abstractmethod
    async def process(self, raw_arguments: str) -> str:
        """Run the plugin on raw JSON arguments; never raises"""
        pass


class TypedPlugin(BasePlugin, Generic[RequestT]):
    """
    Plugin whose arguments are validated into a pydantic request model

    Subclasses declare ``request_model`` and a ``parameters`` table. The
    descriptor schema is generated from the table, and the ``required``
    flags in it are what ``parse_request`` enforces.
    """

    request_model: ClassVar[Type[BaseModel]]
    parameters: ClassVar[List[PluginParameter]] = []

    def __init__(self, context: PluginContext):
        self.context = context

    @property
    def descriptor(self) -> FunctionDescriptor:
        properties = {
            param.name: {"type": param.type, "description": param.description}
            for param in self.parameters
        }
        required = [param.name for param in self.parameters if param.required]

        return FunctionDescriptor(
            name=self.name,
            description=self.description,
            parameters={
                "type": "object",
                "properties": properties,
                "required": required,
            },
        )

    @classmethod
    def check_definition(cls) -> List[str]:
        """Return parameter names that do not map to a request model field"""
        fields = cls.request_model.model_fields
        return [param.name for param in cls.parameters if param.field_name not in fields]

    @classmethod
    def parse_request(cls, raw_arguments: str) -> RequestT:
        """
        Deserialize raw JSON arguments and check required fields

        Raises:
            DeserializationError: If the payload is not a JSON object matching the model
            MissingRequiredFieldError: If required fields are absent or null
        """
        shape = cls.request_model.__name__

        try:
            payload = json.loads(raw_arguments) if raw_arguments else None
        except (TypeError, ValueError) as e:
            raise DeserializationError(shape, str(e)) from e

        if payload is None or not isinstance(payload, dict):
            raise DeserializationError(shape)

        data = cls._map_properties(payload)

        missing = [
            param.name for param in cls.parameters
            if param.required and data.get(param.field_name) is None
        ]
        if missing:
            raise MissingRequiredFieldError(missing)

        try:
            return cls.request_model.model_validate(data)
        except ValidationError as e:
            raise DeserializationError(shape, str(e)) from e

    @classmethod
    def _map_properties(cls, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Map incoming property names onto model fields, ignoring case"""
        lookup = {}
        for param in cls.parameters:
            lookup[param.name.lower()] = param.field_name
            lookup[param.field_name.lower()] = param.field_name
        for field_name in cls.request_model.model_fields:
            lookup.setdefault(field_name.lower(), field_name)

        data = {}
        for key, value in payload.items():
            field_name = lookup.get(str(key).lower())
            if field_name is not None:
                data[field_name] = value
        return data

    async def process(self, raw_arguments: str) -> str:
        try:
            request = self.parse_request(raw_arguments)
            return await self.run(request)
        except DeserializationError as e:
            logger.warning("%s: %s", self.name, e)
            return f"Error deserializing request to type {e.shape}: {e.detail or 'payload is empty or not an object'}"
        except MissingRequiredFieldError as e:
            logger.warning("%s: %s", self.name, e)
            if len(e.fields) == 1:
                return f"Error: Required property '{e.fields[0]}' is null."
            names = ", ".join(f"'{name}'" for name in e.fields)
            return f"Error: Required properties {names} are null."
        except Exception as e:
            logger.warning("%s failed: %s", self.name, e, exc_info=logger.isEnabledFor(logging.DEBUG))
            return f"Error: {e}"

    @abstractmethod
    async def run(self, request: RequestT) -> str:
        """Business logic of the plugin"""
        pass
