"""Tests for the chat engine: plain replies, plugin dispatch and protocol errors."""

import json

import httpx
import pytest

from copilot_console.config import ChatConfig
from copilot_console.core.chat import ChatEngine, MissingArgumentsError, UnknownPluginError
from copilot_console.plugins import PluginRegistry
from copilot_console.plugins.builtin import BUILTIN_PLUGINS
from copilot_console.providers.base import ChatCompletion, FunctionCall, MessageRole, ProviderError


PARKING_ARGS = json.dumps({
    "name": "Jane Doe", "companyName": "Contoso", "role": "Developer", "licensePlate": "123ABC",
})


@pytest.fixture()
def engine(provider, registry):
    return ChatEngine(provider, ChatConfig(), registry)


def roles(engine):
    return [message.role for message in engine.get_conversation_history()]


class TestPlainReplies:

    def test_starts_with_system_prompt(self, engine):
        history = engine.get_conversation_history()
        assert len(history) == 1
        assert history[0].role == MessageRole.SYSTEM
        assert history[0].content.startswith("You are an AI assistant.\n\nCurrent date and time: ")

    @pytest.mark.asyncio
    async def test_reply_is_trimmed_and_appended(self, engine, provider):
        provider.completions = [ChatCompletion(content="  Hello there!  \n")]

        response = await engine.send_message("hi")

        assert response.content == "Hello there!"
        assert roles(engine) == [MessageRole.SYSTEM, MessageRole.USER, MessageRole.ASSISTANT]
        assert engine.get_conversation_history()[-1].content == "Hello there!"

    @pytest.mark.asyncio
    async def test_fixed_sampling_parameters_and_functions(self, engine, provider):
        provider.completions = [ChatCompletion(content="ok")]

        await engine.send_message("hi")

        call = provider.complete_calls[0]
        assert call["kwargs"] == {
            "temperature": 0.0,
            "top_p": 0.95,
            "max_tokens": 200,
            "frequency_penalty": 0.2,
            "presence_penalty": 0.2,
        }
        assert [f["name"] for f in call["functions"]] == [cls.name for cls in BUILTIN_PLUGINS]
        assert [m.content for m in call["messages"]][-1] == "hi"

    @pytest.mark.asyncio
    async def test_whole_conversation_is_sent(self, engine, provider):
        provider.completions = [ChatCompletion(content="first"), ChatCompletion(content="second")]

        await engine.send_message("one")
        await engine.send_message("two")

        sent = [m.content for m in provider.complete_calls[1]["messages"][1:]]
        assert sent == ["one", "first", "two"]

    @pytest.mark.asyncio
    async def test_plugins_disabled_sends_no_functions(self, provider, registry):
        engine = ChatEngine(provider, ChatConfig(plugins_enabled=False), registry)
        provider.completions = [ChatCompletion(content="ok")]

        await engine.send_message("hi")

        assert provider.complete_calls[0]["functions"] is None
        assert engine.plugins_enabled is False

    @pytest.mark.asyncio
    async def test_provider_error_removes_user_message(self, engine, provider):
        provider.completions = [ProviderError("service unavailable")]

        with pytest.raises(ProviderError):
            await engine.send_message("hi")

        assert roles(engine) == [MessageRole.SYSTEM]


class TestFunctionCalls:

    @pytest.mark.asyncio
    async def test_plugin_result_appended_as_assistant(self, engine, provider):
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="ParkingRegistrationPlugin", arguments=PARKING_ARGS)),
        ]

        response = await engine.send_message("Register my car")

        expected = "Car registered Name: Jane Doe CompanyName: Contoso Role: Developer LicensePlate: 123ABC"
        assert response.content == expected
        assert response.function_call.name == "ParkingRegistrationPlugin"
        history = engine.get_conversation_history()
        assert history[-1].role == MessageRole.ASSISTANT
        assert history[-1].content == expected

    @pytest.mark.asyncio
    async def test_name_without_suffix_resolves(self, engine, provider):
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="ParkingRegistration", arguments=PARKING_ARGS)),
        ]

        response = await engine.send_message("Register my car")

        assert response.content.startswith("Car registered")

    @pytest.mark.asyncio
    async def test_validation_failure_is_appended_not_raised(self, engine, provider):
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="NewsPlugin", arguments='{"category": "tech"}')),
        ]

        response = await engine.send_message("news please")

        assert response.content == "Error: Required property 'topic' is null."
        assert engine.get_conversation_history()[-1].content == response.content

    @pytest.mark.asyncio
    async def test_unknown_plugin_is_fatal(self, engine, provider):
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="StocksPlugin", arguments='{"symbol": "MSFT"}')),
        ]

        with pytest.raises(UnknownPluginError, match="StocksPlugin"):
            await engine.send_message("price of MSFT?")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [None, ""])
    async def test_missing_arguments_is_fatal(self, engine, provider, arguments):
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="WeatherPlugin", arguments=arguments)),
        ]

        with pytest.raises(MissingArgumentsError):
            await engine.send_message("weather?")


class TestWeatherEndToEnd:

    @pytest.mark.asyncio
    async def test_weather_question(self, provider, make_context):
        forecasts = []

        def handler(request: httpx.Request) -> httpx.Response:
            forecasts.append(request)
            return httpx.Response(200, json={"current_weather": {"temperature": 33.1, "windspeed": 9.4}})

        registry = PluginRegistry.from_classes(BUILTIN_PLUGINS, make_context(handler))
        engine = ChatEngine(provider, ChatConfig(), registry)
        provider.completions = [
            ChatCompletion(function_call=FunctionCall(name="WeatherPlugin", arguments='{"location": "Austin, TX"}')),
        ]
        provider.replies = [
            "Austin, TX is at latitude 30.2672, longitude -97.7431.",
            "It is 33 degrees and breezy in Austin.",
        ]

        response = await engine.send_message("What's the weather in Austin, TX")

        assert response.content == "It is 33 degrees and breezy in Austin."
        assert len(forecasts) == 1
        assert forecasts[0].url.params["latitude"] == "30.2672"
        assert forecasts[0].url.params["longitude"] == "-97.7431"
        history = engine.get_conversation_history()
        assert history[-2].content == "What's the weather in Austin, TX"
        assert history[-1].role == MessageRole.ASSISTANT
        assert history[-1].content == "It is 33 degrees and breezy in Austin."
