# tests/unit/test_deepseek_agent.py
"""Unit tests for deepseekAgent parameter resolution and invocation."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai.types.chat import ChatCompletion

from graph_agents.agents import AgentContext
from graph_agents.agents.deepseek import (
    DEFAULT_MODEL,
    deepseek_agent,
    resolve_deepseek_params,
)
from graph_agents.config.schema import DeepSeekSettings


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch):
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)


def _make_completion(content="hello"):
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "deepseek-chat",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        }
    )


# ---------------------------------------------------------------------------
# resolve_deepseek_params
# ---------------------------------------------------------------------------

class TestResolveParams:
    def test_defaults(self):
        params = resolve_deepseek_params(AgentContext())
        assert params.model == DEFAULT_MODEL
        assert params.temperature == 0.7
        assert params.max_tokens == 1024
        assert params.stream is False
        assert params.api_key is None
        assert params.base_url == "https://api.deepseek.com/v1"

    def test_env_key_is_lowest_credential(self, monkeypatch):
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")
        assert resolve_deepseek_params(AgentContext()).api_key == "sk-env"

        settings = DeepSeekSettings(api_key="sk-file")
        assert resolve_deepseek_params(AgentContext(), settings).api_key == "sk-file"

        context = AgentContext(config={"apiKey": "sk-config"})
        assert resolve_deepseek_params(context, settings).api_key == "sk-config"

        context = AgentContext(config={"apiKey": "sk-config"}, params={"apiKey": "sk-param"})
        assert resolve_deepseek_params(context, settings).api_key == "sk-param"

    def test_config_under_params(self):
        context = AgentContext(
            config={"model": "deepseek-reasoner", "stream": True, "baseURL": "http://proxy/v1"},
            params={"stream": False},
        )
        params = resolve_deepseek_params(context)
        assert params.model == "deepseek-reasoner"
        assert params.stream is False
        assert params.base_url == "http://proxy/v1"

    def test_config_cannot_set_input_keys(self):
        context = AgentContext(config={"temperature": 0.1, "prompt": "ignored"})
        params = resolve_deepseek_params(context)
        assert params.temperature == 0.7
        assert params.prompt is None

    def test_inputs_over_params(self):
        context = AgentContext(
            named_inputs={"temperature": 0.1, "prompt": "from input"},
            params={"temperature": 0.9, "max_tokens": 200, "prompt": "from params"},
        )
        params = resolve_deepseek_params(context)
        assert params.temperature == 0.1
        assert params.max_tokens == 200
        assert params.prompt == "from input"

    def test_inputs_cannot_set_model(self):
        context = AgentContext(
            named_inputs={"model": "from-input"}, params={"model": "deepseek-reasoner"}
        )
        assert resolve_deepseek_params(context).model == "deepseek-reasoner"

    def test_inputs_cannot_set_credentials(self):
        context = AgentContext(named_inputs={"apiKey": "sk-input", "stream": True})
        params = resolve_deepseek_params(context)
        assert params.api_key is None
        assert params.stream is False

    def test_none_values_do_not_override(self):
        context = AgentContext(params={"temperature": None, "model": None})
        params = resolve_deepseek_params(context, DeepSeekSettings(temperature=0.3))
        assert params.temperature == 0.3
        assert params.model == DEFAULT_MODEL

    def test_empty_model_falls_back_to_default(self):
        assert resolve_deepseek_params(AgentContext(params={"model": ""})).model == DEFAULT_MODEL

    def test_mergeable_prompts(self):
        context = AgentContext(
            named_inputs={"mergeablePrompts": ["part one", "part two"], "prompt": "question"},
            params={"mergeableSystem": "rules", "system": "persona"},
        )
        params = resolve_deepseek_params(context)
        assert params.prompt == "part one\npart two\nquestion"
        assert params.system == "rules\npersona"

    def test_settings_supply_defaults(self):
        settings = DeepSeekSettings(model="deepseek-coder", max_tokens=64, stream=True, timeout=12)
        params = resolve_deepseek_params(AgentContext(), settings)
        assert params.model == "deepseek-coder"
        assert params.max_tokens == 64
        assert params.stream is True
        assert params.timeout == 12


# ---------------------------------------------------------------------------
# deepseek_agent
# ---------------------------------------------------------------------------

class TestDeepSeekAgent:
    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            with pytest.raises(ValueError, match="DEEPSEEK_API_KEY"):
                await deepseek_agent(AgentContext(named_inputs={"prompt": "hi"}))
        mock_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_builds_messages_and_calls_client(self):
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(return_value={"text": "ok"})
            context = AgentContext(
                named_inputs={"prompt": "hello", "system": "be brief"},
                params={"apiKey": "sk-test", "temperature": 0.2},
            )
            result = await deepseek_agent(context)

        assert result == {"text": "ok"}
        mock_client.assert_called_once_with(
            api_key="sk-test", base_url="https://api.deepseek.com/v1", timeout=None
        )
        args, kwargs = mock_client.return_value.chat.call_args
        assert args[0] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hello"},
        ]
        assert kwargs["model"] == DEFAULT_MODEL
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 1024
        assert kwargs["stream"] is False
        assert kwargs["stream_token_callback"] is None

    @pytest.mark.asyncio
    async def test_no_prompt_appends_nothing(self):
        prior = [{"role": "user", "content": "earlier"}]
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(return_value={})
            await deepseek_agent(
                AgentContext(named_inputs={"messages": prior}, params={"apiKey": "sk-test"})
            )

        sent = mock_client.return_value.chat.call_args.args[0]
        assert sent == prior
        assert sent is not prior

    @pytest.mark.asyncio
    async def test_streaming_callback_forwarded(self):
        callback = MagicMock()
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(return_value={})
            await deepseek_agent(
                AgentContext(
                    named_inputs={"prompt": "hi"},
                    params={"apiKey": "sk-test", "stream": True},
                    filter_params={"streamTokenCallback": callback},
                )
            )

        kwargs = mock_client.return_value.chat.call_args.kwargs
        assert kwargs["stream"] is True
        assert kwargs["stream_token_callback"] is callback

    @pytest.mark.asyncio
    async def test_verbose_logs_messages(self, caplog):
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(return_value={})
            with caplog.at_level("INFO", logger="graph_agents.agents.deepseek"):
                await deepseek_agent(
                    AgentContext(
                        named_inputs={"prompt": "secret question", "verbose": True},
                        params={"apiKey": "sk-test"},
                    )
                )
        assert "secret question" in caplog.text

    @pytest.mark.asyncio
    async def test_end_to_end_text_completion(self):
        with patch("graph_agents.llm.deepseek.AsyncOpenAI") as mock_openai:
            mock_openai.return_value.close = AsyncMock()
            mock_openai.return_value.chat.completions.create = AsyncMock(
                return_value=_make_completion("hello")
            )
            result = await deepseek_agent(
                AgentContext(named_inputs={"prompt": "hi"}, params={"apiKey": "sk-test"})
            )

        assert result["text"] == "hello"
        assert result["tool"] is None
        assert result["tool_calls"] == []
        assert result["messages"] == [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        assert result["id"] == "chatcmpl-1"

    @pytest.mark.asyncio
    async def test_each_call_owns_its_messages(self):
        prior = [{"role": "user", "content": "earlier"}]
        with patch("graph_agents.llm.deepseek.AsyncOpenAI") as mock_openai:
            mock_openai.return_value.close = AsyncMock()
            mock_openai.return_value.chat.completions.create = AsyncMock(
                side_effect=[_make_completion("one"), _make_completion("two")]
            )
            context = AgentContext(
                named_inputs={"messages": prior, "prompt": "next"},
                params={"apiKey": "sk-test"},
            )
            first = await deepseek_agent(context)
            second = await deepseek_agent(context)

        assert prior == [{"role": "user", "content": "earlier"}]
        assert first["messages"][-1]["content"] == "one"
        assert second["messages"][-1]["content"] == "two"
        assert len(second["messages"]) == 3

    @pytest.mark.asyncio
    async def test_client_closed_after_call(self):
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(return_value={"text": "ok"})
            await deepseek_agent(
                AgentContext(named_inputs={"prompt": "hi"}, params={"apiKey": "sk-test"})
            )

        mock_client.return_value.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_closed_when_chat_fails(self):
        with patch("graph_agents.agents.deepseek.DeepSeekClient") as mock_client:
            mock_client.return_value.aclose = AsyncMock()
            mock_client.return_value.chat = AsyncMock(side_effect=RuntimeError("upstream down"))
            with pytest.raises(RuntimeError, match="upstream down"):
                await deepseek_agent(
                    AgentContext(named_inputs={"prompt": "hi"}, params={"apiKey": "sk-test"})
                )

        mock_client.return_value.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_end_to_end_closes_http_client(self):
        with patch("graph_agents.llm.deepseek.AsyncOpenAI") as mock_openai:
            mock_openai.return_value.close = AsyncMock()
            mock_openai.return_value.chat.completions.create = AsyncMock(
                return_value=_make_completion("hello")
            )
            await deepseek_agent(
                AgentContext(named_inputs={"prompt": "hi"}, params={"apiKey": "sk-test"})
            )

        mock_openai.return_value.close.assert_awaited_once()
