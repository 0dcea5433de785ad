# graph_agents/llm/deepseek.py
"""DeepSeek chat client using the OpenAI-compatible API."""

import json
import logging
from typing import Any

from openai import AsyncOpenAI
from openai.lib.streaming.chat import ChatCompletionStreamState

from graph_agents.config.schema import DEEPSEEK_BASE_URL

from .types import AgentToolCall, StreamTokenCallback

logger = logging.getLogger(__name__)


def convert_tool_call(raw_tool_call: dict) -> AgentToolCall:
    """
    Convert a raw OpenAI tool call dict into an AgentToolCall.

    Malformed JSON arguments are logged and yield arguments=None with
    parse_error set; the call itself never fails on them.

    Args:
        raw_tool_call: {"id", "type", "function": {"name", "arguments"}}

    Returns:
        AgentToolCall with parsed arguments
    """
    function = raw_tool_call.get("function") or {}
    raw_arguments = function.get("arguments")
    tool_call = AgentToolCall(id=raw_tool_call.get("id") or "", name=function.get("name") or "")

    if not raw_arguments:
        return tool_call

    try:
        tool_call.arguments = json.loads(raw_arguments)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Unparseable arguments for tool call {tool_call.name!r}: {e}")
        tool_call.parse_error = str(e)
    return tool_call


def normalize_chat_completion(response: Any, messages: list[dict]) -> dict:
    """
    Normalize a chat completion into the agent result shape.

    Only the first choice is considered. If it carries a message, a
    normalized copy is appended to `messages` (in place).

    Args:
        response: ChatCompletion model (or its dict form)
        messages: Message list used for the request

    Returns:
        The completion as a dict plus text, tool, tool_calls, message, messages
    """
    result = response.model_dump() if hasattr(response, "model_dump") else dict(response)

    choices = result.get("choices") or []
    new_message = choices[0].get("message") if choices else None
    text = new_message.get("content") if new_message else None

    raw_tool_calls = (new_message or {}).get("tool_calls")
    if not isinstance(raw_tool_calls, list):
        raw_tool_calls = []

    tool_calls = [convert_tool_call(tc).to_dict() for tc in raw_tool_calls]
    tool = tool_calls[0] if tool_calls else None

    message = None
    if new_message:
        message = {"content": new_message.get("content"), "role": new_message.get("role")}
        if raw_tool_calls:
            # Wire format: id, type, function.name, function.arguments
            message["tool_calls"] = [
                {
                    "id": tc.get("id"),
                    "type": tc.get("type") or "function",
                    "function": {
                        "name": (tc.get("function") or {}).get("name"),
                        "arguments": (tc.get("function") or {}).get("arguments"),
                    },
                }
                for tc in raw_tool_calls
            ]
        messages.append(message)

    return {
        **result,
        "text": text or None,
        "tool": tool,
        "tool_calls": tool_calls,
        "message": message,
        "messages": messages,
    }


class DeepSeekClient:
    """
    Async DeepSeek client using the OpenAI-compatible API.

    One request per call: no retry, no rate limiting. Upstream errors from
    the openai package propagate to the caller unchanged.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEEPSEEK_BASE_URL,
        timeout: float | None = None,
    ):
        """
        Initialize DeepSeek client.

        Args:
            api_key:  API credential
            base_url: OpenAI-compatible API base URL
            timeout:  Transport timeout in seconds (None = openai default)
        """
        self.base_url = base_url
        client_kwargs: dict[str, Any] = {"api_key": api_key, "base_url": base_url}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = AsyncOpenAI(**client_kwargs)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    async def chat(
        self,
        messages: list[dict],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        tools: list[dict] | None = None,
        tool_choice: Any = None,
        response_format: dict | None = None,
        stream: bool = False,
        stream_token_callback: StreamTokenCallback | None = None,
    ) -> dict:
        """
        Run one chat completion and normalize the response.

        When streaming, every non-empty delta token of the first choice is
        passed to `stream_token_callback` in arrival order. The stream is
        always consumed to the end before the final completion is normalized.

        Args:
            messages:              Chat messages (the reply is appended in place)
            model:                 Model name
            temperature:           Sampling temperature
            max_tokens:            Maximum tokens to generate
            tools:                 OpenAI tool definitions
            tool_choice:           OpenAI tool_choice option
            response_format:       OpenAI response_format option
            stream:                Use the streaming endpoint
            stream_token_callback: Called with each streamed token

        Returns:
            Normalized result dict (see normalize_chat_completion)

        Raises:
            ValueError: The stream closed before delivering a single chunk
        """
        chat_params: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if tools is not None:
            chat_params["tools"] = tools
        if tool_choice is not None:
            chat_params["tool_choice"] = tool_choice
        if response_format is not None:
            chat_params["response_format"] = response_format

        logger.info(
            f"DeepSeek.chat: model={model}, messages={len(messages)}, stream={stream}"
        )

        if not stream:
            response = await self._client.chat.completions.create(**chat_params)
            return normalize_chat_completion(response, messages)

        # Accumulates deltas (content and tool-call fragments) into one completion
        state = ChatCompletionStreamState()
        chunks = 0
        tokens = 0
        stream_response = await self._client.chat.completions.create(**chat_params, stream=True)
        async for chunk in stream_response:
            state.handle_chunk(chunk)
            chunks += 1
            delta = chunk.choices[0].delta if chunk.choices else None
            token = delta.content if delta else None
            if token:
                tokens += 1
                if stream_token_callback is not None:
                    stream_token_callback(token)

        if not chunks:
            raise ValueError(f"Stream from {self.base_url} ended without any chunks")

        # Unparsed snapshot: truncated replies (finish_reason="length") come back as-is
        completion = state.current_completion_snapshot
        logger.info(f"DeepSeek.chat: stream finished after {chunks} chunks, {tokens} tokens")
        return normalize_chat_completion(completion, messages)
