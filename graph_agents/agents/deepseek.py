# graph_agents/agents/deepseek.py
"""
deepseekAgent: chat completion against DeepSeek's OpenAI-compatible API.

Parameters are resolved once at call entry, lowest precedence first:
settings (config file / environment), host config, params, named inputs.
"""

import logging
import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from graph_agents.config.schema import DEEPSEEK_API_KEY_ENV, DEEPSEEK_BASE_URL, DeepSeekSettings
from graph_agents.llm.deepseek import DeepSeekClient
from graph_agents.llm.messages import get_merge_value, get_messages

from .base import AgentContext, AgentFunctionInfo

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "deepseek-chat"

# Host keys that differ from field names
_ALIASES = {"apiKey": "api_key", "baseURL": "base_url"}

# Keys each layer may set
_CONFIG_KEYS = {"api_key", "base_url", "stream", "model", "timeout"}
_INPUT_KEYS = {
    "verbose",
    "system",
    "temperature",
    "max_tokens",
    "prompt",
    "messages",
    "tools",
    "tool_choice",
    "response_format",
}


class DeepSeekParams(BaseModel):
    """Fully resolved parameters for one deepseekAgent call."""

    model_config = ConfigDict(extra="ignore")

    model: str = DEFAULT_MODEL
    api_key: str | None = None
    base_url: str = DEEPSEEK_BASE_URL
    timeout: float | None = None
    stream: bool = False
    verbose: bool = False
    temperature: float = 0.7
    max_tokens: int = 1024
    system: str | None = None
    prompt: str | None = None
    messages: list[dict] | None = None
    tools: list[dict] | None = None
    tool_choice: Any = None
    response_format: dict | None = None


def _layer(source: Mapping[str, Any] | None, allowed: set[str] | None = None) -> dict:
    """Normalize a host layer to field names, keeping only set values."""
    layer = {}
    for key, value in (source or {}).items():
        name = _ALIASES.get(key, key)
        if value is None or name not in DeepSeekParams.model_fields:
            continue
        if allowed is not None and name not in allowed:
            continue
        layer[name] = value
    return layer


def resolve_deepseek_params(
    context: AgentContext, settings: DeepSeekSettings | None = None
) -> DeepSeekParams:
    """
    Resolve one DeepSeekParams from every layer of the call.

    Mergeable prompt/system fragments (mergeablePrompts, mergeableSystem)
    from inputs and params are joined ahead of the plain values.

    Args:
        context:  Host invocation context
        settings: Defaults from the config file (None = built-in defaults)

    Returns:
        Validated DeepSeekParams
    """
    settings = settings or DeepSeekSettings()
    resolved: dict[str, Any] = {
        "model": settings.model,
        "api_key": settings.api_key or os.environ.get(DEEPSEEK_API_KEY_ENV),
        "base_url": settings.base_url,
        "timeout": settings.timeout,
        "stream": settings.stream,
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
    }
    resolved.update(_layer(context.config, _CONFIG_KEYS))
    resolved.update(_layer(context.params))
    resolved.update(_layer(context.named_inputs, _INPUT_KEYS))

    resolved["model"] = resolved.get("model") or DEFAULT_MODEL
    resolved["prompt"] = get_merge_value(
        context.named_inputs, context.params, "mergeablePrompts", resolved.get("prompt")
    )
    resolved["system"] = get_merge_value(
        context.named_inputs, context.params, "mergeableSystem", resolved.get("system")
    )
    return DeepSeekParams(**resolved)


async def deepseek_agent(
    context: AgentContext, settings: DeepSeekSettings | None = None
) -> dict:
    """
    Send the assembled conversation to DeepSeek and normalize the reply.

    Args:
        context:  Host invocation context; filter_params may carry
                  streamTokenCallback for streamed tokens
        settings: Defaults from the config file

    Returns:
        Completion dict plus text, tool, tool_calls, message, messages

    Raises:
        ValueError: No API key in any layer or the environment
    """
    params = resolve_deepseek_params(context, settings)
    if not params.api_key:
        raise ValueError(
            f"No DeepSeek API key: pass apiKey or set {DEEPSEEK_API_KEY_ENV}"
        )

    messages = get_messages(params.system, params.messages)
    if params.prompt:
        messages.append({"role": "user", "content": params.prompt})

    if params.verbose:
        logger.info(f"deepseekAgent messages: {messages}")

    client = DeepSeekClient(
        api_key=params.api_key, base_url=params.base_url, timeout=params.timeout
    )
    try:
        return await client.chat(
            messages,
            model=params.model,
            temperature=params.temperature,
            max_tokens=params.max_tokens,
            tools=params.tools,
            tool_choice=params.tool_choice,
            response_format=params.response_format,
            stream=params.stream,
            stream_token_callback=context.filter_params.get("streamTokenCallback"),
        )
    finally:
        await client.aclose()


deepseek_agent_info = AgentFunctionInfo(
    name="deepseekAgent",
    agent=deepseek_agent,
    mock=deepseek_agent,
    description="DeepSeek Agent",
    category=["llm"],
    stream=True,
    environment_variables=[DEEPSEEK_API_KEY_ENV],
)
