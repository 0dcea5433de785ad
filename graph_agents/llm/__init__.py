# graph_agents/llm/__init__.py
"""OpenAI-compatible chat client, message assembly and response normalization."""

from .deepseek import DeepSeekClient, convert_tool_call, normalize_chat_completion
from .messages import get_merge_value, get_messages, merge_fragments
from .types import AgentToolCall, StreamTokenCallback

__all__ = [
    "DeepSeekClient",
    "convert_tool_call",
    "normalize_chat_completion",
    "get_merge_value",
    "get_messages",
    "merge_fragments",
    "AgentToolCall",
    "StreamTokenCallback",
]
