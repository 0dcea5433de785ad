# graph_agents/llm/types.py
"""Normalized chat-completion types shared by the agents."""

from dataclasses import dataclass
from typing import Any, Callable

# Invoked once per streamed text token, return value ignored
StreamTokenCallback = Callable[[str], Any]


@dataclass
class AgentToolCall:
    """A tool call extracted from the first choice of a chat completion."""

    id: str
    name: str
    arguments: Any = None  # parsed JSON, None when absent or unparseable
    parse_error: str | None = None  # decoder message when the payload was malformed

    @property
    def unparseable(self) -> bool:
        """True when the model sent arguments that are not valid JSON."""
        return self.parse_error is not None

    def to_dict(self) -> dict:
        result = {"id": self.id, "name": self.name, "arguments": self.arguments}
        if self.parse_error is not None:
            result["parse_error"] = self.parse_error
        return result
