# graph_agents/agents/base.py
"""
Host-facing agent contract.

An agent is an async function taking an AgentContext and returning a
result dict. The host runtime supplies named inputs, params, optional
config and filter params (e.g. streamTokenCallback) on every call.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable


@dataclass
class AgentContext:
    """Inputs for a single agent invocation."""

    named_inputs: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] | None = None
    filter_params: dict[str, Any] = field(default_factory=dict)


AgentFunction = Callable[[AgentContext], Awaitable[dict[str, Any]]]


@dataclass
class AgentFunctionInfo:
    """Registry entry describing an agent to the host runtime."""

    name: str
    agent: AgentFunction
    mock: AgentFunction
    description: str = ""
    category: list[str] = field(default_factory=list)
    stream: bool = False
    environment_variables: list[str] = field(default_factory=list)
