# graph_agents/agents/__init__.py
"""Agent functions and the name -> AgentFunctionInfo registry."""

from .average_score import average_score_agent, average_score_agent_info
from .base import AgentContext, AgentFunction, AgentFunctionInfo
from .deepseek import DeepSeekParams, deepseek_agent, deepseek_agent_info, resolve_deepseek_params
from .select_llm import select_llm_agent, select_llm_agent_info

AGENTS: dict[str, AgentFunctionInfo] = {
    info.name: info
    for info in (average_score_agent_info, deepseek_agent_info, select_llm_agent_info)
}


def get_agent_info(name: str) -> AgentFunctionInfo:
    """Look up a registered agent by name."""
    if name not in AGENTS:
        raise ValueError(f"Unknown agent '{name}'. Available: {list(AGENTS)}")
    return AGENTS[name]


def list_agents() -> list[AgentFunctionInfo]:
    """All registered agents, sorted by name."""
    return [AGENTS[name] for name in sorted(AGENTS)]


async def run_agent(name: str, context: AgentContext) -> dict:
    """Invoke a registered agent by name."""
    return await get_agent_info(name).agent(context)


__all__ = [
    "AGENTS",
    "AgentContext",
    "AgentFunction",
    "AgentFunctionInfo",
    "DeepSeekParams",
    "average_score_agent",
    "deepseek_agent",
    "select_llm_agent",
    "get_agent_info",
    "list_agents",
    "resolve_deepseek_params",
    "run_agent",
]
