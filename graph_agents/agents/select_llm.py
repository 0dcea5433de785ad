# graph_agents/agents/select_llm.py
"""selectLLMAgent: pick one LLM option by name, keep two others for proofreading."""

from typing import Any, Mapping

from graph_agents.config.schema import LLMOption

from .base import AgentContext, AgentFunctionInfo


def _option_name(option: LLMOption | Mapping[str, Any]) -> str | None:
    if isinstance(option, LLMOption):
        return option.name
    return option.get("name")


def select_llm(llm_options: list, selected_name: str | None) -> dict:
    """
    Partition options into the selected one and two alternates.

    Alternates are the first two non-matching options in list order; a
    missing slot is None. No match leaves selectedLLM as None.
    """
    selected = next(
        (option for option in llm_options if _option_name(option) == selected_name), None
    )
    not_selected = [option for option in llm_options if _option_name(option) != selected_name]

    return {
        "selectedLLM": selected,
        "proofreadLLM_A": not_selected[0] if len(not_selected) > 0 else None,
        "proofreadLLM_B": not_selected[1] if len(not_selected) > 1 else None,
    }


async def select_llm_agent(context: AgentContext) -> dict:
    """Select `selectedLLMName` from the `llmOptions` param."""
    llm_options = context.params.get("llmOptions") or []
    return select_llm(llm_options, context.named_inputs.get("selectedLLMName"))


select_llm_agent_info = AgentFunctionInfo(
    name="selectLLMAgent",
    agent=select_llm_agent,
    mock=select_llm_agent,
    description="Select an LLM option by name and two alternates",
    category=["llm"],
)
