# graph_agents/config/schema.py
"""
Pydantic configuration models for graph-agents.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
DEEPSEEK_API_KEY_ENV = "DEEPSEEK_API_KEY"


class DeepSeekSettings(BaseModel):
    """Defaults for the DeepSeek (OpenAI-compatible) chat agent."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default=DEEPSEEK_BASE_URL, description="OpenAI-compatible API base URL"
    )
    api_key: str | None = Field(
        default=None,
        description=f"API key (None = read {DEEPSEEK_API_KEY_ENV} from the environment)",
    )
    model: str = Field(default="deepseek-chat", description="Chat model name")
    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=1024, ge=1, description="Maximum tokens in the generated reply"
    )
    stream: bool = Field(default=False, description="Stream tokens by default")
    timeout: float | None = Field(
        default=None,
        description="Transport timeout in seconds (None = openai client default)",
    )


class LLMOption(BaseModel):
    """A named LLM configuration the selection agent can choose from."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(description="Display name used for selection")
    agent_name: str = Field(alias="agentName", description="Agent that serves this option")
    model: str = Field(description="Model identifier passed to the agent")
    api_key: str | None = Field(
        default=None, alias="apiKey", description="Optional per-option API key"
    )


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = ConfigDict(extra="ignore")

    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Logging verbosity level"
    )
    json_output: bool = Field(
        default=False, description="Emit JSON lines instead of human-readable logs"
    )


class GraphAgentsConfig(BaseModel):
    """Root configuration for graph-agents."""

    model_config = ConfigDict(extra="ignore")

    deepseek: DeepSeekSettings = Field(default_factory=DeepSeekSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    llm_options: list[LLMOption] = Field(
        default_factory=list, description="Options offered to selectLLMAgent"
    )
