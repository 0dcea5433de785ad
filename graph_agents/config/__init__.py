# graph_agents/config/__init__.py
"""Configuration system for graph-agents."""

from .loader import get_config_path, load_config
from .schema import (
    DEEPSEEK_API_KEY_ENV,
    DEEPSEEK_BASE_URL,
    DeepSeekSettings,
    GraphAgentsConfig,
    LLMOption,
    LoggingSettings,
)

__all__ = [
    "GraphAgentsConfig",
    "DeepSeekSettings",
    "LLMOption",
    "LoggingSettings",
    "DEEPSEEK_API_KEY_ENV",
    "DEEPSEEK_BASE_URL",
    "load_config",
    "get_config_path",
]
