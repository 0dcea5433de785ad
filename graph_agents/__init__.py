# graph_agents/__init__.py
"""Stateless agent functions for graph-based LLM workflows."""

__version__ = "0.1.0"
