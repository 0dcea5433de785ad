# graph_agents/__main__.py
"""Entry point for `python -m graph_agents`."""

from graph_agents.cli import app

if __name__ == "__main__":
    app()
