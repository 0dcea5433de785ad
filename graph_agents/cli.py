# graph_agents/cli.py
"""
CLI interface for graph-agents.

Thin presentation layer over the agent functions. Every command builds an
AgentContext exactly as a host runtime would and prints the result.
"""

import asyncio
import json
import math

import typer

from graph_agents.agents import AgentContext, list_agents
from graph_agents.agents.average_score import average_score_agent
from graph_agents.agents.deepseek import deepseek_agent
from graph_agents.agents.select_llm import select_llm_agent
from graph_agents.config.loader import get_config_path, load_config
from graph_agents.logging_config import configure_logging

app = typer.Typer(
    name="graph-agents",
    help="Stateless LLM agent functions for graph workflows.",
    no_args_is_help=True,
)


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


@app.command()
def chat(
    prompt: str = typer.Argument(..., help="User prompt"),
    system: str = typer.Option(None, "--system", "-s", help="System prompt"),
    model: str = typer.Option(None, "--model", "-m", help="Model override"),
    stream: bool = typer.Option(None, "--stream/--no-stream", help="Stream tokens as they arrive"),
    temperature: float = typer.Option(None, "--temperature", "-t", help="Sampling temperature"),
    max_tokens: int = typer.Option(None, "--max-tokens", help="Maximum tokens to generate"),
    api_key: str = typer.Option(None, "--api-key", help="API key (default: DEEPSEEK_API_KEY)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log the outgoing messages"),
    as_json: bool = typer.Option(False, "--json", help="Print the full normalized result as JSON"),
):
    """Send a prompt to DeepSeek and print the reply."""
    config = load_config()
    configure_logging(
        "verbose" if verbose else config.logging.verbosity, config.logging.json_output
    )

    params = {
        "model": model,
        "stream": stream,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "apiKey": api_key,
        "verbose": verbose,
    }
    context = AgentContext(
        named_inputs={"prompt": prompt, "system": system},
        params={k: v for k, v in params.items() if v is not None},
        filter_params={"streamTokenCallback": lambda token: typer.echo(token, nl=False)},
    )

    try:
        result = _run(deepseek_agent(context, settings=config.deepseek))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    streamed = stream if stream is not None else config.deepseek.stream
    if as_json:
        if streamed:
            typer.echo()
        typer.echo(json.dumps(result, indent=2, default=str))
    elif streamed:
        typer.echo()
    else:
        typer.echo(result["text"] or "")


@app.command()
def average(scores: list[str] = typer.Argument(..., help="Scores; non-numeric values are ignored")):
    """Average numeric scores."""
    result = _run(average_score_agent(AgentContext(named_inputs={"scores": scores})))
    score = result["score"]
    if math.isnan(score):
        typer.echo("nan")
        raise typer.Exit(1)
    typer.echo(f"{score:g}")


@app.command()
def select(name: str = typer.Argument(..., help="Name of the LLM option to select")):
    """Select an LLM option from the config file and two alternates."""
    config = load_config()
    options = [
        option.model_dump(by_alias=True, exclude_none=True) for option in config.llm_options
    ]
    result = _run(
        select_llm_agent(
            AgentContext(named_inputs={"selectedLLMName": name}, params={"llmOptions": options})
        )
    )
    typer.echo(json.dumps(result, indent=2))
    if result["selectedLLM"] is None:
        typer.echo(f"No LLM option named '{name}'", err=True)
        raise typer.Exit(1)


@app.command("agents")
def agents_list():
    """List registered agents."""
    from rich.console import Console
    from rich.table import Table

    table = Table(show_header=True, header_style="bold")
    table.add_column("NAME", no_wrap=True)
    table.add_column("CATEGORY")
    table.add_column("STREAM")
    table.add_column("DESCRIPTION")
    for info in list_agents():
        table.add_row(
            info.name,
            ", ".join(info.category),
            "yes" if info.stream else "-",
            info.description,
        )
    Console().print(table)


@app.command("config-path")
def config_path():
    """Print the config file location."""
    typer.echo(str(get_config_path()))
