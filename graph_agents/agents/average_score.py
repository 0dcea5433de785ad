# graph_agents/agents/average_score.py
"""
averageScoreAgent: mean of numeric-looking scores.

Scores come from LLM graders and are usually strings. Values that do not
coerce to a number are discarded, since models sometimes wrap a number in
prose ("hard to judge, but roughly 50").
"""

import logging
import math
import re
from typing import Any

from .base import AgentContext, AgentFunctionInfo

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$", re.ASCII)
_PREFIXED = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$", re.ASCII)
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def to_number(value: Any) -> float:
    """
    Coerce a score with the host runtime's numeric-conversion rules.

    Strings are trimmed; blank means 0; decimal, exponent, Infinity and
    0x/0o/0b literals are accepted. Anything else is NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0.0
    if text in _INFINITY:
        return _INFINITY[text]
    if _DECIMAL.match(text):
        return float(text)
    if _PREFIXED.match(text):
        return float(int(text, 0))
    return math.nan


def average_scores(scores: list[Any]) -> float:
    """
    Arithmetic mean of the parseable scores, NaN when none survive.

    Raises:
        TypeError: scores is not a list or tuple
    """
    if not isinstance(scores, (list, tuple)):
        raise TypeError(f"scores must be a list, got {type(scores).__name__}")

    numbers = []
    for score in scores:
        number = to_number(score)
        if math.isnan(number):
            logger.debug(f"Discarding non-numeric score: {score!r}")
            continue
        numbers.append(number)

    if not numbers:
        return math.nan
    return sum(numbers) / len(numbers)


async def average_score_agent(context: AgentContext) -> dict:
    """Average `scores` from the named inputs."""
    scores = context.named_inputs.get("scores")
    if scores is None:
        scores = []
    return {"score": average_scores(scores)}


average_score_agent_info = AgentFunctionInfo(
    name="averageScoreAgent",
    agent=average_score_agent,
    mock=average_score_agent,
    description="Average of numeric scores, ignoring non-numeric values",
    category=["data"],
)
