# graph_agents/llm/messages.py
"""
Prompt and message-list assembly.

Prompts may be "mergeable": assembled from fragments supplied by several
call layers (named inputs, params, then the plain value). Fragments are
flattened in that order, empty pieces dropped, and joined with newlines.
"""

from typing import Any, Mapping

Fragment = str | list[str] | None


def _flatten(fragment: Any) -> list[str]:
    if fragment is None:
        return []
    if isinstance(fragment, (list, tuple)):
        return [str(piece) for piece in fragment if piece]
    return [str(fragment)] if fragment else []


def merge_fragments(*fragments: Fragment) -> str | None:
    """
    Join text fragments into a single prompt.

    Args:
        fragments: Strings, lists of strings or None, in precedence order

    Returns:
        Newline-joined text, or None when every fragment was empty
    """
    pieces = [piece for fragment in fragments for piece in _flatten(fragment)]
    return "\n".join(pieces) if pieces else None


def get_merge_value(
    named_inputs: Mapping[str, Any],
    params: Mapping[str, Any],
    key: str,
    value: Fragment,
) -> str | None:
    """Merge the `key` fragments of inputs and params with the plain value."""
    return merge_fragments(named_inputs.get(key), params.get(key), value)


def get_messages(system_prompt: str | None, messages: list[dict] | None) -> list[dict]:
    """
    Copy the prior message list, seeding the system prompt if needed.

    The system message is inserted at position 0 only when the prior
    sequence does not already start with one, so a conversation fed back
    in keeps a single system turn instead of gaining another on each call.
    Roles are not validated.
    """
    messages_copy = [dict(message) for message in (messages or [])]
    if system_prompt and not (messages_copy and messages_copy[0].get("role") == "system"):
        messages_copy.insert(0, {"role": "system", "content": system_prompt})
    return messages_copy
