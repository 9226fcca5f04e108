"""Jinja2 environment for prompt templates."""

from collections.abc import Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined

from summarylog.domain.entities import DigestMessage


def format_transcript(messages: Iterable[DigestMessage]) -> str:
    """Render digest messages as one "role: content" line each.

    Args:
        messages: Messages, oldest first.

    Returns:
        Transcript text, or "(no messages)" for an empty window.
    """
    lines = [f"{message.role}: {message.content}" for message in messages]
    return "\n".join(lines) if lines else "(no messages)"


def create_jinja_env() -> Environment:
    """Create the environment that loads templates from the templates/ directory.

    Prompts are plain text, so autoescaping is off. Undefined variables raise
    instead of rendering as empty strings.

    Returns:
        Configured Jinja2 environment with the "transcript" filter.
    """
    env = Environment(
        loader=PackageLoader("summarylog.infrastructure.llm", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["transcript"] = format_transcript
    return env
