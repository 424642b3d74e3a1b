"""Reading structured payloads out of generated text.

Language models routinely wrap JSON in markdown fences or surround it with
prose. ``extract_json_payload`` is the single normalisation step every
stage applies before looking at the structure:

1. Trim surrounding whitespace.
2. If the text holds a fenced block (optionally tagged ``json``), keep only
   the block body.
3. Decode as JSON; if that fails, decode the outermost ``{...}`` span.

The decoded value is then checked against the reply schemas in
``trip_planner.replies``.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from .domain.errors import PayloadError

_FENCED_BLOCK = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)

SNIPPET_LENGTH = 80


def strip_code_fences(text: str) -> str:
    """Return the body of the first fenced block, or the trimmed text."""
    stripped = text.strip()
    match = _FENCED_BLOCK.search(stripped)
    if match:
        return match.group(1).strip()
    # Unterminated fence: drop the opening marker only.
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped[:4].lower() == "json":
            stripped = stripped[4:]
    return stripped.strip()


def extract_json_payload(text: Optional[str]) -> Any:
    """Decode the JSON value embedded in generated text.

    Args:
        text: Raw generator output.

    Returns:
        The decoded JSON value.

    Raises:
        PayloadError: If no JSON value can be recovered.
    """
    if not isinstance(text, str) or not text.strip():
        raise PayloadError("Generated text is empty")

    body = strip_code_fences(text)
    try:
        return json.loads(body)
    except json.JSONDecodeError as first_error:
        start = body.find("{")
        end = body.rfind("}")
        if start != -1 and end > start:
            try:
                return json.loads(body[start : end + 1])
            except json.JSONDecodeError:
                pass
        raise PayloadError(
            "Generated text is not valid JSON",
            cause=first_error,
            snippet=body[:SNIPPET_LENGTH],
        )
