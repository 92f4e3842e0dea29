"""JSON parsing utilities for LLM batch responses.

Provides robust parsing of JSON arrays from LLM output, handling
markdown fences, invalid escape sequences, and extra text after the
JSON payload.
"""

from __future__ import annotations

import json
import re


def fix_escape_sequences(text: str) -> str:
    """Fix invalid JSON escape sequences in LLM output.

    LLMs sometimes produce backslash sequences like ``\\_`` that are
    invalid in JSON strings. This doubles lone backslashes that don't
    form a valid JSON escape.

    Args:
        text: Raw text potentially containing invalid escapes.

    Returns:
        Text with invalid escape sequences fixed.
    """
    return re.sub(r'(?<!\\)\\(?!["\\/bfnrtu])', r"\\\\", text)


def try_parse_json_array(text: str) -> list[object] | None:
    """Try to parse text as a JSON array, with escape-sequence fallback.

    Args:
        text: Raw JSON text from LLM response.

    Returns:
        Parsed list if successful, None otherwise.
    """
    for candidate in (text, fix_escape_sequences(text)):
        try:
            entries = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(entries, list):
            return entries
    return None


def extract_first_json_array(text: str) -> str | None:
    """Extract the first complete ``[...]`` block from text.

    Brackets inside JSON strings are skipped so that translations
    containing ``[`` or ``]`` do not end the block early.

    Args:
        text: Raw text potentially containing a JSON array.

    Returns:
        Extracted JSON array string, or None if no bracket pair found.
    """
    start = text.find("[")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def json_candidates(text: str) -> list[str]:
    """Generate candidate JSON strings to try parsing.

    Returns the full text first, then the first extracted array block
    if the full text fails.

    Args:
        text: Raw text from LLM response.

    Returns:
        List of candidate strings to attempt parsing.
    """
    candidates = [text]
    extracted = extract_first_json_array(text)
    if extracted and extracted != text:
        candidates.append(extracted)
    return candidates


def strip_markdown_fences(text: str) -> str:
    """Strip markdown code fences from LLM response text.

    Args:
        text: Raw text potentially wrapped in code fences.

    Returns:
        Text with code fences removed.
    """
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        if first_newline != -1:
            text = text[first_newline + 1 :]
        if text.endswith("```"):
            text = text[: -len("```")]
        text = text.strip()
    return text


def parse_string_array(raw_response: str) -> list[str] | None:
    """Parse an LLM response into a list of strings.

    Args:
        raw_response: Raw text response from the LLM.

    Returns:
        List of strings, or None if no JSON array of strings was found.
    """
    text = strip_markdown_fences(raw_response)
    for candidate in json_candidates(text):
        parsed = try_parse_json_array(candidate)
        if parsed is not None and all(isinstance(item, str) for item in parsed):
            return [str(item) for item in parsed]
    return None
