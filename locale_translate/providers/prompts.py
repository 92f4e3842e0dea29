"""Prompt templates for LLM-powered locale string translation."""

from __future__ import annotations

import json

from locale_translate.providers.variables import PLACEHOLDER_PREFIX


_SINGLE_TEMPLATE = (
    "You are a professional translator for software user interfaces. "
    "Translate the following text from {source} to {target}. "
    "Return ONLY the translated text, without comments, explanations, "
    "quotes or alternatives."
)

_BATCH_TEMPLATE = (
    "You are a professional translator for software user interfaces. "
    "Translate every string of the JSON array you receive from {source} to {target}. "
    "Respond ONLY with a JSON array of translated strings, with exactly as many "
    "elements as the input and in the same order. "
    "No markdown fences or extra text."
)

_PLACEHOLDER_RULE = (
    "Tokens such as {prefix}0__ are placeholders: copy them unchanged into the "
    "translation."
)


def build_system_instruction(
    source_language: str,
    target_language_name: str,
    context: str | None = None,
    *,
    batch: bool = False,
) -> str:
    """Build the system instruction for a translation request.

    Args:
        source_language: Source language code or name.
        target_language_name: Display name of the target language.
        context: Optional domain context (e.g. "medical billing app").
        batch: Whether the request carries a JSON array of strings.

    Returns:
        System instruction text.
    """
    template = _BATCH_TEMPLATE if batch else _SINGLE_TEMPLATE
    parts = [
        template.format(source=source_language, target=target_language_name),
        _PLACEHOLDER_RULE.format(prefix=PLACEHOLDER_PREFIX),
    ]
    if context and context.strip():
        parts.append(
            f"Context: {context.strip()}. Use terminology appropriate for this domain."
        )
    return "\n\n".join(parts)


def build_batch_prompt(texts: list[str]) -> str:
    """Serialize a batch of texts as the user prompt.

    Args:
        texts: Strings to translate, in order.

    Returns:
        JSON array text.
    """
    return json.dumps(texts, ensure_ascii=False, indent=2)
