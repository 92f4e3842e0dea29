"""Translate hierarchical locale files through pluggable LLM backends."""

__version__ = "0.1.0"
