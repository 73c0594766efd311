"""LLM Records: generate, store and edit prompt-driven records."""

__version__ = "1.0.0"
