"""AI-assisted recruiting agents on top of pluggable LLM providers."""

__version__ = "0.3.0"
