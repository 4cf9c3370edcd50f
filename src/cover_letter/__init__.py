"""Cover letter generator: multi-provider LLM gateway and PDF layout."""

__version__ = "0.1.0"
