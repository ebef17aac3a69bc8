"""Comment command parsing, mention detection, changelog splitting and configuration for an issue triage bot."""

__version__ = "0.1.0"