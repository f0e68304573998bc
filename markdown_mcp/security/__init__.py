"""Security module -- request validation."""

from markdown_mcp.security.guardrails import validate_options, validate_url

__all__ = ["validate_options", "validate_url"]
