"""Utils module -- config and logging."""

from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger, log_extraction

__all__ = ["settings", "get_logger", "log_extraction"]
