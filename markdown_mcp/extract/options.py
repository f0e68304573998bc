"""Extraction options and the per-call conversion context."""

from dataclasses import dataclass, replace
from typing import Optional

from markdown_mcp.utils.config import settings


@dataclass(frozen=True)
class ExtractOptions:
    """Options accepted by ``get_page_markdown``.

    ``include_images`` and ``include_links`` drive the converter;
    ``wait_for_selector`` and ``timeout`` (milliseconds) belong to the renderer.
    """

    include_images: bool = True
    include_links: bool = True
    wait_for_selector: Optional[str] = None
    timeout: int = settings.navigation_timeout_ms


@dataclass(frozen=True)
class ConversionContext:
    """Nesting depth and list membership threaded through the recursive walk."""

    depth: int = 0
    in_list: bool = False

    def descend(self, in_list: Optional[bool] = None) -> "ConversionContext":
        """Context for a child one level deeper, optionally overriding ``in_list``."""
        return replace(
            self,
            depth=self.depth + 1,
            in_list=self.in_list if in_list is None else in_list,
        )
