"""Stdio tool server exposing ``get_page_markdown``."""

from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from markdown_mcp.extract.options import ExtractOptions
from markdown_mcp.pipeline import ExtractionError, get_page_markdown, shutdown_renderer
from markdown_mcp.utils.config import settings
from markdown_mcp.utils.logger import get_logger

log = get_logger(__name__)

TOOL_DESCRIPTION = (
    "Extract clean markdown content from a URL. Returns only the main content "
    "without navigation, headers, footers, or sidebars."
)


@asynccontextmanager
async def lifespan(server: FastMCP):
    try:
        yield
    finally:
        await shutdown_renderer()


mcp = FastMCP(name="markdown-mcp", lifespan=lifespan)


# Parameter names are the tool's public schema, hence camelCase.
async def get_page_markdown_tool(
    url: Annotated[str, Field(description="The URL to extract markdown from")],
    includeImages: Annotated[
        bool, Field(description="Whether to include image references in markdown (default: true)")
    ] = True,
    includeLinks: Annotated[
        bool, Field(description="Whether to include hyperlinks in markdown (default: true)")
    ] = True,
    waitForSelector: Annotated[
        Optional[str], Field(description="Optional CSS selector to wait for before extracting content")
    ] = None,
    timeout: Annotated[
        int, Field(description="Navigation timeout in milliseconds (default: 30000)")
    ] = settings.navigation_timeout_ms,
) -> str:
    options = ExtractOptions(
        include_images=includeImages,
        include_links=includeLinks,
        wait_for_selector=waitForSelector,
        timeout=timeout,
    )
    try:
        return await get_page_markdown(url, options)
    except ExtractionError as exc:
        raise ToolError(str(exc)) from exc


mcp.tool(name="get_page_markdown", description=TOOL_DESCRIPTION)(get_page_markdown_tool)


def main() -> None:
    log.info("Starting markdown-mcp server on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
