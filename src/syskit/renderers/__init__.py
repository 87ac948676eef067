"""Output format renderers."""

from syskit.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    Renderer,
    format_date,
    format_flag,
    format_picture,
)
from syskit.renderers.json import JSONRenderer
from syskit.renderers.markdown import MarkdownRenderer
from syskit.renderers.terminal import TerminalRenderer

__all__ = [
    "BaseRenderer",
    "OutputFormat",
    "RenderContext",
    "Renderer",
    "JSONRenderer",
    "MarkdownRenderer",
    "TerminalRenderer",
    "format_date",
    "format_flag",
    "format_picture",
    "get_renderer",
]


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Get a renderer for the specified format.

    Raises:
        ValueError: If format is not supported
    """
    if isinstance(format, str):
        format = OutputFormat(format)

    renderers = {
        OutputFormat.JSON: JSONRenderer,
        OutputFormat.MARKDOWN: MarkdownRenderer,
        OutputFormat.TERMINAL: TerminalRenderer,
    }

    renderer_class = renderers.get(format)
    if renderer_class is None:
        raise ValueError(f"Unsupported format: {format}")

    return renderer_class()
