"""Base renderer protocol and types."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    JSON = "json"
    MARKDOWN = "markdown"


class RenderContext(BaseModel):
    """Options for one rendering pass."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    verbose: bool = Field(default=False, description="Include per-user detail and probe issues")
    color: bool = Field(default=True, description="Enable color output (terminal only)")
    indent: int = Field(default=2, description="JSON indentation")


@runtime_checkable
class Renderer(Protocol):
    """Protocol for output renderers.

    A renderer turns a snapshot report, or any one of its domain models,
    into text.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a string."""
        ...

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data directly to ``context.output_path``.

        Raises:
            ValueError: If context.output_path is not set
        """
        ...


class BaseRenderer:
    """Common ``render_to_file`` for renderers that return their output."""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        content = self.render(data, context)
        context.output_path.write_text(content, encoding="utf-8")

    def render(self, data: Any, context: RenderContext) -> str:
        raise NotImplementedError


def format_flag(value: bool | None) -> str:
    """Three-state flag as shown to people."""
    if value is None:
        return "Unknown"
    return "Enabled" if value else "Disabled"


def format_picture(data: bytes) -> str:
    return f"{len(data)} bytes" if data else "none"


def format_date(value: datetime | None, pattern: str = "%Y-%m-%d %H:%M") -> str:
    """Datetime for display; None and the deleted-user placeholder show as 'N/A'."""
    if value is None or value == datetime.min:
        return "N/A"
    return value.strftime(pattern)
