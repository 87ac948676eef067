"""JSON renderer for syskit output."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from syskit.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output.

    Pydantic serialization decides the shape: datetimes become ISO 8601
    strings, enums their values and picture bytes base64. Indeterminate
    security flags stay ``null``.

    Example:
        renderer = JSONRenderer()
        text = renderer.render(snapshot.report(), RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        elif isinstance(data, (list, tuple)):
            data = [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in data]

        return json.dumps(
            data,
            indent=context.indent if context.indent else None,
            ensure_ascii=False,
        )
