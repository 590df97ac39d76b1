"""Value types shared by the marker parser, injection engine and processor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import ProjectContext

JSON_MARKER = "json"
MARKER_NAME_PATTERN = r"^[a-z0-9-]+$"


class CommentStyle(str, Enum):
    """Comment dialects recognised on marker lines, in matching order."""

    JS = "js"
    PYTHON = "python"
    HTML = "html"
    CSS = "css"


class InjectionPosition(str, Enum):
    """Where injected text lands relative to a region's existing content."""

    START = "start"
    END = "end"


@dataclass(slots=True, frozen=True)
class MarkerRegion:
    """A matched ``INJECT``/``END`` pair inside one file's content.

    ``start_line`` and ``end_line`` are zero-based line numbers of the two
    marker lines. ``content_start_index`` and ``content_end_index`` are string
    offsets delimiting the editable text between them, so
    ``content[region.content_start_index:region.content_end_index]`` is the
    region's current body. An empty region has equal offsets.
    """

    name: str
    start_line: int
    end_line: int
    content_start_index: int
    content_end_index: int
    indent: str
    comment_style: CommentStyle


@dataclass(slots=True, frozen=True)
class InjectContentOptions:
    position: InjectionPosition = InjectionPosition.END
    newline: bool = True
    indent: bool = True


class InjectionDefinition(BaseModel):
    """One addon request to inject into a single generated file."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    file: str = Field(..., min_length=1, description="Target file path relative to the project root.")
    marker: str | None = Field(
        None,
        pattern=MARKER_NAME_PATTERN,
        description="Marker to inject into. Required for text injections, forbidden for JSON.",
    )
    content: str | None = Field(None, description="Literal content, rendered against the template context.")
    template: str | None = Field(None, description="Template file relative to the addon's template base path.")
    json_data: Dict[str, Any] | None = Field(None, alias="json", description="JSON object to deep merge.")
    json_path: str | None = Field(None, alias="jsonPath", description="Dot path such as '$.scripts' to merge into.")
    position: InjectionPosition = Field(InjectionPosition.END, description="Position within the marker region.")
    newline: bool = Field(True, description="Terminate the injected text with a newline.")
    indent: bool = Field(True, description="Prefix injected lines with the marker's indentation.")

    @model_validator(mode="after")
    def _check_sources(self) -> "InjectionDefinition":
        sources = [name for name in ("content", "template", "json_data") if getattr(self, name) is not None]
        if len(sources) != 1:
            raise ValueError("exactly one of content, template, or json is required")
        if self.json_data is not None and self.marker is not None:
            raise ValueError("JSON injection should not use markers, use jsonPath instead")
        if self.json_data is None and self.marker is None:
            raise ValueError("text injection requires a marker")
        return self

    @property
    def is_json(self) -> bool:
        return self.json_data is not None

    @property
    def marker_label(self) -> str:
        """Marker name used to attribute results, ``"json"`` for JSON merges."""

        return self.marker if self.marker is not None else JSON_MARKER

    def content_options(self) -> InjectContentOptions:
        return InjectContentOptions(position=self.position, newline=self.newline, indent=self.indent)


class InjectionResult(BaseModel):
    """Outcome of applying one :class:`InjectionDefinition`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    file: str = Field(..., description="Target file path as given in the definition.")
    marker: str = Field(..., description="Marker injected into, or 'json' for JSON merges.")
    addon: str = Field(..., description="Addon that supplied the definition.")
    success: bool = Field(..., description="Whether the file was rewritten.")
    error: str | None = Field(None, description="Human-readable failure reason.")
    lines_added: int = Field(0, description="Number of lines the injection added.")


@dataclass(slots=True)
class ProcessInjectionsOptions:
    """Everything needed to apply one addon's injections to a project."""

    project_dir: Path | str
    injections: Sequence[InjectionDefinition]
    addon_name: str
    context: Mapping[str, Any] | ProjectContext
    template_base_path: Path | str | None = None

    def template_context(self) -> Mapping[str, Any]:
        if isinstance(self.context, ProjectContext):
            return self.context.context()
        return self.context


def load_injections(raw: Iterable[Mapping[str, Any]]) -> list[InjectionDefinition]:
    """Validate authored injection definitions.

    Raises :class:`pydantic.ValidationError` on the first invalid entry.
    """

    return [InjectionDefinition.model_validate(entry) for entry in raw]


__all__ = [
    "CommentStyle",
    "InjectContentOptions",
    "InjectionDefinition",
    "InjectionPosition",
    "InjectionResult",
    "JSON_MARKER",
    "MARKER_NAME_PATTERN",
    "MarkerRegion",
    "ProcessInjectionsOptions",
    "load_injections",
]
