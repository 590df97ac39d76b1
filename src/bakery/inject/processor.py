"""Apply a batch of addon injection definitions to a generated project."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from ..errors import InjectionError
from ..io import FileSystem, LocalFileSystem
from ..template import TemplateRenderer, TemplateRenderingError
from .engine import inject_content, inject_json, validate_no_new_markers
from .types import InjectionDefinition, InjectionResult, ProcessInjectionsOptions

__all__ = ["InjectionProcessor", "process_injections"]


LOGGER = logging.getLogger(__name__)


def _count_injected_lines(text: str) -> int:
    return len(text.split("\n")) - (1 if text.endswith("\n") else 0)


def _resolve_within(root: Path, relative: str) -> Path | None:
    """Return ``root / relative`` unless it resolves outside ``root``."""

    candidate = (root / relative).resolve()
    if not candidate.is_relative_to(root.resolve()):
        return None
    return candidate


@dataclass(slots=True)
class InjectionProcessor:
    """Apply injection definitions one at a time, in order.

    Each definition either rewrites its target file completely or leaves it
    untouched, and yields exactly one :class:`InjectionResult`. A failure is
    recorded in the result and processing moves on to the next definition;
    earlier successful writes are not rolled back.
    """

    renderer: TemplateRenderer
    filesystem: FileSystem

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.filesystem = filesystem or LocalFileSystem()

    def process(self, options: ProcessInjectionsOptions) -> list[InjectionResult]:
        project_dir = Path(options.project_dir)
        base_path = Path(options.template_base_path) if options.template_base_path else None
        context = options.template_context()

        return [
            self._process_one(project_dir, definition, options.addon_name, context, base_path)
            for definition in options.injections
        ]

    def _process_one(
        self,
        project_dir: Path,
        definition: InjectionDefinition,
        addon: str,
        context: Mapping[str, Any],
        base_path: Path | None,
    ) -> InjectionResult:
        marker = definition.marker_label
        LOGGER.debug("injecting addon=%s file=%s marker=%s", addon, definition.file, marker)

        def failed(message: str) -> InjectionResult:
            LOGGER.warning(
                "injection failed addon=%s file=%s marker=%s error=%s",
                addon,
                definition.file,
                marker,
                message,
            )
            return InjectionResult(
                file=definition.file,
                marker=marker,
                addon=addon,
                success=False,
                error=message,
            )

        target = _resolve_within(project_dir, definition.file)
        if target is None:
            return failed(f"Target file is outside the project directory: {definition.file}")
        if not self.filesystem.exists(target):
            return failed(f"Target file not found: {definition.file}")

        try:
            original = self.filesystem.read_text(target)
        except (OSError, UnicodeDecodeError) as exc:
            return failed(f"Failed to read file: {exc}")

        try:
            if definition.json_data is not None:
                updated = inject_json(original, definition.json_path, definition.json_data, definition.file)
                lines_added = updated.count("\n") - original.count("\n")
            else:
                text = self._resolve_text(definition, context, base_path)
                updated = inject_content(
                    original,
                    marker,
                    text,
                    definition.content_options(),
                    definition.file,
                )
                validate_no_new_markers(original, updated, definition.file, marker)
                lines_added = _count_injected_lines(text)
        except InjectionError as exc:
            return failed(str(exc))
        except TemplateRenderingError as exc:
            return failed(f"Failed to render injection content: {exc}")

        try:
            self.filesystem.write_text(target, updated)
        except (OSError, ValueError) as exc:
            return failed(f"Failed to write file: {exc}")

        LOGGER.info(
            "injected addon=%s file=%s marker=%s lines_added=%s",
            addon,
            definition.file,
            marker,
            lines_added,
        )
        return InjectionResult(
            file=definition.file,
            marker=marker,
            addon=addon,
            success=True,
            lines_added=lines_added,
        )

    def _resolve_text(
        self,
        definition: InjectionDefinition,
        context: Mapping[str, Any],
        base_path: Path | None,
    ) -> str:
        marker = definition.marker_label
        if definition.content is not None:
            return self.renderer.render_string(definition.content, context)

        if definition.template is None:
            raise InjectionError(definition.file, marker, "No content, template, or json specified")
        if base_path is None:
            raise InjectionError(
                definition.file,
                marker,
                "Template base path required for template injection",
            )

        template_path = _resolve_within(base_path, definition.template)
        if template_path is None:
            raise InjectionError(
                definition.file,
                marker,
                f"Template file is outside the template base path: {definition.template}",
            )
        if not self.filesystem.exists(template_path):
            raise InjectionError(definition.file, marker, f"Template file not found: {definition.template}")
        try:
            template = self.filesystem.read_text(template_path)
        except (OSError, UnicodeDecodeError) as exc:
            raise InjectionError(definition.file, marker, f"Failed to read template: {exc}") from exc
        return self.renderer.render_string(template, context)


def process_injections(
    options: ProcessInjectionsOptions,
    *,
    renderer: TemplateRenderer | None = None,
    filesystem: FileSystem | None = None,
) -> list[InjectionResult]:
    """Apply ``options.injections`` and return one result per definition."""

    return InjectionProcessor(renderer, filesystem).process(options)
