"""Template context handed to injected content."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping

from .naming import camel_case, kebab_case, pascal_case

__all__ = ["ProjectContext"]


@dataclass(slots=True)
class ProjectContext:
    """Values describing the generated project.

    Attributes
    ----------
    project_name:
        The display name chosen for the project, with whitespace collapsed.
    project_name_kebab, project_name_pascal, project_name_camel:
        Casing variants of :attr:`project_name` for use in code templates.
    archetype:
        The project archetype the tree was generated from (``cli``, ``api``...).
    api_framework, web_framework:
        Optional framework choices made during generation.
    addons:
        Names of the addons selected for the project, in selection order.
    """

    project_name: str
    project_name_kebab: str
    project_name_pascal: str
    project_name_camel: str
    description: str = ""
    author: str = ""
    license: str = "MIT"
    year: int = field(default_factory=lambda: date.today().year)
    github_username: str = ""
    archetype: str = ""
    api_framework: str | None = None
    web_framework: str | None = None
    addons: tuple[str, ...] = ()

    @classmethod
    def from_name(
        cls,
        name: str,
        *,
        description: str = "",
        author: str = "",
        license: str = "MIT",
        github_username: str = "",
        archetype: str = "",
        api_framework: str | None = None,
        web_framework: str | None = None,
        addons: Iterable[str] = (),
        year: int | None = None,
    ) -> "ProjectContext":
        """Build a :class:`ProjectContext` from a human friendly project name."""

        normalized_name = " ".join(name.split())
        if not normalized_name:
            raise ValueError("project name must not be empty")

        return cls(
            project_name=normalized_name,
            project_name_kebab=kebab_case(normalized_name),
            project_name_pascal=pascal_case(normalized_name),
            project_name_camel=camel_case(normalized_name),
            description=description.strip(),
            author=author,
            license=license,
            year=year if year is not None else date.today().year,
            github_username=github_username,
            archetype=archetype,
            api_framework=api_framework,
            web_framework=web_framework,
            addons=tuple(addons),
        )

    @property
    def github_url(self) -> str:
        if not self.github_username:
            return ""
        return f"https://github.com/{self.github_username}/{self.project_name_kebab}"

    def has_addon(self, name: str) -> bool:
        return name in self.addons

    def context(self) -> Mapping[str, Any]:
        """Return a dictionary compatible with the templating helpers."""

        return {
            "project_name": self.project_name,
            "project_name_kebab": self.project_name_kebab,
            "project_name_pascal": self.project_name_pascal,
            "project_name_camel": self.project_name_camel,
            "description": self.description,
            "author": self.author,
            "license": self.license,
            "year": self.year,
            "github_username": self.github_username,
            "github_url": self.github_url,
            "archetype": self.archetype,
            "api_framework": self.api_framework or "",
            "web_framework": self.web_framework or "",
            "addons": list(self.addons),
        }
