from __future__ import annotations

import pytest

from bakery.config import ProjectContext


def test_from_name_generates_expected_identifiers():
    context = ProjectContext.from_name(
        "My  Cool App",
        description="  Utilities for demos ",
        github_username="octo",
        addons=["auth", "db"],
        year=2025,
    )
    assert context.project_name == "My Cool App"
    assert context.project_name_kebab == "my-cool-app"
    assert context.project_name_pascal == "MyCoolApp"
    assert context.project_name_camel == "myCoolApp"
    assert context.description == "Utilities for demos"
    assert context.github_url == "https://github.com/octo/my-cool-app"
    assert context.year == 2025
    assert context.has_addon("auth")
    assert not context.has_addon("convex")


def test_from_name_rejects_empty_input():
    with pytest.raises(ValueError):
        ProjectContext.from_name("   ")


def test_context_mapping():
    values = ProjectContext.from_name("Demo", archetype="api", api_framework="hono").context()
    assert values["project_name"] == "Demo"
    assert values["archetype"] == "api"
    assert values["api_framework"] == "hono"
    assert values["web_framework"] == ""
    assert values["github_url"] == ""
    assert values["license"] == "MIT"
    assert values["addons"] == []
