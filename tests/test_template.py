from __future__ import annotations

import pytest

from bakery.config import ProjectContext
from bakery.template import TemplateRenderer, TemplateRenderingError


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_render_string_with_case_filters(renderer: TemplateRenderer):
    template = "{{ name|kebab }} {{ name|pascal }} {{ name|camel }} {{ name|upper }}"
    assert renderer.render_string(template, {"name": "sample app"}) == (
        "sample-app SampleApp sampleApp SAMPLE APP"
    )


def test_render_string_resolves_dotted_paths(renderer: TemplateRenderer):
    context = {"project": ProjectContext.from_name("Demo", github_username="octo")}
    assert renderer.render_string("{{ project.github_url }}", context) == "https://github.com/octo/demo"


def test_render_string_joins_sequences(renderer: TemplateRenderer):
    assert renderer.render_string("addons: {{ addons }}", {"addons": ["auth", "db"]}) == "addons: auth, db"


def test_render_string_missing_policy_keep(renderer: TemplateRenderer):
    template = "Hello {{ missing }}"
    assert renderer.render_string(template, {}) == template


def test_render_string_missing_policy_empty(renderer: TemplateRenderer):
    assert renderer.render_string("Hello {{ missing }}", {}, missing="empty") == "Hello "


def test_render_string_missing_policy_error(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ missing }}", {}, missing="error")


def test_render_string_rejects_unknown_policy(renderer: TemplateRenderer):
    with pytest.raises(ValueError):
        renderer.render_string("x", {}, missing="explode")


def test_single_braces_are_left_alone(renderer: TemplateRenderer):
    template = "const routes = [{ path: '/' }]"
    assert renderer.render_string(template, {}) == template


def test_unknown_filter_raises(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("{{ name|unknown }}", {"name": "demo"})
