from __future__ import annotations

import pytest

from stencil.errors import TemplateExecutionError, TemplateSyntaxError
from stencil.templates import render_bytes, render_string


def test_go_style_dot_reference() -> None:
    assert render_string("package {{.ProjectName}}", {"ProjectName": "demo"}) == "package demo"
    assert render_string("{{ .ProjectName }}", {"ProjectName": "demo"}) == "demo"


def test_plain_jinja_reference_and_control_flow() -> None:
    text = "{% if WithTests %}tests{% else %}none{% endif %} for {{ Name }}"
    assert render_string(text, {"WithTests": True, "Name": "x"}) == "tests for x"


def test_dotted_attribute_access_is_left_alone() -> None:
    assert render_string("{{ name.upper() }}", {"name": "abc"}) == "ABC"
    assert render_string("{{ 1.5 }}", {}) == "1.5"


def test_trailing_newline_kept() -> None:
    assert render_bytes(b"{{ .A }}\n", {"A": "x"}) == b"x\n"


def test_text_outside_tags_untouched() -> None:
    assert render_string("see ./docs and .env", {}) == "see ./docs and .env"


def test_missing_variable_raises_execution_error() -> None:
    with pytest.raises(TemplateExecutionError):
        render_string("{{ .Missing }}", {"ProjectName": "demo"})


def test_malformed_template_raises_syntax_error() -> None:
    with pytest.raises(TemplateSyntaxError):
        render_string("{% if %}", {})
    with pytest.raises(TemplateSyntaxError):
        render_string("{{ .ProjectName ", {"ProjectName": "demo"})


def test_non_utf8_content_is_a_syntax_error() -> None:
    with pytest.raises(TemplateSyntaxError):
        render_bytes(b"\xff\xfe{{ x }}", {"x": 1})


def test_typed_values_render() -> None:
    assert render_string("{{ .Port }}/{{ .Debug }}", {"Port": 8080, "Debug": False}) == "8080/False"


def test_shell_length_expansions_pass_through() -> None:
    text = b'echo "${#ARGS[@]} ${#NAME} {{ .ProjectName }}"\n'
    assert render_bytes(text, {"ProjectName": "demo"}) == b'echo "${#ARGS[@]} ${#NAME} demo"\n'


def test_go_style_comments_are_dropped() -> None:
    assert render_string("a{{/* note */}}b", {}) == "ab"


def test_raw_blocks_are_emitted_verbatim() -> None:
    text = b"image: {% raw %}{{ .Values.image }}{% endraw %} # {{ .ProjectName }}\n"
    assert render_bytes(text, {"ProjectName": "demo"}) == b"image: {{ .Values.image }} # demo\n"


def test_multiline_raw_block_keeps_go_syntax() -> None:
    text = "{% raw -%}\n{{ if .Values.enabled }}on{{ end }}\n{%- endraw %}"
    assert render_string(text, {}) == "{{ if .Values.enabled }}on{{ end }}"
