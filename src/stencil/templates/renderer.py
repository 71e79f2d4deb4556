"""Jinja rendering of templated files and command strings.

Go-template style references such as ``{{ .ProjectName }}`` are accepted and
rewritten to plain Jinja names before parsing, except inside
``{% raw %}`` blocks. Only ``{{ }}`` and ``{% %}`` are special: comments use
Go's ``{{/* ... */}}`` form so shell text like ``${#ARGS[@]}`` passes through.
"""

from __future__ import annotations

import re
from typing import Mapping

import jinja2

from ..errors import TemplateExecutionError, TemplateSyntaxError

TEMPLATE_SUFFIX = ".tmpl"

_TAG = re.compile(r"({{-?|{%-?)(.*?)(-?}}|-?%})", re.DOTALL)
# a leading dot that is not attribute access: start of tag, after space or an opener
_DOT_REF = re.compile(r"(^|[\s(\[,|=!<>+\-*/])\.(?=[A-Za-z_])")
_RAW_BLOCK = re.compile(r"({%-?\s*raw\s*-?%}.*?{%-?\s*endraw\s*-?%})", re.DOTALL)

_env = jinja2.Environment(
    loader=jinja2.BaseLoader(),
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
    comment_start_string="{{/*",
    comment_end_string="*/}}",
)


def _strip_dot_refs(text: str) -> str:
    def fix(m: re.Match[str]) -> str:
        return m.group(1) + _DOT_REF.sub(r"\1", m.group(2)) + m.group(3)

    parts = _RAW_BLOCK.split(text)
    # odd indices are the raw blocks themselves
    return "".join(
        part if i % 2 else _TAG.sub(fix, part) for i, part in enumerate(parts)
    )


def render_string(text: str, variables: Mapping[str, object]) -> str:
    """Render ``text`` against ``variables``.

    Raises TemplateSyntaxError for malformed templates and
    TemplateExecutionError for undefined names or evaluation failures.
    """
    try:
        template = _env.from_string(_strip_dot_refs(text))
    except jinja2.TemplateSyntaxError as e:
        raise TemplateSyntaxError(f"line {e.lineno}: {e.message}") from e
    try:
        return template.render(**variables)
    except jinja2.TemplateError as e:
        raise TemplateExecutionError(str(e)) from e
    except (TypeError, ValueError, ArithmeticError) as e:
        raise TemplateExecutionError(str(e)) from e


def render_bytes(content: bytes, variables: Mapping[str, object]) -> bytes:
    """Render UTF-8 template bytes; the whole file or an exception, never partial."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TemplateSyntaxError(f"template is not valid UTF-8: {e}") from e
    return render_string(text, variables).encode("utf-8")
