"""Template helper library and rendering context for platform projects.

Helpers are pure text transformations registered as Jinja2 globals.
They read the shared template context (for the path helpers) and never
hold state of their own.  Helper names are kebab-case in :data:`HELPERS`
and exposed to templates with underscores, so ``quote-and-join`` is
called as ``{{ quote_and_join(android.targets) }}``.

Array helpers raise :class:`MissingArrayError` and path helpers raise
:class:`MissingContextFieldError` / :class:`PathNotUnderRootError`;
these propagate out of ``render`` unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, pass_context
from markupsafe import escape

from tauri_mobile.core.models import Config
from tauri_mobile.exceptions import MissingArrayError, MissingContextFieldError
from tauri_mobile.utils import paths

TAURI_BINARY_KEY = "tauri-binary"

_DEBUG_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


# ---------------------------------------------------------------------------
# Parameter coercion
# ---------------------------------------------------------------------------

def _get_str(value: Any) -> str:
    """Non-string parameters render as the empty string."""
    return value if isinstance(value, str) else ""


def _get_str_array(
    value: Any,
    formatter: Callable[[str], str],
) -> list[str] | None:
    """Format every element of *value*, or ``None`` unless it is an array of strings."""
    if not isinstance(value, (list, tuple)):
        return None
    formatted: list[str] = []
    for item in value:
        if not isinstance(item, str):
            return None
        formatted.append(formatter(item))
    return formatted


# ---------------------------------------------------------------------------
# Pure string transforms
# ---------------------------------------------------------------------------

def debug_quote(value: str) -> str:
    """Wrap *value* in double quotes, escaping it like a Rust debug string."""
    parts: list[str] = []
    for char in value:
        if char in _DEBUG_ESCAPES:
            parts.append(_DEBUG_ESCAPES[char])
        elif not char.isprintable():
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'


def to_snake_case(value: str) -> str:
    """Convert *value* to ``snake_case``.

    Words are split on non-alphanumeric characters, on lower-to-upper
    case transitions and before the last capital of an acronym that is
    followed by a lowercase letter (``HTTPServer`` -> ``http_server``).
    """
    words: list[str] = []
    current = ""
    last_case: str | None = None

    for index, char in enumerate(value):
        if not char.isalnum():
            if current:
                words.append(current)
            current = ""
            last_case = None
            continue

        following = value[index + 1] if index + 1 < len(value) else ""
        if current and char.isupper():
            if last_case == "lower" or (last_case == "upper" and following.islower()):
                words.append(current)
                current = ""

        current += char
        if char.islower():
            last_case = "lower"
        elif char.isupper():
            last_case = "upper"

    if current:
        words.append(current)
    return "_".join(word.lower() for word in words)


def reverse_domain_name(value: str) -> str:
    """``com.example.app`` -> ``app.example.com``."""
    return ".".join(reversed(value.split(".")))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def html_escape(value: Any) -> str:
    # markupsafe covers & < > " '; backtick and equals match Handlebars-style escaping.
    escaped = str(escape(_get_str(value)))
    return escaped.replace("`", "&#x60;").replace("=", "&#x3D;")


def join(value: Any) -> str:
    items = _get_str_array(value, lambda item: item)
    if items is None:
        raise MissingArrayError("join")
    return ", ".join(items)


def quote_and_join(value: Any) -> str:
    items = _get_str_array(value, debug_quote)
    if items is None:
        raise MissingArrayError("quote-and-join")
    return ", ".join(items)


def quote_and_join_colon_prefix(value: Any) -> str:
    items = _get_str_array(value, lambda item: debug_quote(f":{item}"))
    if items is None:
        raise MissingArrayError("quote-and-join-colon-prefix")
    return ", ".join(items)


def snake_case(value: Any) -> str:
    return to_snake_case(_get_str(value))


def reverse_domain(value: Any) -> str:
    return reverse_domain_name(_get_str(value))


def reverse_domain_snake_case(value: Any) -> str:
    return to_snake_case(reverse_domain_name(_get_str(value)))


def app_root(context: Mapping[str, Any]) -> str:
    """Return ``app.root-dir`` from the template context.

    Raises
    ------
    MissingContextFieldError
        When ``app`` or ``app.root-dir`` is absent, or the root is not text.
    """
    app = context.get("app")
    if not isinstance(app, Mapping):
        raise MissingContextFieldError("app")
    root = app.get("root-dir")
    if root is None:
        raise MissingContextFieldError("app.root-dir")
    if not isinstance(root, str):
        raise MissingContextFieldError("app.root-dir", "is not valid text")
    return root


@pass_context
def prefix_path(context: Mapping[str, Any], value: Any) -> str:
    return paths.prefix_path(app_root(context), _get_str(value))


@pass_context
def unprefix_path(context: Mapping[str, Any], value: Any) -> str:
    return paths.unprefix_path(app_root(context), _get_str(value))


# prefix-path and unprefix-path are inverses; registering them under each
# other's name silently bakes absolute paths into generated projects.
HELPERS: dict[str, Callable[..., str]] = {
    "html-escape": html_escape,
    "join": join,
    "quote-and-join": quote_and_join,
    "quote-and-join-colon-prefix": quote_and_join_colon_prefix,
    "snake-case": snake_case,
    "reverse-domain": reverse_domain,
    "reverse-domain-snake-case": reverse_domain_snake_case,
    "prefix-path": prefix_path,
    "unprefix-path": unprefix_path,
}


def template_name(helper_name: str) -> str:
    """Identifier a helper or context key is reachable under inside templates."""
    return helper_name.replace("-", "_")


# ---------------------------------------------------------------------------
# Environment + context
# ---------------------------------------------------------------------------

def create_environment() -> Environment:
    """Create a Jinja2 environment with every helper registered.

    Output is never escaped: generated files are build scripts and
    manifests, not HTML.
    """
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    for name, helper in HELPERS.items():
        env.globals[template_name(name)] = helper
    return env


class TemplateRenderer:
    """A helper-equipped Jinja2 environment paired with its template context.

    The pair is built once per init run and handed to exactly one
    platform generator.
    """

    def __init__(self, environment: Environment, context: dict[str, Any]) -> None:
        self.environment: Environment = environment
        self.context: dict[str, Any] = context

    def insert(self, key: str, value: Any) -> None:
        self.context[key] = value

    def render_data(self, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return the variables a template sees.

        Dashed top-level keys are also exposed under their underscore
        alias (``tauri-binary`` as ``tauri_binary``); the context itself
        is left untouched.
        """
        data = dict(self.context)
        if extra:
            data.update(extra)
        for key in list(data):
            alias = template_name(key)
            if alias != key:
                data.setdefault(alias, data[key])
        return data

    def render_string(
        self,
        source: str,
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        template = self.environment.from_string(source)
        return template.render(self.render_data(extra))

    def render_file(
        self,
        path: Path,
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        """Render the template stored at *path*."""
        return self.render_string(path.read_text(encoding="utf-8"), extra)


def build_template_context(config: Config, *, include_apple: bool) -> TemplateRenderer:
    """Build the renderer for *config*.

    ``apple`` is only part of the context on hosts able to generate
    Xcode projects.
    """
    context: dict[str, Any] = {
        "app": config.app.to_template_data(),
        "android": config.android.to_template_data(),
    }
    if include_apple:
        context["apple"] = config.apple.to_template_data()
    return TemplateRenderer(create_environment(), context)
