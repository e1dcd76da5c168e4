"""Template rendering for nginx proxy configs."""

from proxy_conf.render.errors import (
    MissingEnvironmentError,
    RenderError,
    UnknownFunctionError,
)
from proxy_conf.render.renderer import (
    NAME_PATTERN,
    PLACEHOLDER_PATTERN,
    STRIPPED_DIRECTIVE,
    FunctionTable,
    Placeholder,
    find_placeholders,
    render_file,
    render_template,
    strip_directives,
)

__all__ = [
    "FunctionTable",
    "MissingEnvironmentError",
    "NAME_PATTERN",
    "PLACEHOLDER_PATTERN",
    "Placeholder",
    "RenderError",
    "STRIPPED_DIRECTIVE",
    "UnknownFunctionError",
    "find_placeholders",
    "render_file",
    "render_template",
    "strip_directives",
]
