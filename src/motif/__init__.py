"""Motif: an async HTML template engine that mixes syntaxes in one file.

Mustache-style ``{{ }}`` tags, ERB-style ``<% %>`` tags and capitalized
``<Component>`` tags are all recognised in the same template, with optional
YAML-style frontmatter naming a layout.

Quickstart:
    >>> from motif import Environment
    >>> env = Environment()
    >>> env.from_string("Hello, {{ name }}!").render(name="World")
    'Hello, World!'

File-based templates:
    >>> from motif import Environment, FileSystemLoader
    >>> env = Environment(loader=FileSystemLoader("views"), cache=True)
    >>> env.get_template("home").render(user=user)

Architecture:
Template Source → Parser → node tree (ParseResult) → Renderer → HTML chunks

Pipeline stages:
1. **Parser**: Scans the source in one pass into immutable nodes plus
   metadata (frontmatter, layout, referenced partials and components)
2. **Renderer**: Async generator walking the nodes against a layered
   context, resolving partials, components and layouts by name
3. **Environment**: Loads and caches templates, owns helper and filter
   registries, and drives renders to strings, iterators or sinks

Forgiving by default:
Malformed syntax renders as literal text and missing names render nothing.
``Environment(debug=True)`` turns both into ``<!-- motif ... -->`` comments.

"""

from motif._types import ParseResult, TemplateKind, TemplateMetadata
from motif.environment import (
    DictLoader,
    Environment,
    ErrorCode,
    FileSystemLoader,
    SourceSnippet,
    TemplateError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    Translator,
    build_source_snippet,
)
from motif.parser import parse
from motif.render_context import (
    RenderContext,
    async_render_context,
    get_render_context,
    render_context,
)
from motif.template import UNDEFINED, Fragment, Template
from motif.utils.html import Markup, html_escape

__version__ = "0.1.0"

__all__ = [
    "UNDEFINED",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "Fragment",
    "Markup",
    "ParseResult",
    "RenderContext",
    "SourceSnippet",
    "Template",
    "TemplateError",
    "TemplateKind",
    "TemplateLoadError",
    "TemplateMetadata",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "Translator",
    "__version__",
    "async_render_context",
    "build_source_snippet",
    "get_render_context",
    "html_escape",
    "parse",
    "render_context",
]
