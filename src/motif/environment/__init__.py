"""Environment, registries, loaders, cache and errors for motif."""

from motif.environment import terminal
from motif.environment.exceptions import (
    ErrorCode,
    RenderDiagnostic,
    SourceSnippet,
    TemplateError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    build_source_snippet,
)
from motif.environment.cache import CacheInfo, ChangeDebouncer, TemplateCache
from motif.environment.core import Environment
from motif.environment.filters import BUILTIN_FILTERS
from motif.environment.helpers import BUILTIN_HELPERS
from motif.environment.i18n import Translator, load_translations
from motif.environment.loaders import DictLoader, FileSystemLoader, Loader
from motif.environment.registry import FunctionRegistry

__all__ = [
    "BUILTIN_FILTERS",
    "BUILTIN_HELPERS",
    "CacheInfo",
    "ChangeDebouncer",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionRegistry",
    "Loader",
    "RenderDiagnostic",
    "SourceSnippet",
    "TemplateCache",
    "TemplateError",
    "TemplateLoadError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "Translator",
    "build_source_snippet",
    "load_translations",
    "terminal",
]
