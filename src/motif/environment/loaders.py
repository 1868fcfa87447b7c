"""Template loaders for the motif environment.

Loaders provide template source to the Environment. Every name is looked up
for a ``TemplateKind``, and each kind has its own base directory or mapping,
so ``{{> header}}``, ``<Header/>`` and a page named ``header`` can be three
different files.

A loader implements:
    - ``cache_key(name, kind) -> str``: the resolved identity used as the
      cache key. Pure: no I/O.
    - ``get_source(name, kind) -> (source, filename)``: raises
      ``TemplateNotFoundError`` when there is no such template. Any other
      exception it raises reaches callers as ``TemplateLoadError``.

A loader may set ``blocking = False`` when ``get_source()`` does no I/O; the
Environment then calls it inline during async renders instead of in a worker
thread.

Custom Loaders:
    ```python
    class DatabaseLoader:
        def cache_key(self, name, kind):
            return f"{kind.value}/{name}"

        def get_source(self, name, kind):
            row = db.query("SELECT body FROM templates WHERE kind = ? AND name = ?",
                           kind.value, name)
            if not row:
                raise TemplateNotFoundError(f"{kind.value} '{name}' not found")
            return row.body, f"db://{kind.value}/{name}"
    ```

Thread-Safety:
Built-in loaders keep no mutable state after construction and are safe for
concurrent ``get_source()`` calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from motif._types import TemplateKind
from motif.environment.exceptions import TemplateNotFoundError


class Loader(Protocol):
    def cache_key(self, name: str, kind: TemplateKind) -> str: ...

    def get_source(self, name: str, kind: TemplateKind) -> tuple[str, str | None]: ...


class FileSystemLoader:
    """Load templates from per-kind directories.

    Attributes:
        views: Directory for pages (``TemplateKind.TEMPLATE``)
        directories: Base directory for every kind

    Layout (defaults):
        ```
        views/
          home.html
          partials/header.html
          components/Card.html
          layouts/base.html
        ```

    Example:
            >>> loader = FileSystemLoader("views", default_extension=".html")
            >>> loader.get_source("Card", TemplateKind.COMPONENT)[1]
            'views/components/Card.html'

    Raises:
        TemplateNotFoundError: If the resolved file does not exist
    """

    __slots__ = ("default_extension", "directories", "encoding", "views")

    def __init__(
        self,
        views: str | Path = ".",
        *,
        partials: str | Path | None = None,
        components: str | Path | None = None,
        layouts: str | Path | None = None,
        default_extension: str = ".html",
        encoding: str = "utf-8",
    ):
        self.views = Path(views)
        self.directories: dict[TemplateKind, Path] = {
            TemplateKind.TEMPLATE: self.views,
            TemplateKind.PARTIAL: Path(partials) if partials else self.views / "partials",
            TemplateKind.COMPONENT: Path(components) if components else self.views / "components",
            TemplateKind.LAYOUT: Path(layouts) if layouts else self.views / "layouts",
        }
        if default_extension and not default_extension.startswith("."):
            default_extension = f".{default_extension}"
        self.default_extension = default_extension
        self.encoding = encoding

    def resolve(self, name: str, kind: TemplateKind | str = TemplateKind.TEMPLATE) -> Path:
        """Path ``name`` resolves to, with the default extension applied."""
        path = self.directories[TemplateKind.coerce(kind)] / name
        if not path.suffix and self.default_extension:
            path = path.with_name(path.name + self.default_extension)
        return path

    def cache_key(self, name: str, kind: TemplateKind) -> str:
        return str(self.resolve(name, kind))

    def get_source(self, name: str, kind: TemplateKind = TemplateKind.TEMPLATE) -> tuple[str, str]:
        """Read the template file.

        Raises:
            TemplateNotFoundError: No file at the resolved path
            OSError, UnicodeDecodeError: The file exists but cannot be read
        """
        kind = TemplateKind.coerce(kind)
        path = self.resolve(name, kind)
        if not path.is_file():
            raise TemplateNotFoundError(
                f"{kind.value.capitalize()} '{name}' not found in: {self.directories[kind]}"
            )
        return path.read_text(self.encoding), str(path)

    def list_templates(self, kind: TemplateKind | str = TemplateKind.TEMPLATE) -> list[str]:
        """Names (relative paths) of the templates of ``kind``."""
        base = self.directories[TemplateKind.coerce(kind)]
        if not base.is_dir():
            return []
        pattern = f"*{self.default_extension}" if self.default_extension else "*"
        return sorted(str(path.relative_to(base)) for path in base.rglob(pattern) if path.is_file())


class DictLoader:
    """Load templates from in-memory mappings, one per kind.

    Useful for tests and embedded templates.

    Example:
            >>> loader = DictLoader(
            ...     {"home": "---\\nlayout: base\\n---\\n<p>Hi</p>"},
            ...     layouts={"base": "<main>{{{ content }}}</main>"},
            ... )
            >>> env = Environment(loader=loader)
            >>> env.get_template("home").render()
            '<main><p>Hi</p></main>'

    Raises:
        TemplateNotFoundError: If the name is not in the mapping for its kind
    """

    __slots__ = ("_mappings",)

    blocking = False

    def __init__(
        self,
        templates: Mapping[str, str] | None = None,
        *,
        partials: Mapping[str, str] | None = None,
        components: Mapping[str, str] | None = None,
        layouts: Mapping[str, str] | None = None,
    ):
        self._mappings: dict[TemplateKind, Mapping[str, str]] = {
            TemplateKind.TEMPLATE: templates or {},
            TemplateKind.PARTIAL: partials or {},
            TemplateKind.COMPONENT: components or {},
            TemplateKind.LAYOUT: layouts or {},
        }

    def cache_key(self, name: str, kind: TemplateKind) -> str:
        return f"{TemplateKind.coerce(kind).value}/{name}"

    def get_source(self, name: str, kind: TemplateKind = TemplateKind.TEMPLATE) -> tuple[str, None]:
        kind = TemplateKind.coerce(kind)
        mapping = self._mappings[kind]
        if name not in mapping:
            available = sorted(mapping)
            msg = f"{kind.value.capitalize()} '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return mapping[name], None

    def list_templates(self, kind: TemplateKind | str = TemplateKind.TEMPLATE) -> list[str]:
        return sorted(self._mappings[TemplateKind.coerce(kind)])
