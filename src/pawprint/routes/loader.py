"""Route loader — import a ``routes/`` directory as route definitions.

Each module is one route.  Its URL comes from its place in the tree::

    routes/index.py          -> /
    routes/about.py          -> /about
    routes/blog/index.py     -> /blog
    routes/blog/post.py      -> /blog/post

Functions named after HTTP methods become handlers (``get``, ``post``,
``put``, ``delete``, ``patch``); a function called ``handler`` answers GET
when the module has no ``get``.

Optional module attributes:

    path: str      URL template, e.g. ``"/blog/{slug}"``
    name: str      route name (default ``route:<path>``)
    ignore: bool   never build this route from the route table
    sitemap: bool  force the route in or out of the sitemap
"""

import importlib.util
import inspect
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from pawprint._errors import ConfigError
from pawprint.routes.decl import RouteDecl

_METHODS: tuple[str, ...] = ("get", "post", "put", "delete", "patch")

# Module attribute -> required type
_METADATA: dict[str, type] = {
    "path": str,
    "name": str,
    "ignore": bool,
    "sitemap": bool,
}


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A route module after import.

    Attributes:
        path: URL template, always starting with ``/``.
        handlers: ``(METHOD, handler)`` pairs, GET first when present.
        name: Route name.
        source: The module's file.
        ignore: Skip the route when scanning entrypoints.
        sitemap: Sitemap override, *None* to follow ``not ignore``.

    """

    path: str
    handlers: tuple[tuple[str, object], ...]
    name: str
    source: Path
    ignore: bool = False
    sitemap: bool | None = None

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(method for method, _ in self.handlers)

    def to_decl(self) -> RouteDecl:
        return RouteDecl(
            name=self.name,
            url_template=self.path,
            methods=frozenset(self.methods),
            ignored=self.ignore,
            sitemap=self.sitemap,
        )


def discover_routes(routes_dir: Path) -> tuple[RouteDefinition, ...]:
    """Import every route module under *routes_dir*, in sorted file order.

    Files starting with ``_`` are helpers, not routes.  Modules without any
    handler are skipped.  A missing directory yields no routes.

    Raises:
        ConfigError: A module fails to import, carries metadata of the
            wrong type, has a handler that is not ``async def f(request)``,
            or claims a path another module already has.

    """
    if not routes_dir.is_dir():
        return ()

    by_path: dict[str, RouteDefinition] = {}
    for py_file in sorted(routes_dir.rglob("*.py")):
        if py_file.name.startswith("_") or "__pycache__" in py_file.parts:
            continue

        defn = _definition(_import(py_file, routes_dir), py_file, routes_dir)
        if defn is None:
            continue

        other = by_path.get(defn.path)
        if other is not None:
            msg = f"Duplicate route path {defn.path!r}: defined in {other.source} and {py_file}"
            raise ConfigError(msg)
        by_path[defn.path] = defn

    return tuple(by_path.values())


def _import(py_file: Path, routes_dir: Path) -> ModuleType:
    """Execute *py_file* as ``pawprint_routes.<dotted.path>``."""
    dotted = ".".join(py_file.relative_to(routes_dir).with_suffix("").parts)
    module_name = f"pawprint_routes.{dotted}"

    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        msg = f"Cannot import route module {py_file}"
        raise ConfigError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load route module {py_file}: {exc}"
        raise ConfigError(msg) from exc
    return module


def _derive_path(py_file: Path, routes_dir: Path) -> str:
    """URL path implied by a module's location; ``index`` names its directory."""
    parts = list(py_file.relative_to(routes_dir).with_suffix("").parts)
    if parts[-1] == "index":
        parts.pop()
    return "/" + "/".join(parts)


def _metadata(module: ModuleType, py_file: Path) -> dict[str, object]:
    """Type-checked optional module attributes that are set."""
    found: dict[str, object] = {}
    for attr, expected in _METADATA.items():
        value = getattr(module, attr, None)
        if value is None:
            continue
        if not isinstance(value, expected):
            msg = (
                f"Route module {py_file}: {attr!r} must be a {expected.__name__}, "
                f"got {type(value).__name__}"
            )
            raise ConfigError(msg)
        found[attr] = value
    return found


def _definition(
    module: ModuleType,
    py_file: Path,
    routes_dir: Path,
) -> RouteDefinition | None:
    handlers: dict[str, object] = {}
    for name in _METHODS:
        func = getattr(module, name, None)
        if callable(func):
            _check_handler(func, name, py_file)
            handlers[name.upper()] = func

    fallback = getattr(module, "handler", None)
    if callable(fallback) and "GET" not in handlers:
        _check_handler(fallback, "handler", py_file)
        handlers = {"GET": fallback, **handlers}

    if not handlers:
        return None

    meta = _metadata(module, py_file)
    path = str(meta.get("path", _derive_path(py_file, routes_dir)))
    if not path.startswith("/"):
        path = "/" + path

    sitemap = meta.get("sitemap")
    return RouteDefinition(
        path=path,
        handlers=tuple(handlers.items()),
        name=str(meta.get("name", f"route:{path}")),
        source=py_file,
        ignore=bool(meta.get("ignore", False)),
        sitemap=None if sitemap is None else bool(sitemap),
    )


def _check_handler(func: object, name: str, source: Path) -> None:
    """Handlers must be coroutine functions taking the request."""
    if not inspect.iscoroutinefunction(func):
        msg = (
            f"Route handler '{name}' in {source} must be an async function "
            f"(use 'async def {name}(request)')."
        )
        raise ConfigError(msg)

    if not inspect.signature(func).parameters:  # type: ignore[arg-type]
        msg = (
            f"Route handler '{name}' in {source} must accept at least one "
            f"parameter (the request object)."
        )
        raise ConfigError(msg)
