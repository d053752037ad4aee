"""Tests for pawprint.routes.loader — route module discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from pawprint._errors import ConfigError
from pawprint.routes.loader import RouteDefinition, _derive_path, discover_routes

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    """Create a routes/ directory for testing."""
    d = tmp_path / "routes"
    d.mkdir()
    return d


def _write_route(routes_dir: Path, name: str, content: str) -> Path:
    """Write a route module and return its path."""
    p = routes_dir / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content)
    return p


# ---------------------------------------------------------------------------
# RouteDefinition
# ---------------------------------------------------------------------------


class TestRouteDefinition:
    """RouteDefinition — methods and conversion to RouteDecl."""

    def test_methods_follow_handlers(self) -> None:
        defn = RouteDefinition(
            path="/contact",
            handlers=(("GET", object()), ("POST", object())),
            name="contact",
            source=Path("contact.py"),
        )
        assert defn.methods == ("GET", "POST")

    def test_to_decl(self) -> None:
        defn = RouteDefinition(
            path="/blog/{slug}",
            handlers=(("GET", object()),),
            name="post",
            source=Path("post.py"),
            ignore=True,
            sitemap=False,
        )
        decl = defn.to_decl()
        assert decl.name == "post"
        assert decl.url_template == "/blog/{slug}"
        assert decl.methods == {"GET"}
        assert decl.required_params == {"slug"}
        assert decl.ignored
        assert not decl.is_mapped


# ---------------------------------------------------------------------------
# Path derivation
# ---------------------------------------------------------------------------


class TestDerivePath:
    def test_top_level(self, routes_dir: Path) -> None:
        assert _derive_path(routes_dir / "search.py", routes_dir) == "/search"

    def test_nested(self, routes_dir: Path) -> None:
        assert _derive_path(routes_dir / "api" / "users.py", routes_dir) == "/api/users"

    def test_root_index(self, routes_dir: Path) -> None:
        assert _derive_path(routes_dir / "index.py", routes_dir) == "/"

    def test_nested_index(self, routes_dir: Path) -> None:
        assert _derive_path(routes_dir / "blog" / "index.py", routes_dir) == "/blog"


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscoverRoutes:
    """discover_routes — loading modules from a routes directory."""

    def test_missing_dir_returns_empty(self, tmp_path: Path) -> None:
        assert discover_routes(tmp_path / "nope") == ()

    def test_get_handler(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "about.py", "async def get(request):\n    return 'about'\n")
        (defn,) = discover_routes(routes_dir)
        assert defn.path == "/about"
        assert defn.name == "route:/about"
        assert defn.methods == ("GET",)

    def test_catch_all_handler_maps_to_get(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "a.py", "async def handler(request):\n    return 'a'\n")
        (defn,) = discover_routes(routes_dir)
        assert defn.methods == ("GET",)

    def test_handler_goes_first_before_other_methods(self, routes_dir: Path) -> None:
        _write_route(
            routes_dir,
            "form.py",
            "async def post(request):\n    return 'p'\n"
            "async def handler(request):\n    return 'h'\n",
        )
        (defn,) = discover_routes(routes_dir)
        assert defn.methods == ("GET", "POST")

    def test_post_only_module(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "submit.py", "async def post(request):\n    return 'ok'\n")
        (defn,) = discover_routes(routes_dir)
        assert not defn.to_decl().is_gettable

    def test_metadata(self, routes_dir: Path) -> None:
        _write_route(
            routes_dir,
            "post.py",
            "path = '/blog/{slug}'\n"
            "name = 'blog_post'\n"
            "sitemap = False\n"
            "async def get(request, slug):\n    return slug\n",
        )
        (defn,) = discover_routes(routes_dir)
        assert defn.path == "/blog/{slug}"
        assert defn.name == "blog_post"
        assert defn.sitemap is False
        assert defn.ignore is False

    def test_ignore_flag(self, routes_dir: Path) -> None:
        _write_route(
            routes_dir, "admin.py", "ignore = True\nasync def get(request):\n    return 'x'\n",
        )
        (defn,) = discover_routes(routes_dir)
        assert defn.to_decl().is_ignored

    def test_path_without_leading_slash(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "x.py", "path = 'x'\nasync def get(request):\n    return 'x'\n")
        (defn,) = discover_routes(routes_dir)
        assert defn.path == "/x"

    def test_index_module_maps_to_directory(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "index.py", "async def get(request):\n    return 'home'\n")
        _write_route(routes_dir, "docs/index.py", "async def get(request):\n    return 'docs'\n")
        assert sorted(d.path for d in discover_routes(routes_dir)) == ["/", "/docs"]

    def test_explicit_get_wins_over_handler(self, routes_dir: Path) -> None:
        _write_route(
            routes_dir,
            "a.py",
            "async def get(request):\n    return 'g'\n"
            "def handler(request):\n    return 'sync but unused'\n",
        )
        (defn,) = discover_routes(routes_dir)
        assert defn.handlers[0][1].__name__ == "get"  # type: ignore[attr-defined]

    def test_sorted_order(self, routes_dir: Path) -> None:
        for name in ("b.py", "a.py", "c/d.py"):
            _write_route(routes_dir, name, "async def get(request):\n    return 'x'\n")
        paths = [d.path for d in discover_routes(routes_dir)]
        assert paths == ["/a", "/b", "/c/d"]

    def test_skips_private_and_handlerless(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "_helpers.py", "async def get(request):\n    return 'x'\n")
        _write_route(routes_dir, "consts.py", "VALUE = 1\n")
        assert discover_routes(routes_dir) == ()

    def test_duplicate_paths_raise(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "a.py", "path = '/x'\nasync def get(request):\n    return 'a'\n")
        _write_route(routes_dir, "b.py", "path = '/x'\nasync def get(request):\n    return 'b'\n")
        with pytest.raises(ConfigError, match="Duplicate route path"):
            discover_routes(routes_dir)

    def test_sync_handler_raises(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "a.py", "def get(request):\n    return 'a'\n")
        with pytest.raises(ConfigError, match="must be an async function"):
            discover_routes(routes_dir)

    def test_handler_without_params_raises(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "a.py", "async def get():\n    return 'a'\n")
        with pytest.raises(ConfigError, match="at least one"):
            discover_routes(routes_dir)

    def test_bad_metadata_type_raises(self, routes_dir: Path) -> None:
        _write_route(
            routes_dir, "a.py", "sitemap = 'no'\nasync def get(request):\n    return 'a'\n",
        )
        with pytest.raises(ConfigError, match="'sitemap' must be a bool"):
            discover_routes(routes_dir)

    def test_import_error_raises(self, routes_dir: Path) -> None:
        _write_route(routes_dir, "broken.py", "import does_not_exist_anywhere\n")
        with pytest.raises(ConfigError, match="Failed to load route module"):
            discover_routes(routes_dir)
