"""Tests for pawprint._cli — argument parsing and command dispatch."""

from __future__ import annotations

from typing import Any

import pytest

import pawprint.app
from pawprint._cli import _build_parser, _overrides, main
from pawprint._errors import ConfigError


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_build_default_args(self) -> None:
        args = _build_parser().parse_args(["build"])
        assert args.command == "build"
        assert args.root == "."
        assert args.output is None
        assert args.base_url is None
        assert args.sitemap is None
        assert args.expose is None
        assert args.crawl is None
        assert args.verbose == 0

    def test_build_all_flags(self) -> None:
        args = _build_parser().parse_args([
            "build", "my-site/",
            "--output", "public",
            "--base-url", "https://example.com",
            "--no-sitemap",
            "--no-expose",
            "--crawl",
            "-vv",
        ])
        assert args.root == "my-site/"
        assert args.output == "public"
        assert args.base_url == "https://example.com"
        assert args.sitemap is False
        assert args.expose is False
        assert args.crawl is True
        assert args.verbose == 2

    def test_no_command_returns_none(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None


class TestOverrides:
    def test_only_given_options(self) -> None:
        args = _build_parser().parse_args(["build", "--no-sitemap"])
        assert _overrides(args) == {"sitemap": False}

    def test_all_options(self) -> None:
        args = _build_parser().parse_args([
            "build", "--output", "out", "--base-url", "https://x.org", "--crawl",
        ])
        assert _overrides(args) == {
            "output": "out",
            "base_url": "https://x.org",
            "crawl": True,
        }


class TestMain:
    """main — dispatch to pawprint.app.build."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "pawprint" in capsys.readouterr().out

    def test_build_dispatch(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []

        def fake_build(root: str = ".", **kwargs: object) -> int:
            calls.append({"root": root, **kwargs})
            return 3

        monkeypatch.setattr(pawprint.app, "build", fake_build)
        main(["build", "site", "--no-expose", "--base-url", "https://example.com"])
        assert calls == [{"root": "site", "expose": False, "base_url": "https://example.com"}]

    def test_build_failure_exits_1(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        def fake_build(root: str = ".", **kwargs: object) -> int:
            raise ConfigError("No route modules found")

        monkeypatch.setattr(pawprint.app, "build", fake_build)
        with pytest.raises(SystemExit) as exc_info:
            main(["build"])
        assert exc_info.value.code == 1
        assert "Build failed: No route modules found" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--version"])
        assert "0.1.0" in capsys.readouterr().out
