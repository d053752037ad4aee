"""Pawprint error hierarchy.

All pawprint-specific errors inherit from PawprintError for easy catching.
"""


class PawprintError(Exception):
    """Base error for all pawprint operations."""


class ConfigError(PawprintError):
    """Invalid or missing configuration."""


class RouteGenerationError(PawprintError):
    """A route's URL cannot be generated without parameters.

    Raised while scanning entrypoints.  Never fatal: the scanner counts the
    route as skipped and moves on.

    """

    def __init__(self, route: str, missing: tuple[str, ...]) -> None:
        self.route = route
        self.missing = missing
        names = ", ".join(repr(name) for name in missing)
        super().__init__(f"Route {route!r} requires parameters: {names}")


class AssetMissingError(PawprintError):
    """A configured copy source is neither a file nor a directory."""

    def __init__(self, src: object) -> None:
        self.src = src
        super().__init__(
            f'Failed to copy "{src}" because the path is neither a file or a directory.'
        )


class RenderError(PawprintError):
    """The render engine failed for a URL.

    The original exception is available as ``__cause__``.

    """

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        msg = f"Could not build url {url!r}."
        if reason:
            msg = f"{msg} {reason}"
        super().__init__(msg)


class FileWriteError(PawprintError):
    """A file or directory in the output tree could not be written."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        msg = f"Could not write {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class BuildCancelled(PawprintError):
    """The build was cancelled between two pages."""
