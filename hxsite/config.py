from __future__ import annotations

from dataclasses import dataclass


DEFAULT_PAGE_DIR = "./"
DEFAULT_SITE_ROOT_DIR = "./"


def normalize_dir(path: str | None, default: str = DEFAULT_PAGE_DIR) -> str:
    """Directories are always passed around with a trailing slash."""
    path = (path or default).replace("\\", "/")
    if not path.endswith("/"):
        path += "/"
    return path


@dataclass(frozen=True)
class BuildFlags:
    """Switches for one build run (``--release``, ``--actions``, ``--full``)."""

    is_release: bool = False
    is_actions: bool = False
    is_full_build: bool = False

    def __post_init__(self) -> None:
        # a full build is always a release build
        if self.is_full_build and not self.is_release:
            object.__setattr__(self, "is_release", True)


@dataclass(frozen=True)
class RewriteOptions:
    page_dir: str = DEFAULT_PAGE_DIR
    site_root_dir: str = DEFAULT_SITE_ROOT_DIR
    is_actions: bool = False
    # Unknown code block languages fail the build when strict, warn otherwise.
    strict: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "page_dir", normalize_dir(self.page_dir))
        object.__setattr__(self, "site_root_dir", normalize_dir(self.site_root_dir, DEFAULT_SITE_ROOT_DIR))

    @classmethod
    def from_flags(
        cls,
        flags: BuildFlags,
        page_dir: str | None = None,
        site_root_dir: str | None = None,
    ) -> RewriteOptions:
        return cls(
            page_dir=page_dir or DEFAULT_PAGE_DIR,
            site_root_dir=site_root_dir or DEFAULT_SITE_ROOT_DIR,
            is_actions=flags.is_actions,
            strict=flags.is_release,
        )
