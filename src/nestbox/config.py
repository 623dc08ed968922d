"""Serving and build configuration.

Both are frozen dataclasses: immutable after creation, IDE-autocompletable,
no string-key dict lookups.  Values are validated on construction.
"""

import keyword
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from nestbox.errors import ConfigurationError

INDEX_HTML = "index.html"


def normalize_prefix(prefix: str) -> str:
    """Ensure a leading slash and no trailing one; the root becomes ``""``."""
    stripped = "/" + prefix.strip("/")
    return stripped if stripped != "/" else ""


@dataclass(frozen=True, slots=True)
class ServeConfig:
    """How a ``ResourceFiles`` service answers requests.

    Normally built through the ``ResourceFiles`` chainable API::

        files = ResourceFiles("/", table).fallback_not_found_to_root()
    """

    # Stripped from incoming paths before lookup ("" serves the root)
    mount_prefix: str = ""

    # "" and ".../" additionally probe ".../index.html"
    resolve_index: bool = True

    # Key served for unmatched paths (SPA routing); wins over guard_mode
    not_found_fallback: str | None = None

    # Decline unmatched requests so another handler can take them
    guard_mode: bool = False

    # Optional Cache-Control header for 200/304 responses
    cache_control: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mount_prefix", normalize_prefix(self.mount_prefix))
        if self.not_found_fallback is not None:
            fallback = self.not_found_fallback.lstrip("/")
            if not fallback:
                msg = "not_found_fallback must name a resource key"
                raise ConfigurationError(msg)
            object.__setattr__(self, "not_found_fallback", fallback)

    @property
    def skips_unmatched(self) -> bool:
        """Whether unmatched requests are declined rather than answered 404."""
        return self.guard_mode and self.not_found_fallback is None

    def matches(self, path: str) -> bool:
        """Whether *path* falls under the mount prefix."""
        if not self.mount_prefix:
            return True
        return path == self.mount_prefix or path.startswith(self.mount_prefix + "/")

    def strip_prefix(self, path: str) -> str:
        """The part of *path* after the mount prefix, without leading slashes."""
        return path[len(self.mount_prefix) :].lstrip("/")


def check_split_by(split_by: int | None) -> None:
    """Reject a resource-set size below one."""
    if split_by is not None and split_by < 1:
        msg = f"split_by must be a positive integer, got {split_by}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Inputs for generating an embeddable resource module.

    ``split_by`` partitions the generated table into helper functions
    of at most that many resources each.
    """

    resource_dir: Path
    generated_filename: Path
    generated_fn: str = "generate"
    split_by: int | None = None
    filter: Callable[[Path], bool] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "resource_dir", Path(self.resource_dir))
        object.__setattr__(self, "generated_filename", Path(self.generated_filename))
        name = self.generated_fn
        if not name.isidentifier() or keyword.iskeyword(name) or name.startswith("_"):
            msg = f"generated_fn must be a public Python identifier, got {self.generated_fn!r}"
            raise ConfigurationError(msg)
        check_split_by(self.split_by)
