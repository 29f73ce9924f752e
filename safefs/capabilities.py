"""
Runtime capability detection and strategy selection.

Every recursive directory operation has several implementations whose
availability depends on the Python runtime. The selection functions here
are pure: they only look at the ``RuntimeCapabilities`` they are given, so
callers can pass a synthetic version to exercise any strategy.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Tuple

# Minimum runtime versions per capability
NATIVE_MKDIR_SINCE = (3, 2)         # os.makedirs(exist_ok=True)
FORCE_REMOVE_SINCE = (3, 12)        # shutil.rmtree(onexc=...)
RECURSIVE_REMOVE_SINCE = (3, 6)     # bottom-up os.walk over os.scandir
LEGACY_REMOVE_SINCE = (3, 0)        # plain shutil.rmtree, retried as a whole
NATIVE_LIST_SINCE = (3, 6)          # os.walk over os.scandir


class MkdirStrategy(Enum):
    NATIVE = "native"
    MANUAL = "manual"


class RemoveStrategy(Enum):
    FORCE = "force"
    RECURSIVE = "recursive"
    LEGACY_RECURSIVE = "legacy_recursive"
    SHELL = "shell"


class ListStrategy(Enum):
    NATIVE = "native"
    SHELL = "shell"


def parse_version(version: str) -> Tuple[int, ...]:
    """
    Parse a dotted version string into a tuple of integers.

    Parsing stops at the first component that is not a plain number, so
    "3.12.0rc1" becomes (3, 12). An unparseable string yields an empty tuple,
    which compares below every threshold.
    """
    parts = []
    for part in version.strip().lstrip("v").split("."):
        if not part.isdigit():
            break
        parts.append(int(part))
    return tuple(parts)


@dataclass(frozen=True)
class RuntimeCapabilities:
    """Version of the runtime the recursive operations execute on."""

    version: Tuple[int, ...]

    @classmethod
    def from_string(cls, version: str) -> "RuntimeCapabilities":
        return cls(parse_version(version))

    def supports(self, minimum: Tuple[int, ...]) -> bool:
        return bool(self.version) and self.version >= minimum

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.version) or "unknown"


@lru_cache(maxsize=1)
def detect_capabilities() -> RuntimeCapabilities:
    """Capabilities of the running interpreter, computed once per process."""
    return RuntimeCapabilities(tuple(sys.version_info[:3]))


def select_mkdir_strategy(capabilities: RuntimeCapabilities) -> MkdirStrategy:
    if capabilities.supports(NATIVE_MKDIR_SINCE):
        return MkdirStrategy.NATIVE
    return MkdirStrategy.MANUAL


def select_remove_strategy(capabilities: RuntimeCapabilities) -> RemoveStrategy:
    """Newest removal strategy the runtime supports, falling back to the shell."""
    if capabilities.supports(FORCE_REMOVE_SINCE):
        return RemoveStrategy.FORCE
    if capabilities.supports(RECURSIVE_REMOVE_SINCE):
        return RemoveStrategy.RECURSIVE
    if capabilities.supports(LEGACY_REMOVE_SINCE):
        return RemoveStrategy.LEGACY_RECURSIVE
    return RemoveStrategy.SHELL


def select_list_strategy(capabilities: RuntimeCapabilities) -> ListStrategy:
    if capabilities.supports(NATIVE_LIST_SINCE):
        return ListStrategy.NATIVE
    return ListStrategy.SHELL
