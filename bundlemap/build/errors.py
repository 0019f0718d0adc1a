"""Error hierarchy for build map construction.

Every error here is fatal to the current build invocation. Resolution and
bundle assignment are deterministic, so none of them are retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple


class BuildMapError(Exception):
    """Base class for all build map errors."""

    pass


class EmptyInputError(BuildMapError):
    """No collected root produced a single valid asset."""

    def __init__(self, root_count: int = 0) -> None:
        self.root_count = root_count
        super().__init__(
            f"Build asset list is empty ({root_count} collected root(s) declared)"
        )


class UnresolvedBundleLookupError(BuildMapError, KeyError):
    """A query asked for a bundle that is not part of the build map.

    Given the build map invariants this only happens when a caller passes a
    bundle name it did not obtain from the context.
    """

    def __init__(self, bundle_name: str) -> None:
        self.bundle_name = bundle_name
        super().__init__(bundle_name)

    def __str__(self) -> str:
        return f"Bundle not found in build map: {self.bundle_name}"


@dataclass(frozen=True)
class FilenameCollision:
    """Two distinct paths sharing a filename inside one bundle."""

    bundle_name: str
    path: str
    other_path: str

    def __str__(self) -> str:
        return f"{self.bundle_name}: {self.path} <-> {self.other_path}"


class FilenameCollisionError(BuildMapError):
    """Aggregate error listing every same-filename collision in the build map."""

    def __init__(self, collisions: Sequence[FilenameCollision]) -> None:
        self.collisions: List[FilenameCollision] = list(collisions)
        lines = "\n".join(f"  - {collision}" for collision in self.collisions)
        super().__init__(
            f"Found {len(self.collisions)} same-name file collision(s) "
            f"inside bundles:\n{lines}"
        )

    @property
    def paths(self) -> List[str]:
        """Every path involved in a collision, in report order, without repeats."""
        seen: List[str] = []
        for collision in self.collisions:
            for path in (collision.other_path, collision.path):
                if path not in seen:
                    seen.append(path)
        return seen


class BundleNameConflictError(BuildMapError):
    """Two different (label, variant) pairs produce the same bundle full name.

    A label containing a dot with the default variant, such as ``ui.cn``,
    reads the same as label ``ui`` with variant ``cn``.
    """

    def __init__(
        self,
        bundle_name: str,
        existing: Tuple[str, str],
        conflicting: Tuple[str, str],
        asset_path: str,
    ) -> None:
        self.bundle_name = bundle_name
        self.existing = existing
        self.conflicting = conflicting
        self.asset_path = asset_path
        super().__init__(
            f"Bundle name {bundle_name!r} is ambiguous: asset {asset_path} has "
            f"label={conflicting[0]!r} variant={conflicting[1]!r}, but the bundle "
            f"already holds label={existing[0]!r} variant={existing[1]!r}"
        )


class ManifestError(BuildMapError, ValueError):
    """Project manifest is malformed or cannot be loaded."""

    pass


__all__ = [
    "BundleNameConflictError",
    "BuildMapError",
    "EmptyInputError",
    "FilenameCollision",
    "FilenameCollisionError",
    "ManifestError",
    "UnresolvedBundleLookupError",
]
