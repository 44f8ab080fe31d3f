"""Metadata about the two sides of a comparison."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VaultPath:
    """A Vault location split into namespace, mount and secret path."""

    namespace: str = ""
    mount: str = ""
    secret_path: str = ""


@dataclass(frozen=True)
class DiffContext:
    """Describes the left and right sides being compared."""

    left_path: str = ""
    right_path: str = ""
    left_namespace: str = ""
    right_namespace: str = ""
    left_mount: str = ""
    right_mount: str = ""

    @classmethod
    def from_paths(cls, left: VaultPath, right: VaultPath) -> DiffContext:
        """Build a context from two parsed Vault paths."""
        return cls(
            left_path=left.secret_path,
            right_path=right.secret_path,
            left_namespace=left.namespace,
            right_namespace=right.namespace,
            left_mount=left.mount,
            right_mount=right.mount,
        )

    def same_namespace(self) -> bool:
        """Return True when both sides share a namespace."""
        return self.left_namespace == self.right_namespace

    def same_mount(self) -> bool:
        """Return True when both sides share a KV mount."""
        return self.left_mount == self.right_mount

    def summary(self) -> str:
        """Return a one-line description such as ``ns/a → ns/b``."""
        left = f"{self.left_namespace}/{self.left_path}" if self.left_namespace else self.left_path
        right = (
            f"{self.right_namespace}/{self.right_path}" if self.right_namespace else self.right_path
        )
        return f"{left} → {right}"