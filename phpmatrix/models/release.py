"""
Release data model for phpmatrix.

A :class:`ReleaseDescriptor` is one entry of the release catalog: a
published version label plus its lifecycle flags. The catalog client
builds these and the resolution engine only ever reads them.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


class SupportPolicy(str, Enum):
    """Rule deciding whether a release counts as supported.

    ``MAINTAINED`` treats a release as supported while it still receives
    security fixes or has not reached end of life. ``SECURE`` only accepts
    releases that still receive security fixes.
    """

    MAINTAINED = "maintained"
    SECURE = "secure"

    @classmethod
    def from_value(cls, value: Union[str, "SupportPolicy"]) -> "SupportPolicy":
        """Return the policy named by ``value`` (case-insensitive).

        Raises:
            ValueError: ``value`` names no known policy.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Unknown support policy {value!r} (expected one of: {choices})"
            ) from None


# Catalog JSON keys mapped to field names
_CATALOG_KEYS = {
    "isFutureVersion": "is_future",
    "isEOLVersion": "is_end_of_life",
    "isSecureVersion": "is_secure",
}


def _as_bool(value: Any) -> bool:
    """Interpret catalog flag values, which may arrive as bools, ints or strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class ReleaseDescriptor:
    """One known release.

    Attributes:
        name: Version label as published. Not guaranteed to be a valid
            semantic version.
        is_future: Release is not generally available yet.
        is_end_of_life: Release is no longer maintained.
        is_secure: Release still receives security fixes.
    """

    name: str
    is_future: bool = False
    is_end_of_life: bool = False
    is_secure: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["ReleaseDescriptor"]:
        """Build a descriptor from a catalog entry.

        Accepts both the catalog's camelCase keys (``isFutureVersion``,
        ``isEOLVersion``, ``isSecureVersion``) and this class's field names.
        Missing flags default to ``False``.

        Returns:
            The descriptor, or ``None`` when the entry has no usable name.
        """
        name = data.get("name")
        if name is None or isinstance(name, bool):
            return None
        name = str(name).strip()
        if not name:
            return None

        flags: Dict[str, bool] = {}
        for key, value in data.items():
            field_name = _CATALOG_KEYS.get(key, key)
            if field_name in ("is_future", "is_end_of_life", "is_secure"):
                flags[field_name] = _as_bool(value)

        return cls(name=name, **flags)

    def is_supported(self, policy: SupportPolicy = SupportPolicy.MAINTAINED) -> bool:
        """Return True if this release is supported under ``policy``."""
        if policy is SupportPolicy.SECURE:
            return self.is_secure
        return self.is_secure or not self.is_end_of_life

    @property
    def status(self) -> str:
        """Short lifecycle label used for display."""
        if self.is_future:
            return "future"
        if self.is_secure:
            return "secure"
        if self.is_end_of_life:
            return "end-of-life"
        return "active"

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-safe representation using the catalog's key names."""
        return {
            "name": self.name,
            "isFutureVersion": self.is_future,
            "isEOLVersion": self.is_end_of_life,
            "isSecureVersion": self.is_secure,
        }
