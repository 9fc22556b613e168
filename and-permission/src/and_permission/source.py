"""Permission sources.

A caller may hold one of three host shapes:

  * a free host context (activity-like object)
  * a native-lineage fragment, attached to its owning activity (`.activity`)
  * a support-lineage fragment, attached to a host context (`.context`)

`PermissionSource` wraps exactly one of them and exposes the two things the
evaluator needs: the resolved host and the rationale query. Everything
downstream is host-agnostic.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from and_permission.errors import HostNotAttachedError
from and_permission.oracle import HOST_ORACLE, PermissionOracle


class HostKind(str, enum.Enum):
    CONTEXT = "context"
    FRAGMENT = "fragment"
    SUPPORT_FRAGMENT = "support_fragment"


# Attribute holding the attached host for each fragment lineage.
_ATTACHED_HOST_ATTR = {
    HostKind.FRAGMENT: "activity",
    HostKind.SUPPORT_FRAGMENT: "context",
}


@dataclass(frozen=True)
class PermissionSource:
    kind: HostKind
    target: Any
    oracle: PermissionOracle = HOST_ORACLE

    def __post_init__(self) -> None:
        if self.target is None:
            raise ValueError("PermissionSource requires a non-None target")

    @classmethod
    def from_context(
        cls, context: Any, *, oracle: PermissionOracle = HOST_ORACLE
    ) -> "PermissionSource":
        return cls(kind=HostKind.CONTEXT, target=context, oracle=oracle)

    @classmethod
    def from_fragment(
        cls, fragment: Any, *, oracle: PermissionOracle = HOST_ORACLE
    ) -> "PermissionSource":
        """Native-lineage fragment; resolves to its owning activity."""
        return cls(kind=HostKind.FRAGMENT, target=fragment, oracle=oracle)

    @classmethod
    def from_support_fragment(
        cls, fragment: Any, *, oracle: PermissionOracle = HOST_ORACLE
    ) -> "PermissionSource":
        """Support-lineage fragment; resolves to its attached context."""
        return cls(kind=HostKind.SUPPORT_FRAGMENT, target=fragment, oracle=oracle)

    def resolve_host(self) -> Any:
        if self.kind is HostKind.CONTEXT:
            return self.target

        attr = _ATTACHED_HOST_ATTR[self.kind]
        host = getattr(self.target, attr, None)
        if host is None:
            raise HostNotAttachedError(
                f"{self.kind.value} {type(self.target).__name__} is not attached "
                f"(missing {attr})"
            )
        return host

    def is_show_rationale_permission(self, permission: str) -> bool:
        return bool(self.oracle.shows_rationale(self.resolve_host(), permission))


def as_source(target: Any, *, oracle: Optional[PermissionOracle] = None) -> PermissionSource:
    """Coerce a host or source into a `PermissionSource`.

    Anything that is not already a source is treated as a free host context.
    An explicit `oracle` overrides the one carried by an existing source.
    """

    if isinstance(target, PermissionSource):
        if oracle is None or oracle is target.oracle:
            return target
        return PermissionSource(kind=target.kind, target=target.target, oracle=oracle)
    return PermissionSource.from_context(target, oracle=oracle or HOST_ORACLE)
