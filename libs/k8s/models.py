"""Backend-neutral representation of the namespaced objects the store persists."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OwnerReference:
    """Controller reference tying a Secret's lifecycle to its owner."""

    api_version: str
    kind: str
    name: str
    uid: str
    controller: bool = True
    block_owner_deletion: bool = True


@dataclass
class Secret:
    """
    A namespaced, annotated key/value object.

    ``uid`` and ``resource_version`` are assigned by the store and are empty
    on objects that have not been persisted yet. ``data`` holds raw bytes;
    base64 handling is the Kubernetes adapter's concern.
    """

    name: str
    namespace: str
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    data: dict[str, bytes] = field(default_factory=dict, repr=False)
    owner_references: list[OwnerReference] = field(default_factory=list)
    uid: str = ""
    resource_version: str = ""

    @property
    def namespaced_name(self) -> str:
        return f"{self.namespace}/{self.name}"
