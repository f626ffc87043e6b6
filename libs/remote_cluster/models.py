"""Owner and keystore descriptor models for remote cluster credentials."""

from __future__ import annotations

from dataclasses import dataclass, field

from libs.k8s.models import OwnerReference


@dataclass(frozen=True)
class KeyToPath:
    """Maps one key of a source Secret to a keystore entry name."""

    key: str
    path: str | None = None


@dataclass(frozen=True)
class SecretSource:
    """
    Reference to a Secret whose entries are loaded into the Elasticsearch keystore.

    Attributes:
        secret_name: Name of the Secret in the owner's namespace
        entries: Keys to project; None projects every key of the Secret
    """

    secret_name: str
    entries: tuple[KeyToPath, ...] | None = None


@dataclass
class Elasticsearch:
    """
    The owner of a remote cluster keys Secret.

    Only the fields the credential index and keystore composition need are
    modeled: identity, UID for owner references, and the user-declared
    secure settings.
    """

    name: str
    namespace: str
    uid: str = ""
    secure_settings: list[SecretSource] = field(default_factory=list)
    api_version: str = "elasticsearch.k8s.elastic.co/v1"
    kind: str = "Elasticsearch"

    @property
    def namespaced_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def owner_reference(self) -> OwnerReference | None:
        """Controller reference for objects owned by this cluster (None without a UID)."""
        if not self.uid:
            return None
        return OwnerReference(
            api_version=self.api_version,
            kind=self.kind,
            name=self.name,
            uid=self.uid,
        )
