"""
Resource store access for namespaced Kubernetes Secrets.

Architecture:
    - ResourceClient: Abstract interface (client.py)
    - Backend implementations: KubernetesResourceClient, InMemoryResourceClient
    - Factory: create_resource_client() selects backend via RESOURCE_BACKEND
    - reconcile_secret(): create-or-update to a desired Secret

Quick Start:
    >>> from libs.k8s import create_resource_client, reconcile_secret
    >>> client = create_resource_client()
    >>> secret = client.get_secret("default", "quickstart-es-remote-api-keys")
"""

from typing import TYPE_CHECKING, Any

# Lazy import: KubernetesResourceClient pulls in the kubernetes package.
if TYPE_CHECKING:
    from libs.k8s.kubernetes_backend import KubernetesResourceClient as KubernetesResourceClient

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import (
    ResourceAccessError,
    ResourceConflictError,
    ResourceNotFoundError,
    ResourceStoreError,
)
from libs.k8s.factory import create_resource_client
from libs.k8s.memory_backend import InMemoryResourceClient
from libs.k8s.models import OwnerReference, Secret
from libs.k8s.reconciler import reconcile_secret


def __getattr__(name: str) -> Any:
    """Lazy load KubernetesResourceClient so the kubernetes package stays optional at import."""
    if name == "KubernetesResourceClient":
        from libs.k8s.kubernetes_backend import KubernetesResourceClient

        return KubernetesResourceClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core interface
    "ResourceClient",
    # Factory
    "create_resource_client",
    # Backend implementations
    "KubernetesResourceClient",
    "InMemoryResourceClient",
    # Models
    "Secret",
    "OwnerReference",
    # Reconciliation
    "reconcile_secret",
    # Exceptions
    "ResourceStoreError",
    "ResourceNotFoundError",
    "ResourceConflictError",
    "ResourceAccessError",
]
