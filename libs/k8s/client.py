"""
Abstract ResourceClient Interface for Pluggable Resource Stores.

This module defines the contract the remote cluster core relies on to read
and write its backing Secret, so the same code runs against a live API server
or an in-memory store (Dependency Inversion Principle).

Architecture:
    ResourceClient (ABC)
    ├── KubernetesResourceClient - Official kubernetes client (kubernetes_backend.py)
    └── InMemoryResourceClient - Process-local store (memory_backend.py)

Backend selection via factory (factory.py):
    - RESOURCE_BACKEND=kubernetes → KubernetesResourceClient
    - RESOURCE_BACKEND=memory → InMemoryResourceClient

Contract:
    - Every call is a single blocking round trip; implementations MAY retry
      transient transport failures but MUST NOT retry conflicts.
    - Missing objects raise ResourceNotFoundError, never return None.
    - Secret data MUST NOT be logged (names and namespaces only).
"""

from abc import ABC, abstractmethod
from types import TracebackType

from libs.k8s.exceptions import (
    ResourceAccessError,  # noqa: F401 - Used in docstrings for documentation
    ResourceConflictError,  # noqa: F401 - Used in docstrings for documentation
    ResourceNotFoundError,  # noqa: F401 - Used in docstrings for documentation
)
from libs.k8s.models import Secret


class ResourceClient(ABC):
    """
    Abstract base class for all resource store backends.

    Implementations:
        - KubernetesResourceClient: CoreV1Api via the kubernetes package
        - InMemoryResourceClient: dict-backed store with UID/resourceVersion semantics

    Example:
        >>> with create_resource_client() as client:
        ...     secret = client.get_secret("default", "quickstart-es-remote-api-keys")
    """

    backend_name: str = "abstract"

    @abstractmethod
    def get_secret(self, namespace: str, name: str) -> Secret:
        """
        Fetch a Secret by namespace and name.

        Returns:
            The stored Secret, including its ``uid`` and ``resource_version``

        Raises:
            ResourceNotFoundError: No Secret with that name in the namespace
            ResourceAccessError: Permission denied or API server unreachable
        """

    @abstractmethod
    def create_secret(self, secret: Secret) -> Secret:
        """
        Create a new Secret.

        Returns:
            The created Secret with store-assigned ``uid`` and ``resource_version``

        Raises:
            ResourceConflictError: A Secret with that name already exists
            ResourceAccessError: Permission denied or API server unreachable
        """

    @abstractmethod
    def update_secret(self, secret: Secret) -> Secret:
        """
        Replace an existing Secret.

        ``secret.resource_version`` is used as an optimistic-concurrency token
        when non-empty.

        Raises:
            ResourceNotFoundError: The Secret no longer exists
            ResourceConflictError: ``resource_version`` is stale
            ResourceAccessError: Permission denied or API server unreachable
        """

    @abstractmethod
    def delete_secret(self, namespace: str, name: str, uid: str | None = None) -> None:
        """
        Delete a Secret, optionally guarded by a UID precondition.

        Args:
            namespace: Secret namespace
            name: Secret name
            uid: When set, the delete only succeeds if the stored object still
                 carries this UID (it was not deleted and recreated meanwhile)

        Raises:
            ResourceNotFoundError: The Secret doesn't exist
            ResourceConflictError: UID precondition failed
            ResourceAccessError: Permission denied or API server unreachable
        """

    def close(self) -> None:  # noqa: B027 - Intentionally optional hook with default no-op
        """Release connections (optional hook, default no-op)."""

    def __enter__(self) -> "ResourceClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
