"""
Factory for creating ResourceClient instances based on configuration.

Backend selection:
    - RESOURCE_BACKEND="kubernetes" → KubernetesResourceClient (default)
    - RESOURCE_BACKEND="memory" → InMemoryResourceClient (local runs, tests)

Environment Variables (read through config.settings.Settings):
    RESOURCE_BACKEND, KUBECONFIG_PATH, KUBE_CONTEXT, IN_CLUSTER,
    REQUEST_TIMEOUT_SECONDS, STORE_RETRY_ATTEMPTS, FIELD_MANAGER

Example Usage:
    >>> client = create_resource_client(backend="memory")
    >>> isinstance(client, InMemoryResourceClient)
    True
"""

import logging

from config.settings import Settings, get_settings
from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import ResourceStoreError

logger = logging.getLogger(__name__)


def create_resource_client(
    backend: str | None = None,
    settings: Settings | None = None,
) -> ResourceClient:
    """
    Create a ResourceClient for the configured backend.

    Args:
        backend: Backend name override ("kubernetes", "memory").
                 If None, uses settings.resource_backend.
        settings: Settings override. If None, uses get_settings().

    Returns:
        ResourceClient: KubernetesResourceClient or InMemoryResourceClient

    Raises:
        ResourceStoreError: Unknown backend name
        ResourceAccessError: Kubernetes configuration could not be loaded
    """
    settings = settings or get_settings()
    selected_backend = (
        (backend if backend is not None else settings.resource_backend).lower().strip()
    )

    if selected_backend == "kubernetes":
        # Lazy import: the kubernetes package is only needed for this backend
        from libs.k8s.kubernetes_backend import KubernetesResourceClient

        return KubernetesResourceClient(
            kubeconfig_path=settings.kubeconfig_path,
            kube_context=settings.kube_context,
            in_cluster=settings.in_cluster,
            request_timeout_seconds=settings.request_timeout_seconds,
            retry_attempts=settings.store_retry_attempts,
            field_manager=settings.field_manager,
        )

    elif selected_backend == "memory":
        from libs.k8s.memory_backend import InMemoryResourceClient

        logger.warning(
            "Using in-memory resource store; Secrets are not persisted to a cluster",
            extra={"backend": "memory"},
        )
        return InMemoryResourceClient()

    else:
        raise ResourceStoreError(
            f"Invalid RESOURCE_BACKEND: '{selected_backend}'. "
            f"Valid options: 'kubernetes', 'memory'."
        )
