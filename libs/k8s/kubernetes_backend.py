"""
Kubernetes Resource Client Backend.

This module implements KubernetesResourceClient, the production backend that
talks to the API server through the official ``kubernetes`` client
(CoreV1Api).

Architecture:
    - Loads in-cluster config (service account) or a kubeconfig/context
    - Every request bounded by ``request_timeout_seconds``
    - Automatic retries (exponential backoff) for transient failures only:
      transport errors, HTTP 429 and 5xx
    - Conflicts (409) and RBAC denials are never retried
    - ApiException translated into the libs.k8s exception hierarchy

Security Considerations:
    - Secret data NEVER logged (only namespace/name)
    - Requires get/create/update/delete on secrets in the owner's namespace

Usage Example:
    >>> from libs.k8s.kubernetes_backend import KubernetesResourceClient
    >>> client = KubernetesResourceClient(in_cluster=True)
    >>> secret = client.get_secret("default", "quickstart-es-remote-api-keys")
"""

import base64
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from kubernetes import client as k8s_client
from kubernetes import config as k8s_config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential
from urllib3.exceptions import HTTPError

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import (
    ResourceAccessError,
    ResourceConflictError,
    ResourceNotFoundError,
    ResourceStoreError,
)
from libs.k8s.models import OwnerReference, Secret

logger = logging.getLogger(__name__)

_BACKEND = "kubernetes"

T = TypeVar("T")


def _is_transient_api_error(exception: BaseException) -> bool:
    """
    Check if an API call failure is transient and should be retried.

    Transient (retry):
        - urllib3 transport errors (connection reset, read timeout)
        - HTTP 429 Too Many Requests
        - HTTP 5xx

    Permanent (no retry):
        - 404 Not Found, 409 Conflict, 401/403, 422 and other 4xx
    """
    if isinstance(exception, HTTPError):
        return True
    if isinstance(exception, ApiException):
        status = exception.status or 0
        return status == 429 or status >= 500
    return False


def _translate_error(exception: Exception, resource: str) -> ResourceStoreError:
    if isinstance(exception, HTTPError):
        return ResourceAccessError(resource, _BACKEND, f"API server unreachable: {exception}")
    if isinstance(exception, ApiException):
        status = exception.status or 0
        if status == 404:
            return ResourceNotFoundError(resource, _BACKEND)
        if status == 409:
            return ResourceConflictError(resource, _BACKEND, exception.reason or "conflict")
        if status in (401, 403):
            return ResourceAccessError(
                resource,
                _BACKEND,
                f"HTTP {status} {exception.reason}. Verify RBAC grants access to secrets.",
            )
        if status == 429 or status >= 500:
            return ResourceAccessError(
                resource, _BACKEND, f"HTTP {status} {exception.reason} after retries"
            )
        return ResourceStoreError(
            f"API request rejected: HTTP {status} {exception.reason}",
            resource=resource,
            backend=_BACKEND,
        )
    return ResourceStoreError(
        f"Unexpected API client error: {exception}", resource=resource, backend=_BACKEND
    )


def _to_v1_secret(secret: Secret) -> k8s_client.V1Secret:
    owner_references = [
        k8s_client.V1OwnerReference(
            api_version=ref.api_version,
            kind=ref.kind,
            name=ref.name,
            uid=ref.uid,
            controller=ref.controller,
            block_owner_deletion=ref.block_owner_deletion,
        )
        for ref in secret.owner_references
    ]
    return k8s_client.V1Secret(
        api_version="v1",
        kind="Secret",
        type="Opaque",
        metadata=k8s_client.V1ObjectMeta(
            name=secret.name,
            namespace=secret.namespace,
            labels=dict(secret.labels) or None,
            annotations=dict(secret.annotations) or None,
            owner_references=owner_references or None,
            resource_version=secret.resource_version or None,
        ),
        data={key: base64.b64encode(value).decode("ascii") for key, value in secret.data.items()},
    )


def _from_v1_secret(v1_secret: Any) -> Secret:
    metadata = v1_secret.metadata
    return Secret(
        name=metadata.name,
        namespace=metadata.namespace,
        labels=dict(metadata.labels or {}),
        annotations=dict(metadata.annotations or {}),
        data={key: base64.b64decode(value) for key, value in (v1_secret.data or {}).items()},
        owner_references=[
            OwnerReference(
                api_version=ref.api_version,
                kind=ref.kind,
                name=ref.name,
                uid=ref.uid,
                controller=bool(ref.controller),
                block_owner_deletion=bool(ref.block_owner_deletion),
            )
            for ref in (metadata.owner_references or [])
        ],
        uid=metadata.uid or "",
        resource_version=metadata.resource_version or "",
    )


class KubernetesResourceClient(ResourceClient):
    """
    API server backed resource store.

    Example:
        >>> # Inside a pod, using the service account
        >>> client = KubernetesResourceClient(in_cluster=True)
        >>>
        >>> # Local development against a kind cluster
        >>> client = KubernetesResourceClient(kube_context="kind-dev")
    """

    backend_name = _BACKEND

    def __init__(
        self,
        core_api: Any | None = None,
        kubeconfig_path: str | None = None,
        kube_context: str | None = None,
        in_cluster: bool = False,
        request_timeout_seconds: float = 30.0,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 1.0,
        field_manager: str | None = None,
    ) -> None:
        """
        Initialize the client, loading cluster configuration unless ``core_api`` is given.

        Args:
            core_api: Pre-built CoreV1Api (or compatible object). Skips config loading.
            kubeconfig_path: Path to kubeconfig. None uses the default location.
            kube_context: kubeconfig context to use. None uses the current context.
            in_cluster: Load the pod service account config instead of a kubeconfig.
            request_timeout_seconds: Upper bound for each API call.
            retry_attempts: Total attempts for transient failures (1 disables retries).
            retry_backoff_seconds: Exponential backoff multiplier between attempts.
            field_manager: Name recorded in managedFields for writes.

        Raises:
            ResourceAccessError: Cluster configuration could not be loaded
        """
        self._request_timeout = request_timeout_seconds
        self._retry_attempts = max(1, retry_attempts)
        self._retry_backoff = retry_backoff_seconds
        self._field_manager = field_manager
        self._api_client: Any | None = None

        if core_api is not None:
            self._core = core_api
            return

        try:
            if in_cluster:
                k8s_config.load_incluster_config()
            else:
                k8s_config.load_kube_config(config_file=kubeconfig_path, context=kube_context)
        except ConfigException as e:
            raise ResourceAccessError(
                resource="kubeconfig",
                backend=_BACKEND,
                reason=f"Could not load cluster configuration: {e}",
            ) from e

        self._api_client = k8s_client.ApiClient()
        self._core = k8s_client.CoreV1Api(self._api_client)
        logger.info(
            "Kubernetes client configured",
            extra={
                "in_cluster": in_cluster,
                "kube_context": kube_context,
                "backend": _BACKEND,
            },
        )

    def _call(self, resource: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run one API call with transient retries and error translation."""
        kwargs["_request_timeout"] = self._request_timeout
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential(multiplier=self._retry_backoff, max=10),
                retry=retry_if_exception(_is_transient_api_error),
                reraise=True,
            ):
                with attempt:
                    return func(*args, **kwargs)
        except (ApiException, HTTPError) as e:
            raise _translate_error(e, resource) from e
        raise AssertionError("unreachable")  # pragma: no cover

    def _write_kwargs(self) -> dict[str, Any]:
        return {"field_manager": self._field_manager} if self._field_manager else {}

    def get_secret(self, namespace: str, name: str) -> Secret:
        resource = f"{namespace}/{name}"
        v1_secret = self._call(resource, self._core.read_namespaced_secret, name, namespace)
        return _from_v1_secret(v1_secret)

    def create_secret(self, secret: Secret) -> Secret:
        """
        Create ``secret``, retrying transport failures like every other call.

        A POST whose response was lost may have been applied: the retry then
        fails with ResourceConflictError ("already exists"). reconcile_secret
        handles this by re-reading and updating; direct callers must treat a
        conflict after a transport error as "possibly created".
        """
        body = _to_v1_secret(secret)
        created = self._call(
            secret.namespaced_name,
            self._core.create_namespaced_secret,
            secret.namespace,
            body,
            **self._write_kwargs(),
        )
        logger.info(
            "Secret created",
            extra={"resource": secret.namespaced_name, "backend": _BACKEND},
        )
        return _from_v1_secret(created)

    def update_secret(self, secret: Secret) -> Secret:
        body = _to_v1_secret(secret)
        updated = self._call(
            secret.namespaced_name,
            self._core.replace_namespaced_secret,
            secret.name,
            secret.namespace,
            body,
            **self._write_kwargs(),
        )
        logger.info(
            "Secret updated",
            extra={"resource": secret.namespaced_name, "backend": _BACKEND},
        )
        return _from_v1_secret(updated)

    def delete_secret(self, namespace: str, name: str, uid: str | None = None) -> None:
        resource = f"{namespace}/{name}"
        preconditions = k8s_client.V1Preconditions(uid=uid) if uid is not None else None
        self._call(
            resource,
            self._core.delete_namespaced_secret,
            name,
            namespace,
            body=k8s_client.V1DeleteOptions(preconditions=preconditions),
        )
        logger.info(
            "Secret deleted",
            extra={"resource": resource, "uid": uid, "backend": _BACKEND},
        )

    def close(self) -> None:
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None
