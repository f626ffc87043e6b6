"""
In-Memory Resource Client Backend.

This module implements InMemoryResourceClient, a process-local store that
mimics the API server semantics the remote cluster core depends on:

    - UIDs assigned on create, never reused
    - resourceVersion bumped on every write, checked on update when provided
    - UID preconditions honored on delete

Intended for local runs and tests. Objects are deep-copied on the way in and
out so callers never share state with the store.

Usage Example:
    >>> from libs.k8s.memory_backend import InMemoryResourceClient
    >>> client = InMemoryResourceClient()
    >>> client.create_secret(Secret(name="s", namespace="default"))
"""

import copy
import itertools
import logging
import threading
import uuid

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import ResourceConflictError, ResourceNotFoundError
from libs.k8s.models import Secret

logger = logging.getLogger(__name__)

_BACKEND = "memory"


class InMemoryResourceClient(ResourceClient):
    """
    Dict-backed resource store.

    Thread Safety:
        All operations are protected by threading.Lock.
    """

    backend_name = _BACKEND

    def __init__(self, secrets: list[Secret] | None = None) -> None:
        self._lock = threading.Lock()
        self._secrets: dict[tuple[str, str], Secret] = {}
        self._versions = itertools.count(1)
        for secret in secrets or []:
            self.create_secret(secret)

    def get_secret(self, namespace: str, name: str) -> Secret:
        with self._lock:
            stored = self._secrets.get((namespace, name))
            if stored is None:
                raise ResourceNotFoundError(f"{namespace}/{name}", _BACKEND)
            return copy.deepcopy(stored)

    def create_secret(self, secret: Secret) -> Secret:
        key = (secret.namespace, secret.name)
        with self._lock:
            if key in self._secrets:
                raise ResourceConflictError(
                    secret.namespaced_name, _BACKEND, "secret already exists"
                )
            stored = copy.deepcopy(secret)
            stored.uid = str(uuid.uuid4())
            stored.resource_version = str(next(self._versions))
            self._secrets[key] = stored
            logger.debug(
                "Secret created",
                extra={"resource": secret.namespaced_name, "backend": _BACKEND},
            )
            return copy.deepcopy(stored)

    def update_secret(self, secret: Secret) -> Secret:
        key = (secret.namespace, secret.name)
        with self._lock:
            current = self._secrets.get(key)
            if current is None:
                raise ResourceNotFoundError(secret.namespaced_name, _BACKEND)
            if secret.resource_version and secret.resource_version != current.resource_version:
                raise ResourceConflictError(
                    secret.namespaced_name,
                    _BACKEND,
                    f"resourceVersion {secret.resource_version} is stale "
                    f"(current: {current.resource_version})",
                )
            stored = copy.deepcopy(secret)
            stored.uid = current.uid
            stored.resource_version = str(next(self._versions))
            self._secrets[key] = stored
            logger.debug(
                "Secret updated",
                extra={"resource": secret.namespaced_name, "backend": _BACKEND},
            )
            return copy.deepcopy(stored)

    def delete_secret(self, namespace: str, name: str, uid: str | None = None) -> None:
        key = (namespace, name)
        with self._lock:
            current = self._secrets.get(key)
            if current is None:
                raise ResourceNotFoundError(f"{namespace}/{name}", _BACKEND)
            if uid is not None and current.uid != uid:
                raise ResourceConflictError(
                    f"{namespace}/{name}",
                    _BACKEND,
                    f"UID precondition failed (expected {uid}, found {current.uid})",
                )
            del self._secrets[key]
            logger.debug(
                "Secret deleted",
                extra={"resource": f"{namespace}/{name}", "backend": _BACKEND},
            )
