"""
Keystore composition for remote cluster API keys.

The Elasticsearch keystore is assembled from the Secrets listed in the
cluster's secure settings. When remote cluster API keys exist, their Secret
must be part of that list so ``cluster.remote.<alias>.credentials`` settings
reach the nodes. ``with_remote_cluster_api_keys`` builds that extended view
without touching the user-declared secure settings.
"""

from __future__ import annotations

import logging
from typing import Protocol

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import ResourceNotFoundError
from libs.remote_cluster.models import Elasticsearch, SecretSource
from libs.remote_cluster.naming import remote_api_keys_secret_name

logger = logging.getLogger(__name__)


class HasKeystore(Protocol):
    """What the keystore builder needs from a keystore owner."""

    @property
    def name(self) -> str: ...

    @property
    def namespace(self) -> str: ...

    def secure_settings(self) -> list[SecretSource]: ...


class ExtendedKeystore:
    """
    An Elasticsearch cluster seen through its secure settings, plus extra sources.

    Holds the owner by reference and exposes only what the keystore builder
    consumes.
    """

    def __init__(self, owner: Elasticsearch, secure_settings: list[SecretSource]) -> None:
        self._owner = owner
        self._secure_settings = list(secure_settings)

    @property
    def owner(self) -> Elasticsearch:
        return self._owner

    @property
    def name(self) -> str:
        return self._owner.name

    @property
    def namespace(self) -> str:
        return self._owner.namespace

    def secure_settings(self) -> list[SecretSource]:
        return list(self._secure_settings)


def secure_settings_of(keystore: HasKeystore | None) -> list[SecretSource]:
    """Secure settings of ``keystore``, or an empty list when there is none."""
    if keystore is None:
        return []
    return keystore.secure_settings()


def with_remote_cluster_api_keys(client: ResourceClient, es: Elasticsearch) -> ExtendedKeystore:
    """
    Return the keystore view of ``es``, including its remote API keys Secret if it exists.

    Raises:
        ResourceStoreError: The existence check failed for a reason other than not found
    """
    secure_settings = list(es.secure_settings)
    secret_name = remote_api_keys_secret_name(es.name)
    try:
        client.get_secret(es.namespace, secret_name)
    except ResourceNotFoundError:
        return ExtendedKeystore(es, secure_settings)

    logger.debug(
        "Adding remote cluster API keys to keystore sources",
        extra={"namespace": es.namespace, "es_name": es.name, "secret_name": secret_name},
    )
    secure_settings.append(SecretSource(secret_name=secret_name))
    return ExtendedKeystore(es, secure_settings)
