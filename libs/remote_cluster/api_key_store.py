"""
Remote cluster API key index backed by a per-cluster Secret.

The index associates remote cluster aliases with the ID of the cross-cluster
API key issued for them, and holds the encoded API keys that must end up in
the Elasticsearch keystore.

Backing Secret layout (``<es-name>-es-remote-api-keys``):

    metadata.annotations:
        elasticsearch.k8s.elastic.co/remote-clusters-keys: '{"<alias>":"<key id>", ...}'
    data:
        cluster.remote.<alias>.credentials: <encoded API key>

Data entries are named after the alias because Elasticsearch reads the
credentials of a remote cluster from the ``cluster.remote.<alias>.credentials``
secure setting.

Typical reconciliation pass:
    >>> store = load_api_key_store(client, es)
    >>> if store.key_id_for("prod") != current_key.id:
    ...     store.update("prod", current_key.id, current_key.encoded)
    >>> store.delete("decommissioned")
    >>> store.save(client, es)
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Final

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import ResourceNotFoundError
from libs.k8s.models import Secret
from libs.k8s.reconciler import reconcile_secret
from libs.remote_cluster.exceptions import InvalidAliasError, MalformedAnnotationError
from libs.remote_cluster.models import Elasticsearch
from libs.remote_cluster.naming import (
    cluster_labels,
    remote_api_keys_secret_name,
    with_credentials_label,
)

logger = logging.getLogger(__name__)

ALIASES_ANNOTATION_NAME: Final = "elasticsearch.k8s.elastic.co/remote-clusters-keys"
CREDENTIALS_KEY_FORMAT: Final = "cluster.remote.{}.credentials"
ALIAS_PATTERN: Final = re.compile(r"[\w-]+", re.ASCII)
CREDENTIALS_SETTING_PATTERN: Final = re.compile(
    r"^cluster\.remote\.([\w-]+)\.credentials$", re.ASCII
)

# Secret data is raw bytes; surrogateescape keeps non UTF-8 payloads lossless.
_ENCODING: Final = "utf-8"
_ERRORS: Final = "surrogateescape"


def credentials_setting_name(alias: str) -> str:
    """Keystore setting holding the encoded API key for ``alias``."""
    return CREDENTIALS_KEY_FORMAT.format(alias)


@dataclass
class APIKeyStore:
    """
    Aliases and encoded cross-cluster API keys of one Elasticsearch cluster.

    A store is loaded at the start of a reconciliation pass, mutated in
    memory, saved once and discarded. ``APIKeyStore()`` is the empty store:
    there is no absent variant, so reads never need a None check.

    Attributes:
        aliases: Remote cluster alias -> ID of the API key expected for it
        keys: Remote cluster alias -> encoded API key
    """

    aliases: dict[str, str] = field(default_factory=dict)
    keys: dict[str, str] = field(default_factory=dict, repr=False)

    def key_id_for(self, alias: str) -> str:
        """Return the API key ID recorded for ``alias``, or "" if unknown."""
        return self.aliases.get(alias, "")

    def credential_for(self, alias: str) -> str:
        """Return the encoded API key recorded for ``alias``, or "" if unknown."""
        return self.keys.get(alias, "")

    def aliases_view(self) -> dict[str, str]:
        """Copy of the alias -> key ID map, safe to hand out."""
        return dict(self.aliases)

    def update(self, alias: str, key_id: str, encoded_key_value: str) -> APIKeyStore:
        """
        Record (or replace) the API key of ``alias``. Returns self for chaining.

        Raises:
            InvalidAliasError: ``alias`` cannot be part of a credentials setting name
        """
        if not isinstance(alias, str) or ALIAS_PATTERN.fullmatch(alias) is None:
            raise InvalidAliasError(alias)
        self.aliases[alias] = key_id
        self.keys[alias] = encoded_key_value
        return self

    def delete(self, alias: str) -> APIKeyStore:
        """Forget ``alias``; unknown aliases are ignored. Returns self for chaining."""
        self.aliases.pop(alias, None)
        self.keys.pop(alias, None)
        return self

    def is_empty(self) -> bool:
        """True when no alias is recorded; an empty store deletes its Secret on save."""
        return len(self.aliases) == 0

    def __len__(self) -> int:
        return len(self.aliases)

    def __contains__(self, alias: object) -> bool:
        return alias in self.aliases

    def save(
        self,
        client: ResourceClient,
        owner: Elasticsearch,
        retry_attempts: int = 3,
    ) -> None:
        """
        Persist the store into the owner's remote API keys Secret.

        An empty store deletes the Secret, guarded by the UID read just
        before, so a Secret recreated concurrently is left alone. A Secret
        already gone (before the fetch or before the delete) is not an error. A non-empty
        store is reconciled (created or updated) with the owner as controller.

        Raises:
            ResourceStoreError: Any store failure other than a missing Secret
        """
        secret_name = remote_api_keys_secret_name(owner.name)

        if self.is_empty():
            try:
                current = client.get_secret(owner.namespace, secret_name)
            except ResourceNotFoundError:
                return
            try:
                client.delete_secret(owner.namespace, secret_name, uid=current.uid)
            except ResourceNotFoundError:
                # Deleted by another writer since the fetch.
                return
            logger.info(
                "Deleted empty remote cluster API keys secret",
                extra={"namespace": owner.namespace, "es_name": owner.name},
            )
            return

        annotation = json.dumps(self.aliases, sort_keys=True, separators=(",", ":"))
        data = {
            credentials_setting_name(alias): encoded.encode(_ENCODING, _ERRORS)
            for alias, encoded in self.keys.items()
        }
        expected = Secret(
            name=secret_name,
            namespace=owner.namespace,
            labels=with_credentials_label(cluster_labels(owner.name)),
            annotations={ALIASES_ANNOTATION_NAME: annotation},
            data=data,
        )
        reconcile_secret(client, expected, owner.owner_reference(), retry_attempts=retry_attempts)


def _parse_aliases(raw: str, resource: str) -> dict[str, str]:
    try:
        aliases = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedAnnotationError(resource, e.msg) from e
    if aliases is None:
        return {}
    if not isinstance(aliases, dict):
        raise MalformedAnnotationError(
            resource, f"expected a JSON object, got {type(aliases).__name__}"
        )
    for alias, key_id in aliases.items():
        if not isinstance(key_id, str):
            raise MalformedAnnotationError(resource, f"key ID of alias '{alias}' is not a string")
    return aliases


def load_api_key_store(client: ResourceClient, owner: Elasticsearch) -> APIKeyStore:
    """
    Load the remote cluster API keys of ``owner`` from its Secret.

    A missing Secret yields an empty store. Data entries that are not
    ``cluster.remote.<alias>.credentials`` settings are skipped.

    Raises:
        MalformedAnnotationError: The aliases annotation is not a JSON object of strings
        ResourceStoreError: Any store failure other than a missing Secret
    """
    secret_name = remote_api_keys_secret_name(owner.name)
    try:
        secret = client.get_secret(owner.namespace, secret_name)
    except ResourceNotFoundError:
        logger.debug(
            "No remote cluster API keys secret found",
            extra={"namespace": owner.namespace, "es_name": owner.name},
        )
        return APIKeyStore()

    aliases: dict[str, str] = {}
    raw_aliases = secret.annotations.get(ALIASES_ANNOTATION_NAME)
    if raw_aliases is not None:
        aliases = _parse_aliases(raw_aliases, secret.namespaced_name)

    keys: dict[str, str] = {}
    for setting_name, encoded_key in secret.data.items():
        match = CREDENTIALS_SETTING_PATTERN.fullmatch(setting_name)
        if match is None:
            logger.debug(
                "Unknown remote cluster credential setting: %s",
                setting_name,
                extra={"namespace": owner.namespace, "es_name": owner.name},
            )
            continue
        keys[match.group(1)] = encoded_key.decode(_ENCODING, _ERRORS)

    return APIKeyStore(aliases=aliases, keys=keys)
