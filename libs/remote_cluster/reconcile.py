"""
One reconciliation pass over the remote cluster API keys of a cluster.

The caller states which remote clusters the cluster should hold keys for;
the pass loads the current index, drops aliases no longer wanted, records new
or rotated keys, and saves. Store errors propagate so the caller's
reconciliation loop can requeue the whole pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from libs.common.logging import ReconcileContext, log_with_context
from libs.k8s.client import ResourceClient
from libs.remote_cluster.api_key_store import APIKeyStore, load_api_key_store
from libs.remote_cluster.models import Elasticsearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteClusterKey:
    """A cross-cluster API key issued for one remote cluster alias."""

    alias: str
    key_id: str
    encoded: str = field(repr=False)


@dataclass(frozen=True)
class ReconcileResult:
    store: APIKeyStore
    added: tuple[str, ...] = ()
    rotated: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.rotated or self.removed)


def reconcile_api_keys(
    client: ResourceClient,
    es: Elasticsearch,
    expected: Iterable[RemoteClusterKey],
    retry_attempts: int = 3,
    reconcile_id: str | None = None,
) -> ReconcileResult:
    """
    Make the remote API keys Secret of ``es`` hold exactly ``expected``.

    Raises:
        MalformedAnnotationError: The stored aliases annotation is unreadable
        ResourceStoreError: Any store failure other than a missing Secret
    """
    wanted = {key.alias: key for key in expected}

    with ReconcileContext(reconcile_id):
        store = load_api_key_store(client, es)

        removed = tuple(sorted(alias for alias in store.aliases if alias not in wanted))
        for alias in removed:
            store.delete(alias)

        added: list[str] = []
        rotated: list[str] = []
        for alias, key in sorted(wanted.items()):
            if alias not in store:
                added.append(alias)
            elif (
                store.key_id_for(alias) != key.key_id
                or store.credential_for(alias) != key.encoded
            ):
                rotated.append(alias)
            else:
                continue
            store.update(alias, key.key_id, key.encoded)

        store.save(client, es, retry_attempts=retry_attempts)

        log_with_context(
            logger,
            "INFO",
            "Reconciled remote cluster API keys",
            namespace=es.namespace,
            es_name=es.name,
            added=added,
            rotated=rotated,
            removed=list(removed),
            aliases=len(store),
        )
        return ReconcileResult(
            store=store,
            added=tuple(added),
            rotated=tuple(rotated),
            removed=removed,
        )
