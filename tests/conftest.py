"""
Shared fixtures for remote cluster keys tests.

Provides:
1. An in-memory resource store per test
2. An Elasticsearch owner with a UID (so owner references are set)
3. A helper to seed the backing Secret directly
"""

from collections.abc import Callable

import pytest

from libs.k8s.memory_backend import InMemoryResourceClient
from libs.k8s.models import Secret
from libs.remote_cluster.api_key_store import ALIASES_ANNOTATION_NAME
from libs.remote_cluster.models import Elasticsearch
from libs.remote_cluster.naming import remote_api_keys_secret_name


@pytest.fixture()
def memory_client() -> InMemoryResourceClient:
    """Empty in-memory resource store."""
    return InMemoryResourceClient()


@pytest.fixture()
def es() -> Elasticsearch:
    """Elasticsearch owner in the default namespace."""
    return Elasticsearch(
        name="quickstart",
        namespace="default",
        uid="8a7c1f0e-3b0b-4a52-9f1e-2a7d9d7a1c11",
    )


@pytest.fixture()
def seed_keys_secret(
    memory_client: InMemoryResourceClient, es: Elasticsearch
) -> Callable[..., Secret]:
    """Create the backing Secret of ``es`` with the given annotation and data."""

    def _seed(annotation: str | None = None, data: dict[str, bytes] | None = None) -> Secret:
        annotations = {} if annotation is None else {ALIASES_ANNOTATION_NAME: annotation}
        return memory_client.create_secret(
            Secret(
                name=remote_api_keys_secret_name(es.name),
                namespace=es.namespace,
                annotations=annotations,
                data=data or {},
            )
        )

    return _seed
