"""
Remote cluster API keys for Elasticsearch clusters.

Quick Start:
    >>> from libs.k8s import create_resource_client
    >>> from libs.remote_cluster import Elasticsearch, load_api_key_store
    >>> client = create_resource_client()
    >>> es = Elasticsearch(name="quickstart", namespace="default", uid="...")
    >>> store = load_api_key_store(client, es)
    >>> store.update("prod", "abc123", "ZW5jb2RlZA==").save(client, es)
    >>> keystore = with_remote_cluster_api_keys(client, es)
"""

from libs.remote_cluster.api_key_store import (
    ALIASES_ANNOTATION_NAME,
    APIKeyStore,
    credentials_setting_name,
    load_api_key_store,
)
from libs.remote_cluster.exceptions import (
    InvalidAliasError,
    MalformedAnnotationError,
    RemoteClusterKeysError,
)
from libs.remote_cluster.keystore import (
    ExtendedKeystore,
    HasKeystore,
    secure_settings_of,
    with_remote_cluster_api_keys,
)
from libs.remote_cluster.models import Elasticsearch, KeyToPath, SecretSource
from libs.remote_cluster.naming import remote_api_keys_secret_name
from libs.remote_cluster.reconcile import ReconcileResult, RemoteClusterKey, reconcile_api_keys

__all__ = [
    # Credential index
    "APIKeyStore",
    "load_api_key_store",
    "credentials_setting_name",
    "ALIASES_ANNOTATION_NAME",
    # Reconciliation pass
    "RemoteClusterKey",
    "ReconcileResult",
    "reconcile_api_keys",
    # Keystore composition
    "ExtendedKeystore",
    "HasKeystore",
    "secure_settings_of",
    "with_remote_cluster_api_keys",
    # Models
    "Elasticsearch",
    "SecretSource",
    "KeyToPath",
    "remote_api_keys_secret_name",
    # Exceptions
    "RemoteClusterKeysError",
    "MalformedAnnotationError",
    "InvalidAliasError",
]
