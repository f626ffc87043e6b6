"""Naming and labeling conventions for objects owned by an Elasticsearch cluster."""

CLUSTER_NAME_LABEL = "elasticsearch.k8s.elastic.co/cluster-name"
TYPE_LABEL = "common.k8s.elastic.co/type"
TYPE_LABEL_VALUE = "elasticsearch"
CREDENTIALS_LABEL = "eck.k8s.elastic.co/credentials"

_ES_SUFFIX = "es"
_REMOTE_API_KEYS_SUFFIX = "remote-api-keys"


def remote_api_keys_secret_name(es_name: str) -> str:
    """
    Name of the Secret holding the remote cluster API keys of ``es_name``.

    Example:
        >>> remote_api_keys_secret_name("quickstart")
        'quickstart-es-remote-api-keys'
    """
    return f"{es_name}-{_ES_SUFFIX}-{_REMOTE_API_KEYS_SUFFIX}"


def cluster_labels(es_name: str) -> dict[str, str]:
    """Labels identifying objects that belong to the cluster ``es_name``."""
    return {
        CLUSTER_NAME_LABEL: es_name,
        TYPE_LABEL: TYPE_LABEL_VALUE,
    }


def with_credentials_label(labels: dict[str, str]) -> dict[str, str]:
    """Return a copy of ``labels`` marking the object as holding credentials."""
    return {**labels, CREDENTIALS_LABEL: "true"}
