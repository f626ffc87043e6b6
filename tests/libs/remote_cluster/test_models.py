"""Tests for naming conventions, owner models and credential index exceptions."""

import pytest

from libs.remote_cluster.exceptions import MalformedAnnotationError, RemoteClusterKeysError
from libs.remote_cluster.models import Elasticsearch
from libs.remote_cluster.naming import (
    CLUSTER_NAME_LABEL,
    CREDENTIALS_LABEL,
    TYPE_LABEL,
    cluster_labels,
    remote_api_keys_secret_name,
    with_credentials_label,
)


class TestNaming:
    @pytest.mark.unit()
    def test_secret_name(self) -> None:
        assert remote_api_keys_secret_name("quickstart") == "quickstart-es-remote-api-keys"

    @pytest.mark.unit()
    def test_labels(self) -> None:
        labels = with_credentials_label(cluster_labels("quickstart"))

        assert labels == {
            CLUSTER_NAME_LABEL: "quickstart",
            TYPE_LABEL: "elasticsearch",
            CREDENTIALS_LABEL: "true",
        }

    @pytest.mark.unit()
    def test_with_credentials_label_copies(self) -> None:
        base = {"a": "b"}

        with_credentials_label(base)

        assert base == {"a": "b"}


class TestElasticsearch:
    @pytest.mark.unit()
    def test_owner_reference(self, es: Elasticsearch) -> None:
        ref = es.owner_reference()

        assert ref is not None
        assert ref.uid == es.uid
        assert ref.kind == "Elasticsearch"
        assert ref.api_version == "elasticsearch.k8s.elastic.co/v1"
        assert ref.controller
        assert ref.block_owner_deletion

    @pytest.mark.unit()
    def test_no_owner_reference_without_uid(self) -> None:
        assert Elasticsearch(name="a", namespace="b").owner_reference() is None

    @pytest.mark.unit()
    def test_namespaced_name(self, es: Elasticsearch) -> None:
        assert es.namespaced_name == "default/quickstart"


class TestMalformedAnnotationError:
    @pytest.mark.unit()
    def test_message_and_resource(self) -> None:
        error = MalformedAnnotationError("default/keys", "Expecting value")

        assert str(error) == (
            "Invalid remote cluster keys annotation: Expecting value (resource: default/keys)"
        )
        assert isinstance(error, RemoteClusterKeysError)
        assert isinstance(error, ValueError)

    @pytest.mark.unit()
    def test_reason_required(self) -> None:
        with pytest.raises(TypeError):
            MalformedAnnotationError("default/keys", "")

    @pytest.mark.unit()
    def test_base_without_resource(self) -> None:
        assert str(RemoteClusterKeysError("boom")) == "boom"
