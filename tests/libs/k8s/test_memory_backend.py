"""Tests for InMemoryResourceClient."""

import pytest

from libs.k8s.exceptions import ResourceConflictError, ResourceNotFoundError
from libs.k8s.memory_backend import InMemoryResourceClient
from libs.k8s.models import Secret


def _secret(**overrides) -> Secret:
    fields = {"name": "keys", "namespace": "default", "data": {"k": b"v"}}
    fields.update(overrides)
    return Secret(**fields)


class TestInMemoryResourceClientCrud:
    @pytest.mark.unit()
    def test_create_assigns_uid_and_version(self, memory_client: InMemoryResourceClient) -> None:
        created = memory_client.create_secret(_secret())

        assert created.uid
        assert created.resource_version
        assert memory_client.get_secret("default", "keys") == created

    @pytest.mark.unit()
    def test_create_existing_conflicts(self, memory_client: InMemoryResourceClient) -> None:
        memory_client.create_secret(_secret())

        with pytest.raises(ResourceConflictError):
            memory_client.create_secret(_secret())

    @pytest.mark.unit()
    def test_get_missing_raises_not_found(self, memory_client: InMemoryResourceClient) -> None:
        with pytest.raises(ResourceNotFoundError) as exc_info:
            memory_client.get_secret("default", "missing")

        assert exc_info.value.resource == "default/missing"
        assert exc_info.value.backend == "memory"

    @pytest.mark.unit()
    def test_namespaces_are_isolated(self, memory_client: InMemoryResourceClient) -> None:
        memory_client.create_secret(_secret(namespace="a"))

        with pytest.raises(ResourceNotFoundError):
            memory_client.get_secret("b", "keys")

    @pytest.mark.unit()
    def test_returned_objects_are_copies(self, memory_client: InMemoryResourceClient) -> None:
        created = memory_client.create_secret(_secret())
        created.data["k"] = b"mutated"

        assert memory_client.get_secret("default", "keys").data == {"k": b"v"}

    @pytest.mark.unit()
    def test_initial_secrets(self) -> None:
        client = InMemoryResourceClient(secrets=[_secret(name="a"), _secret(name="b")])

        assert client.get_secret("default", "a").name == "a"
        assert client.get_secret("default", "b").name == "b"


class TestInMemoryResourceClientConcurrency:
    @pytest.mark.unit()
    def test_update_bumps_version_keeps_uid(self, memory_client: InMemoryResourceClient) -> None:
        created = memory_client.create_secret(_secret())
        created.data = {"k": b"new"}

        updated = memory_client.update_secret(created)

        assert updated.uid == created.uid
        assert updated.resource_version != created.resource_version
        assert memory_client.get_secret("default", "keys").data == {"k": b"new"}

    @pytest.mark.unit()
    def test_update_stale_version_conflicts(self, memory_client: InMemoryResourceClient) -> None:
        first = memory_client.create_secret(_secret())
        memory_client.update_secret(first)

        with pytest.raises(ResourceConflictError, match="stale"):
            memory_client.update_secret(first)

    @pytest.mark.unit()
    def test_update_without_version_is_unconditional(
        self, memory_client: InMemoryResourceClient
    ) -> None:
        memory_client.create_secret(_secret())

        updated = memory_client.update_secret(_secret(data={"k": b"forced"}))

        assert updated.data == {"k": b"forced"}

    @pytest.mark.unit()
    def test_update_missing_raises_not_found(self, memory_client: InMemoryResourceClient) -> None:
        with pytest.raises(ResourceNotFoundError):
            memory_client.update_secret(_secret())

    @pytest.mark.unit()
    def test_delete_with_matching_uid(self, memory_client: InMemoryResourceClient) -> None:
        created = memory_client.create_secret(_secret())

        memory_client.delete_secret("default", "keys", uid=created.uid)

        with pytest.raises(ResourceNotFoundError):
            memory_client.get_secret("default", "keys")

    @pytest.mark.unit()
    def test_delete_recreated_secret_conflicts(
        self, memory_client: InMemoryResourceClient
    ) -> None:
        original = memory_client.create_secret(_secret())
        memory_client.delete_secret("default", "keys")
        memory_client.create_secret(_secret())

        with pytest.raises(ResourceConflictError, match="UID precondition"):
            memory_client.delete_secret("default", "keys", uid=original.uid)

        assert memory_client.get_secret("default", "keys").uid != original.uid

    @pytest.mark.unit()
    def test_delete_missing_raises_not_found(self, memory_client: InMemoryResourceClient) -> None:
        with pytest.raises(ResourceNotFoundError):
            memory_client.delete_secret("default", "keys")

    @pytest.mark.unit()
    def test_context_manager_keeps_contents(self) -> None:
        client = InMemoryResourceClient(secrets=[_secret()])

        with client as entered:
            assert entered is client

        assert client.get_secret("default", "keys").name == "keys"
