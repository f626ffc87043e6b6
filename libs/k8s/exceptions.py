"""
Resource Store Exception Hierarchy.

This module defines all exceptions raised by resource clients when reading or
writing namespaced Kubernetes objects (Secrets), giving the core a backend
independent vocabulary for store failures.

Exception hierarchy:
    ResourceStoreError (base)
    ├── ResourceNotFoundError - Object doesn't exist in the namespace
    ├── ResourceConflictError - Precondition or resourceVersion mismatch
    └── ResourceAccessError - Permission, authentication or transport failure

All exceptions carry the namespaced object name and backend type. They NEVER
include Secret data (credential material must not reach logs).
"""


class ResourceStoreError(Exception):
    """
    Base exception for all resource store errors.

    Attributes:
        resource: Namespaced name of the object (e.g., "default/quickstart-es-remote-api-keys")
        backend: Backend type ("kubernetes", "memory")
        message: Human-readable error message (MUST NOT include Secret data)

    Example:
        >>> try:
        ...     client.get_secret("default", "quickstart-es-remote-api-keys")
        ... except ResourceStoreError as e:
        ...     logger.error(f"Store error: {e.resource} ({e.backend})")
    """

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        backend: str | None = None,
    ) -> None:
        super().__init__(message)
        self.resource = resource
        self.backend = backend
        self.message = message

    def __str__(self) -> str:
        """
        Format error message with context (resource + backend).

        Example:
            >>> str(ResourceStoreError("Timeout", "ns/name", "kubernetes"))
            "Timeout (resource: ns/name, backend: kubernetes)"
        """
        context_parts = []
        if self.resource:
            context_parts.append(f"resource: {self.resource}")
        if self.backend:
            context_parts.append(f"backend: {self.backend}")

        if context_parts:
            context = ", ".join(context_parts)
            return f"{self.message} ({context})"
        return self.message


class ResourceNotFoundError(ResourceStoreError):
    """
    Raised when the requested object doesn't exist in the namespace.

    Callers in the remote cluster core treat this as a valid state ("no
    credentials configured") rather than a failure.
    """

    def __init__(
        self,
        resource: str,
        backend: str,
        additional_context: str | None = None,
    ) -> None:
        if not isinstance(resource, str) or not resource:
            raise TypeError("resource must be a non-empty string")
        if not isinstance(backend, str) or not backend:
            raise TypeError("backend must be a non-empty string")

        base_message = f"Resource '{resource}' not found in {backend.upper()}"
        if additional_context:
            base_message += f". {additional_context}"

        super().__init__(
            message=base_message,
            resource=resource,
            backend=backend,
        )


class ResourceConflictError(ResourceStoreError):
    """
    Raised when an optimistic-concurrency check fails.

    This covers a delete whose UID precondition no longer matches (the object
    was recreated) and an update carrying a stale resourceVersion.
    """

    def __init__(
        self,
        resource: str,
        backend: str,
        reason: str,
    ) -> None:
        if not isinstance(resource, str) or not resource:
            raise TypeError("resource must be a non-empty string")
        if not isinstance(backend, str) or not backend:
            raise TypeError("backend must be a non-empty string")
        if not isinstance(reason, str) or not reason:
            raise TypeError("reason must be a non-empty string")

        super().__init__(
            message=f"Conflict: {reason}",
            resource=resource,
            backend=backend,
        )


class ResourceAccessError(ResourceStoreError):
    """
    Raised when the API server rejects or cannot serve a request.

    Common causes: RBAC denies the verb on secrets, expired service account
    token, API server unreachable or timing out.
    """

    def __init__(
        self,
        resource: str,
        backend: str,
        reason: str,
    ) -> None:
        if not isinstance(resource, str) or not resource:
            raise TypeError("resource must be a non-empty string")
        if not isinstance(backend, str) or not backend:
            raise TypeError("backend must be a non-empty string")
        if not isinstance(reason, str) or not reason:
            raise TypeError("reason must be a non-empty string")

        super().__init__(
            message=f"Access failed: {reason}",
            resource=resource,
            backend=backend,
        )
