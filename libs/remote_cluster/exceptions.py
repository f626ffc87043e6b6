"""
Remote Cluster Keys Exception Hierarchy.

Exception hierarchy:
    RemoteClusterKeysError (base)
    ├── MalformedAnnotationError - Alias annotation is not a JSON object of strings
    └── InvalidAliasError - Alias unusable in a credentials setting name

Store failures are not wrapped: they surface as libs.k8s.exceptions errors,
exactly as the resource client raised them.
"""


class RemoteClusterKeysError(Exception):
    """
    Base exception for credential index errors.

    Attributes:
        resource: Namespaced name of the backing Secret
        message: Human-readable error message (MUST NOT include credentials)
    """

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.message = message

    def __str__(self) -> str:
        if self.resource:
            return f"{self.message} (resource: {self.resource})"
        return self.message


class MalformedAnnotationError(RemoteClusterKeysError, ValueError):
    """
    Raised when the alias annotation of the backing Secret cannot be parsed.

    The annotation must be a JSON object mapping alias to API key ID. No
    partial parse is attempted; the original decode error is chained.

    Example:
        >>> load_api_key_store(client, es)
        MalformedAnnotationError: Invalid remote cluster keys annotation: Expecting value
                                  (resource: default/quickstart-es-remote-api-keys)
    """

    def __init__(self, resource: str, reason: str) -> None:
        if not isinstance(reason, str) or not reason:
            raise TypeError("reason must be a non-empty string")
        super().__init__(
            message=f"Invalid remote cluster keys annotation: {reason}",
            resource=resource,
        )


class InvalidAliasError(RemoteClusterKeysError, ValueError):
    """
    Raised when an alias cannot name a ``cluster.remote.<alias>.credentials`` setting.

    Aliases are limited to ASCII letters, digits, ``_`` and ``-``; anything
    else would be written but never read back.
    """

    def __init__(self, alias: object) -> None:
        super().__init__(
            message=f"Invalid remote cluster alias {alias!r}: expected letters, digits, '_' or '-'",
        )
        self.alias = alias
