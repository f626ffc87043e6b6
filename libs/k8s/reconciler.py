"""
Reconcile-to-desired-state for Secrets.

``reconcile_secret`` makes the stored Secret converge on an expected one:

    - absent → create it
    - present but different → update it, merging labels/annotations (extra
      keys set by other controllers or users are preserved) and replacing data
    - present and matching → no write

The expected object's owner reference is set as the controller reference.
Updates carry the fetched resourceVersion, so a concurrent writer causes a
ResourceConflictError; the whole get/compare/write cycle is then retried.
"""

import copy
import logging

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from libs.k8s.client import ResourceClient
from libs.k8s.exceptions import ResourceConflictError, ResourceNotFoundError
from libs.k8s.models import OwnerReference, Secret

logger = logging.getLogger(__name__)


def _is_subset(expected: dict[str, str], actual: dict[str, str]) -> bool:
    return all(key in actual and actual[key] == value for key, value in expected.items())


def _with_controller_reference(
    references: list[OwnerReference], owner: OwnerReference
) -> list[OwnerReference]:
    # Only one controller reference is allowed per object.
    kept = [ref for ref in references if ref.uid != owner.uid and not ref.controller]
    return [*kept, owner]


def needs_update(expected: Secret, reconciled: Secret) -> bool:
    """Return True when the stored Secret must be rewritten to match ``expected``."""
    if not _is_subset(expected.labels, reconciled.labels):
        return True
    if not _is_subset(expected.annotations, reconciled.annotations):
        return True
    if expected.data != reconciled.data:
        return True
    return not all(ref in reconciled.owner_references for ref in expected.owner_references)


def _merge(expected: Secret, reconciled: Secret) -> Secret:
    merged = copy.deepcopy(reconciled)
    merged.labels = {**reconciled.labels, **expected.labels}
    merged.annotations = {**reconciled.annotations, **expected.annotations}
    merged.data = dict(expected.data)
    for ref in expected.owner_references:
        merged.owner_references = _with_controller_reference(merged.owner_references, ref)
    return merged


def reconcile_secret(
    client: ResourceClient,
    expected: Secret,
    owner: OwnerReference | None = None,
    retry_attempts: int = 3,
) -> Secret:
    """
    Create or update ``expected`` so the store matches it.

    Args:
        client: Resource store to reconcile against
        expected: Desired Secret (``uid``/``resource_version`` are ignored)
        owner: Controller owner reference to set on the Secret
        retry_attempts: Attempts for the full cycle on ResourceConflictError

    Returns:
        The Secret as stored after reconciliation

    Raises:
        ResourceConflictError: Still conflicting after ``retry_attempts``
        ResourceStoreError: Any other store failure (propagated unmodified)
    """
    desired = copy.deepcopy(expected)
    desired.uid = ""
    desired.resource_version = ""
    if owner is not None:
        desired.owner_references = _with_controller_reference(desired.owner_references, owner)

    for attempt in Retrying(
        stop=stop_after_attempt(max(1, retry_attempts)),
        wait=wait_exponential(multiplier=0.1, max=2),
        retry=retry_if_exception_type(ResourceConflictError),
        reraise=True,
    ):
        with attempt:
            try:
                reconciled = client.get_secret(desired.namespace, desired.name)
            except ResourceNotFoundError:
                logger.info(
                    "Creating secret",
                    extra={"resource": desired.namespaced_name},
                )
                return client.create_secret(desired)

            if not needs_update(desired, reconciled):
                return reconciled

            logger.info(
                "Updating secret",
                extra={"resource": desired.namespaced_name},
            )
            return client.update_secret(_merge(desired, reconciled))
    raise AssertionError("unreachable")  # pragma: no cover
