"""Partial Update — pure helpers that turn a request body into a store change set.

Invariants:
    - Only fields the client actually sent are written (absent != null)
    - Unknown keys never reach the store
    - An empty change set raises BadInputError; the store is never called with nothing to write
"""

from collections.abc import Iterable, Mapping
from typing import Any

from tinta_fresca.core.errors import BadInputError


def collect_changes(
    sent: Mapping[str, Any], allowed: Iterable[str],
) -> dict[str, Any]:
    """Return the subset of `sent` restricted to `allowed` keys.

    `sent` is expected to come from model_dump(exclude_unset=True), so a field
    explicitly set to None is kept (clears the column) while an omitted one is not.
    """
    allowed = tuple(allowed)
    changes = {key: value for key, value in sent.items() if key in allowed}
    if not changes:
        raise BadInputError(
            "No fields provided to update", fields=list(allowed),
        )
    return changes


def missing_fields(
    payload: Mapping[str, Any], required: Iterable[str],
) -> list[str]:
    """Required keys that are absent, None, or blank strings."""
    missing = []
    for key in required:
        value = payload.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing
