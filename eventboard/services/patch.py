from typing import Any, Iterable, Mapping

from pydantic import BaseModel


def patch_fields(patch: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    """
    Fields present in a sparse patch, with their values.

    For a pydantic model that is whatever the client sent, explicit nulls
    included; for a mapping, every key present.
    """
    if isinstance(patch, BaseModel):
        return patch.model_dump(exclude_unset=True)
    return dict(patch)


def merge_patch(
        current: Mapping[str, Any],
        patch: BaseModel | Mapping[str, Any],
        writable: Iterable[str]
) -> dict[str, Any]:
    """
    Compute the next persisted state of a record.

    A field present in `patch` (even as None) overwrites the stored value, an
    absent one keeps it. Fields outside `writable` are never taken from the
    patch.

    Args:
        current: Stored field values
        patch: Sparse set of requested changes
        writable: Names of fields a client may change

    Returns:
        New dict; `current` is left untouched
    """
    writable = frozenset(writable)
    merged = dict(current)

    for field, value in patch_fields(patch).items():
        if field in writable:
            merged[field] = value

    return merged
