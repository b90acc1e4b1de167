from collections.abc import Iterable, Mapping
from typing import Any

from linkredirect.types import Params


def merge_params(
    payload: Mapping[str, Any] | None,
    query: Mapping[str, Any],
    exclude: Iterable[str] = (),
) -> Params:
    """Combine query parameters with decoded payload parameters

    Query parameters form the base; payload parameters override them on key
    collision. Excluded keys are removed whichever source contributed them.
    Neither input is mutated.

    Example:
        >>> merge_params({'foo': 'bar'}, {'foo': 'query', 'baz': '1'})
        {'foo': 'bar', 'baz': '1'}
    """
    merged = dict(query)
    if payload is not None:
        merged.update(payload)

    for key in exclude:
        merged.pop(key, None)

    return merged
