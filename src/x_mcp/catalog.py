"""
Operation catalogue: every tool the server exposes, keyed by name.

The mapping is assembled once at import and is read-only afterwards.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from .categories import lists, trends, tweets, users
from .models.operation import OperationSpec


def build_catalog(*groups: Iterable[OperationSpec]) -> Mapping[str, OperationSpec]:
    """Merge operation groups into a read-only name -> spec mapping.

    Raises:
        ValueError: If two operations share a name
    """
    catalog = {}
    for group in groups:
        for spec in group:
            if spec.name in catalog:
                raise ValueError(f"Duplicate operation name: {spec.name}")
            catalog[spec.name] = spec
    return MappingProxyType(catalog)


CATALOG = build_catalog(
    tweets.OPERATIONS,
    users.OPERATIONS,
    trends.OPERATIONS,
    lists.OPERATIONS,
)
