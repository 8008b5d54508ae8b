"""Wire schemas shared across the node access layer."""

from node_service.core.schemas.base import CustomBase
from node_service.core.schemas.inputs import FilterInput, FilterParam, SortInput, SortParam

__all__ = [
    "CustomBase",
    "FilterInput",
    "FilterParam",
    "SortInput",
    "SortParam",
]
