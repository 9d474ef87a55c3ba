"""Conversions between a table's sort state and the API's sort parameters."""
from typing import Dict, List, Optional

from backoffice.schemas import SortOrder


def to_api_sorting(sorting: List[Dict]) -> Dict[str, str]:
    """``[{"id": column, "desc": bool}, ...]`` to ``{sort_by, order}``; only the first column counts."""
    if not sorting:
        return {}
    first = sorting[0]
    return {
        "sort_by": first["id"],
        "order": SortOrder.DESC.value if first.get("desc") else SortOrder.ASC.value,
    }


def from_api_sorting(params: Optional[Dict]) -> List[Dict]:
    if not params or not params.get("sort_by"):
        return []
    return [{"id": params["sort_by"], "desc": params.get("order") == SortOrder.DESC.value}]


def page_count(total, limit):
    if not total or not limit:
        return 1
    return max(1, -(-int(total) // int(limit)))
