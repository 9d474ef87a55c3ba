from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from backoffice.forms.state import FormState, get_path


@dataclass(frozen=True)
class FieldChange:
    field_name: str
    original_value: str
    new_value: str


def _names(ids, records, id_key, name_key):
    by_id = {str(r.get(id_key)): r.get(name_key) for r in records or []}
    return [by_id.get(str(i)) or str(i) for i in ids]


def format_value(value, path: str = "", suppliers=None, tags=None) -> str:
    """Display form of a field value; lists become sorted comma-joined text."""
    if isinstance(value, (list, tuple)):
        if value and isinstance(value[0], Mapping) and "file_name" in value[0]:
            items = [img.get("file_name") or img.get("file_url") or str(img) for img in value]
        elif path in ("vendor_id", "supplier_id") and suppliers is not None:
            items = _names(value, suppliers, "supplier_id", "supplier_name")
        elif path == "tag_id" and tags is not None:
            items = _names(value, tags, "tag_id", "tag_name")
        else:
            items = [str(v) for v in value]
        return ", ".join(sorted(items))
    return "" if value is None else str(value)


def _walk(tree: Mapping, parent: str = "") -> Iterable[str]:
    for key, node in tree.items():
        path = f"{parent}.{key}" if parent else key
        if node is True:
            yield path
        elif isinstance(node, Mapping):
            yield from _walk(node, path)


def changes_from_dirty_fields(dirty_fields: Mapping, current: Mapping, original: Mapping,
                              suppliers=None, tags=None) -> List[FieldChange]:
    return [
        FieldChange(
            field_name=path,
            original_value=format_value(get_path(original, path), path, suppliers, tags),
            new_value=format_value(get_path(current, path), path, suppliers, tags),
        )
        for path in _walk(dirty_fields or {})
    ]


def get_actual_changes(form: FormState, original: Mapping, suppliers: Optional[list] = None,
                       tags: Optional[list] = None) -> List[FieldChange]:
    """Dirty fields whose displayed value really differs from the loaded product."""
    changes = changes_from_dirty_fields(form.dirty_fields(), form.values, original, suppliers, tags)
    return [c for c in changes if c.original_value != c.new_value]
