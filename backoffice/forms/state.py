import copy
from typing import Any, Callable, Dict, Mapping, Optional, Set

Validator = Callable[[Mapping[str, Any]], Dict[str, str]]

_MISSING = object()


def get_path(data, path: str, default=None):
    node = data
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return default
        node = node[part]
    return node


def set_path(data: dict, path: str, value):
    parts = path.split(".")
    node = data
    for part in parts[:-1]:
        if not isinstance(node.get(part), dict):
            node[part] = {}
        node = node[part]
    node[parts[-1]] = value


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + ".")


class FormState:
    """
    Values of one form plus the bookkeeping the widgets need.

    Paths are dotted (``product_detail.origin.zh``). A path is dirty while
    its value differs from the default it was loaded with. ``validator``
    maps the full value tree to ``{path: message}``.
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None, validator: Optional[Validator] = None):
        self.validator = validator
        self.reset(defaults)

    def reset(self, defaults: Optional[Mapping[str, Any]] = None):
        self.defaults = copy.deepcopy(dict(defaults or {}))
        self.values = copy.deepcopy(self.defaults)
        self.dirty: Set[str] = set()
        self.touched: Set[str] = set()
        self.errors: Dict[str, str] = {}

    def get_value(self, path: str, default=None):
        return get_path(self.values, path, default)

    def set_value(self, path: str, value, should_dirty=False, should_touch=False, should_validate=False):
        set_path(self.values, path, value)
        if should_dirty:
            if get_path(self.defaults, path, _MISSING) == value:
                self.dirty.discard(path)
            else:
                self.dirty.add(path)
        if should_touch:
            self.touched.add(path)
        if should_validate:
            self.validate(path)

    @property
    def is_dirty(self):
        return bool(self.dirty)

    def dirty_fields(self) -> dict:
        """Dirty paths as a nested tree with ``True`` leaves."""
        tree: dict = {}
        for path in sorted(self.dirty):
            set_path(tree, path, True)
        return tree

    def validate(self, path: Optional[str] = None) -> bool:
        """Re-run the validator; with ``path`` only errors under it are replaced."""
        if self.validator is None:
            return True
        found = self.validator(self.values)
        if path is None:
            self.errors = dict(found)
            return not self.errors
        self.errors = {p: m for p, m in self.errors.items() if not _under(p, path)}
        self.errors.update({p: m for p, m in found.items() if _under(p, path)})
        return not any(_under(p, path) for p in self.errors)

    def set_error(self, path: str, message: str):
        self.errors[path] = message

    def error_for(self, path: str) -> Optional[str]:
        """First error at ``path`` or anywhere beneath it."""
        for p in sorted(self.errors):
            if _under(p, path):
                return self.errors[p]
        return None
