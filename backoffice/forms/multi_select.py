from typing import List, Optional

from backoffice.forms.arrays import ensure_array, remove_item, safe_append
from backoffice.forms.state import FormState


class MultiSelectField:
    """A list-of-ids form field edited one item at a time."""

    def __init__(self, form: FormState, name: str):
        self.form = form
        self.name = name

    @property
    def items(self) -> List[str]:
        return ensure_array(self.form.get_value(self.name))

    def _update(self, items):
        self.form.set_value(self.name, items, should_dirty=True, should_touch=True, should_validate=True)

    def add_item(self, item: str):
        current = self.items
        if item in current:
            return
        self._update(safe_append(item, current))

    def remove_item(self, item: str):
        current = self.items
        if item not in current:
            return
        self._update(remove_item(item, current))

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    @property
    def error_message(self) -> Optional[str]:
        return self.form.error_for(self.name)
