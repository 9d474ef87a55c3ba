from typing import Mapping, Optional

from backoffice.forms.state import FormState
from backoffice.schemas import LANGUAGES


def ensure_lang_field(value: Optional[Mapping[str, str]]) -> dict:
    value = value or {}
    return {lang: value.get(lang) or "" for lang in LANGUAGES}


class LocalizedFieldGroup:
    """
    One labelled field rendered as a zh/en/th input triple.

    Errors raised on any language sub-field surface in the single ``error``
    slot of the group.
    """

    def __init__(self, form: FormState, name: str, label_key: str):
        self.form = form
        self.name = name
        self.label_key = label_key

    def path(self, lang: str) -> str:
        return f"{self.name}.{lang}"

    @property
    def values(self) -> dict:
        return ensure_lang_field(self.form.get_value(self.name))

    def set(self, lang: str, value: str):
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported language: {lang}")
        self.form.set_value(self.path(lang), value, should_dirty=True, should_touch=True, should_validate=True)

    @property
    def error(self) -> Optional[str]:
        return self.form.error_for(self.name)
