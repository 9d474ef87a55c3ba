import json
import logging
import os
import re
from typing import Dict, Optional

from backoffice import config

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "zh"
LOCALES = ("zh", "en", "th")
LOCALES_DIR = os.path.join(os.path.dirname(__file__), "locales")

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_bundles: Dict[str, dict] = {}


def load_bundle(lang: str) -> dict:
    """Read a language bundle on first use; unknown languages give an empty bundle."""
    if lang not in _bundles:
        path = os.path.join(LOCALES_DIR, f"{lang}.json")
        if not os.path.exists(path):
            logger.warning("Language file for %s not found", lang)
            return {}
        with open(path, encoding="utf-8") as f:
            _bundles[lang] = json.load(f)
    return _bundles[lang]


def lookup(bundle: dict, key: str) -> Optional[str]:
    node = bundle
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


class LanguagePreference:
    """Last chosen language, kept in a small JSON file under ``currLng``."""

    def __init__(self, path: str = None):
        self.path = path or config.PREFS_PATH

    def load(self) -> str:
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f).get(config.LANGUAGE_KEY) or DEFAULT_LOCALE
        except (OSError, ValueError):
            return DEFAULT_LOCALE

    def save(self, lang: str):
        data = {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            pass
        data[config.LANGUAGE_KEY] = lang
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)


class Translator:
    def __init__(self, language: str = None, preference: LanguagePreference = None):
        self.preference = preference
        if language is None:
            language = preference.load() if preference else DEFAULT_LOCALE
        self.language = language if language in LOCALES else DEFAULT_LOCALE

    def t(self, key: str, **values) -> str:
        text = lookup(load_bundle(self.language), key)
        if text is None and self.language != DEFAULT_LOCALE:
            text = lookup(load_bundle(DEFAULT_LOCALE), key)
        if text is None:
            return key
        return _PLACEHOLDER.sub(lambda m: str(values.get(m.group(1), m.group(0))), text)

    __call__ = t

    def change_language(self, lang: str):
        if lang not in LOCALES:
            raise ValueError(f"Unsupported language: {lang}")
        self.language = lang
        if self.preference:
            self.preference.save(lang)
