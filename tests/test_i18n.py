import json

import pytest

from backoffice.i18n import DEFAULT_LOCALE, LOCALES, LanguagePreference, Translator, load_bundle


def test_placeholders_are_filled():
    t = Translator("en").t
    assert t("validation.required.field", field="Title") == "Title is required"
    assert t("common.pageOf", page=2, total=5) == "Page 2 of 5"


def test_missing_placeholder_values_stay_visible():
    assert Translator("en").t("validation.number.min", field="Price") == "Price must be at least {{min}}"


def test_unknown_key_returns_the_key():
    assert Translator("en").t("no.such.key") == "no.such.key"


def test_partial_bundle_falls_back_to_default_language():
    t = Translator("th").t
    assert t("common.save") == "บันทึก"
    assert t("toast.product.create.success") == Translator(DEFAULT_LOCALE).t("toast.product.create.success")


def test_unsupported_language_uses_default():
    assert Translator("fr").language == DEFAULT_LOCALE


def test_change_language_is_remembered(tmp_path):
    prefs = LanguagePreference(str(tmp_path / "prefs.json"))
    translator = Translator(preference=prefs)
    assert translator.language == DEFAULT_LOCALE

    translator.change_language("en")
    assert json.loads((tmp_path / "prefs.json").read_text())["currLng"] == "en"
    assert Translator(preference=prefs).language == "en"


def test_change_language_rejects_unknown():
    with pytest.raises(ValueError):
        Translator("en").change_language("de")


def test_corrupt_preference_file_reads_as_default(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json")
    assert LanguagePreference(str(path)).load() == DEFAULT_LOCALE


def _leaves(node, prefix=""):
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from _leaves(value, path)
        else:
            yield path


def test_english_and_chinese_bundles_have_the_same_keys():
    assert set(_leaves(load_bundle("en"))) == set(_leaves(load_bundle("zh")))


def test_every_bundle_loads():
    for lang in LOCALES:
        assert load_bundle(lang)
