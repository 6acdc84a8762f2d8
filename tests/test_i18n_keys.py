import json
import os
from pr_triage.i18n import LOCALES_DIR, available_languages, get_active_language, set_language, t
def _flatten(node, prefix=""):
    keys = set()
    for key, value in node.items():
        full = f"{prefix}{key}"
        if isinstance(value, dict):
            keys |= _flatten(value, full + ".")
        else:
            keys.add(full)
    return keys
def _keys(lang):
    with open(os.path.join(LOCALES_DIR, f"{lang}.json"), encoding="utf-8") as f:
        return _flatten(json.load(f))
def test_report_i18n_keys():
    set_language('en')
    assert t("report.labels.pull_request_id") == "Pull request ID"
    assert t("report.none") == "none"
    assert t("report.outcome.assigned", author="alice") == "Assigned the pull request to its author (alice)."
    set_language('tr')
    try:
        assert t("report.labels.pull_request_id") == "Pull request kimliği"
        assert t("report.labels.title") == "Başlık"
        assert t("report.none") == "yok"
        assert t("report.outcome.assigned", author="alice") == "Pull request yazarına (alice) atandı."
    finally:
        set_language('en')
def test_catalogues_have_the_same_keys():
    assert set(available_languages()) >= {"en", "tr"}
    assert _keys("en") == _keys("tr")
def test_fallback_mechanism():
    missing_key = "report.labels.nonexistent_key"
    assert t(missing_key) == missing_key
def test_locale_names_are_normalized():
    assert set_language("tr_TR.UTF-8")
    try:
        assert get_active_language() == "tr"
    finally:
        set_language("en")
    assert not set_language("xx")
    assert get_active_language() == "en"
def test_list_entries_are_returned_as_lists():
    options = t("cli.options")
    assert isinstance(options, list)
    assert any("--action" in line for line in options)
