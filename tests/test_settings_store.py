from __future__ import annotations

import json

import pytest

from coachdesk.data.settings_store import DEFAULT_CENTER_NAME, DEFAULT_PASSWORD, SettingsStore
from coachdesk.errors import ValidationError


@pytest.fixture
def store(tmp_path):
    return SettingsStore(str(tmp_path / "nested" / "settings.json"))


def test_first_run_seeds_defaults(store):
    assert store.center_name == DEFAULT_CENTER_NAME
    assert store.verify_password(DEFAULT_PASSWORD)
    assert not store.verify_password("wrong")

    with open(store.path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["password_hash"] != DEFAULT_PASSWORD
    assert saved["password_hash"].startswith("$2")


def test_center_name_persists(store):
    store.set_center_name("  Bright Minds  ")
    assert SettingsStore(store.path).center_name == "Bright Minds"


def test_empty_center_name_rejected(store):
    with pytest.raises(ValidationError):
        store.set_center_name("   ")
    assert store.center_name == DEFAULT_CENTER_NAME


def test_change_password(store):
    store.change_password(DEFAULT_PASSWORD, "s3cret")
    reopened = SettingsStore(store.path)
    assert reopened.verify_password("s3cret")
    assert not reopened.verify_password(DEFAULT_PASSWORD)


def test_change_password_rules(store):
    with pytest.raises(ValidationError, match="at least 4"):
        store.change_password(DEFAULT_PASSWORD, "abc")
    with pytest.raises(ValidationError, match="incorrect"):
        store.change_password("nope", "abcd")
    assert store.verify_password(DEFAULT_PASSWORD)


def test_corrupt_file_is_reseeded(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    store = SettingsStore(str(path))
    assert store.center_name == DEFAULT_CENTER_NAME
    assert store.verify_password(DEFAULT_PASSWORD)


def test_malformed_hash_never_verifies(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"center_name": "X", "password_hash": "plain"}), encoding="utf-8")
    assert not SettingsStore(str(path)).verify_password("plain")
