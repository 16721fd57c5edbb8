from __future__ import annotations

import json
import logging
import os
from typing import Any

import bcrypt

from coachdesk.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CENTER_NAME = "My Coaching Center"
DEFAULT_PASSWORD = "admin123"  # first-run password, change it from Settings
MIN_PASSWORD_LENGTH = 4


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash in the settings file
        return False


class SettingsStore:
    """
    Center name and dashboard password, kept in a small JSON file.

    The file is created on first use with the default center name and a
    bcrypt hash of the default password.
    """

    def __init__(self, path: str):
        self.path = path
        self._data = self._read()

    def _read(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Could not read settings from %s: %s", self.path, e)
                data = {}
        if not isinstance(data, dict):
            data = {}

        changed = False
        if not data.get("center_name"):
            data["center_name"] = DEFAULT_CENTER_NAME
            changed = True
        if not data.get("password_hash"):
            data["password_hash"] = hash_password(DEFAULT_PASSWORD)
            changed = True
        if changed:
            self._write(data)
        return data

    def _write(self, data: dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = f"{self.path}.tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp, self.path)

    @property
    def center_name(self) -> str:
        return self._data["center_name"]

    def set_center_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Center name cannot be empty")
        self._data["center_name"] = name
        self._write(self._data)
        return name

    def verify_password(self, password: str) -> bool:
        return check_password(password or "", self._data["password_hash"])

    def change_password(self, old_password: str, new_password: str) -> None:
        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if not self.verify_password(old_password):
            raise ValidationError("Current password is incorrect")
        self._data["password_hash"] = hash_password(new_password)
        self._write(self._data)
        logger.info("Dashboard password changed")
