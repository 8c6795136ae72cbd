"""Runtime settings for sort-state handling.

Small dataclass of toggles shared by controllers and the CLI. A default
instance lives on the class; hosts and tests may replace it or pass their
own instance to a controller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from tablesorter.config import settings


@dataclass
class SettingsService:
    """Runtime settings.

    Attributes:
        persist_sort_state: When True (default), controllers restore and save
            the sort specification through their store.
        storage_key_prefix: Prefix joined with the table id to form the
            storage key.
        state_dir: Directory used by the file-backed store.
    """

    instance: ClassVar["SettingsService"]

    persist_sort_state: bool = True
    storage_key_prefix: str = settings.STORAGE_KEY_PREFIX
    state_dir: str = settings.DATA_DIR

    def storage_key(self, table_id: str) -> str:
        return f"{self.storage_key_prefix}{table_id}"


SettingsService.instance = SettingsService()
