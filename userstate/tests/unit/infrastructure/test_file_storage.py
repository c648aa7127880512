"""
Unit tests for JsonFilePreferenceStorage.

Uses pytest's tmp_path; no shared filesystem state.
"""

import json
from pathlib import Path

import pytest

from userstate.domain.shared.errors import DecodeError, StorageError
from userstate.domain.user.models import ThemeBrand, UserState
from userstate.infrastructure.datastore.file_storage import JsonFilePreferenceStorage
from userstate.infrastructure.datastore.preference_store import PreferenceStore


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "user_preferences.json"


class TestJsonFilePreferenceStorage:
    @pytest.mark.asyncio
    async def test_missing_file_reads_as_empty(self, prefs_path: Path) -> None:
        storage = JsonFilePreferenceStorage(prefs_path)

        assert await storage.read() is None

    @pytest.mark.asyncio
    async def test_write_then_read(self, prefs_path: Path) -> None:
        storage = JsonFilePreferenceStorage(prefs_path)
        record = {"is_onboarding_complete": True, "theme_brand": "ALTERNATE_BRAND"}

        await storage.write(record)

        assert await storage.read() == record
        assert json.loads(prefs_path.read_text(encoding="utf-8")) == record

    @pytest.mark.asyncio
    async def test_write_replaces_whole_record_and_leaves_no_temp_files(
        self, prefs_path: Path
    ) -> None:
        storage = JsonFilePreferenceStorage(prefs_path)

        await storage.write({"is_authenticated": True, "user_id": "u1"})
        await storage.write({"is_authenticated": False})

        assert await storage.read() == {"is_authenticated": False}
        assert [p.name for p in prefs_path.parent.iterdir()] == [prefs_path.name]

    @pytest.mark.asyncio
    async def test_malformed_json_raises_decode_error(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("{not json", encoding="utf-8")
        storage = JsonFilePreferenceStorage(prefs_path)

        with pytest.raises(DecodeError):
            await storage.read()

    @pytest.mark.asyncio
    async def test_non_object_json_raises_decode_error(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("[1, 2, 3]", encoding="utf-8")
        storage = JsonFilePreferenceStorage(prefs_path)

        with pytest.raises(DecodeError):
            await storage.read()

    @pytest.mark.asyncio
    async def test_unwritable_location_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        storage = JsonFilePreferenceStorage(blocker / "user_preferences.json")

        with pytest.raises(StorageError):
            await storage.write({"is_authenticated": True})


class TestPreferenceStoreOnFile:
    @pytest.mark.asyncio
    async def test_state_survives_store_restart(self, prefs_path: Path) -> None:
        first = PreferenceStore(JsonFilePreferenceStorage(prefs_path))
        await first.set_onboarding_complete(True)
        await first.set_theme_brand(ThemeBrand.ALTERNATE_BRAND)

        restarted = PreferenceStore(JsonFilePreferenceStorage(prefs_path))

        assert await restarted.observe().first() == UserState(
            onboarding_complete=True, theme_brand=ThemeBrand.ALTERNATE_BRAND
        )

    @pytest.mark.asyncio
    async def test_corrupt_file_yields_defaults(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("\x00garbage", encoding="utf-8")
        store = PreferenceStore(JsonFilePreferenceStorage(prefs_path))

        assert await store.observe().first() == UserState.default()

    @pytest.mark.asyncio
    async def test_write_after_corruption_repairs_file(self, prefs_path: Path) -> None:
        prefs_path.parent.mkdir(parents=True)
        prefs_path.write_text("{broken", encoding="utf-8")
        store = PreferenceStore(JsonFilePreferenceStorage(prefs_path))
        await store.observe().first()

        await store.set_authenticated(True)

        assert json.loads(prefs_path.read_text(encoding="utf-8"))["is_authenticated"] is True
