"""Tests for the SQLite character store and JSON import/export."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from pf_forge.core.exceptions import ValidationError
from pf_forge.models import Character
from pf_forge.storage.database import (
    CharacterStore,
    export_character_json,
    export_filename,
    get_character_store,
    import_character_json,
    parse_character,
    reset_character_store,
)


@pytest.fixture
def store(temp_db_path: Path) -> CharacterStore:
    """Provide a store backed by a temporary database."""
    return CharacterStore(temp_db_path)


def _renamed(character: Character, character_id: str, name: str) -> Character:
    return character.model_copy(update={"id": character_id, "name": name})


class TestCharacterStore:
    """Tests for CharacterStore."""

    def test_creates_database(self, temp_db_path: Path) -> None:
        """Test the parent directory and schema are created."""
        CharacterStore(temp_db_path)

        assert temp_db_path.exists()
        with sqlite3.connect(temp_db_path) as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert {"schema_version", "characters"} <= tables

    def test_save_and_get(self, store: CharacterStore, sample_character: Character) -> None:
        """Test a saved character loads back equal apart from updated_at."""
        saved = store.save_character(sample_character)

        loaded = store.get_character(sample_character.id)

        assert loaded == saved
        assert loaded.skills == sample_character.skills
        assert loaded.currency.gp == sample_character.currency.gp
        assert saved.updated_at > sample_character.updated_at

    def test_get_missing(self, store: CharacterStore) -> None:
        """Test an unknown id returns None."""
        assert store.get_character("char_missing") is None

    def test_resave_keeps_created_at(self, store: CharacterStore, sample_character: Character) -> None:
        """Test updating a character keeps its creation time."""
        first = store.save_character(sample_character)
        edited = first.model_copy(
            update={"name": "Valeros the Bold", "created_at": datetime(2030, 1, 1, tzinfo=timezone.utc)}
        )

        second = store.save_character(edited)

        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at
        assert store.get_character(sample_character.id).name == "Valeros the Bold"
        assert store.count() == 1

    def test_list_most_recent_first(self, store: CharacterStore, sample_character: Character) -> None:
        """Test listing orders by update time descending."""
        first = store.save_character(_renamed(sample_character, "char_aaaaaaaaaaaa", "Amiri"))
        store.save_character(_renamed(sample_character, "char_bbbbbbbbbbbb", "Kyra"))
        store.save_character(first)

        names = [character.name for character in store.list_characters()]

        assert names == ["Amiri", "Kyra"]

    def test_delete(self, store: CharacterStore, sample_character: Character) -> None:
        """Test deletion reports whether a row was removed."""
        store.save_character(sample_character)

        assert store.delete_character(sample_character.id) is True
        assert store.delete_character(sample_character.id) is False
        assert store.count() == 0

    def test_clear(self, store: CharacterStore, sample_character: Character) -> None:
        """Test clearing removes every character."""
        store.save_character(_renamed(sample_character, "char_aaaaaaaaaaaa", "Amiri"))
        store.save_character(_renamed(sample_character, "char_bbbbbbbbbbbb", "Kyra"))

        assert store.clear() == 2
        assert store.list_characters() == []

    def test_malformed_row(self, store: CharacterStore, temp_db_path: Path) -> None:
        """Test corrupt stored JSON is rejected, not repaired."""
        with sqlite3.connect(temp_db_path) as conn:
            conn.execute(
                "INSERT INTO characters VALUES (?, ?, ?, ?, ?, ?, ?)",
                ("char_broken", "Broken", "human", 1, "{not json", "2024-01-01", "2024-01-01"),
            )

        with pytest.raises(ValidationError):
            store.get_character("char_broken")

    def test_row_missing_arrays(self, store: CharacterStore, temp_db_path: Path) -> None:
        """Test a stored character without its selection arrays is rejected."""
        data = {"id": "char_partial", "name": "Partial", "gameSystem": "pathfinder1e", "abilityScores": {}}
        with sqlite3.connect(temp_db_path) as conn:
            conn.execute(
                "INSERT INTO characters VALUES (?, ?, ?, ?, ?, ?, ?)",
                ("char_partial", "Partial", "human", 1, json.dumps(data), "2024-01-01", "2024-01-01"),
            )

        with pytest.raises(ValidationError) as exc_info:
            store.list_characters()

        assert exc_info.value.details["field_name"] == "classes"


class TestGlobalStore:
    """Tests for the store singleton."""

    def test_uses_configured_path(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the singleton opens the configured database once."""
        db_path = tmp_path / "configured" / "store.db"
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PF_FORGE_DATABASE_PATH", str(db_path))
        reset_character_store()

        try:
            store = get_character_store()

            assert store.db_path == db_path
            assert get_character_store() is store
        finally:
            reset_character_store()


class TestParseCharacter:
    """Tests for structural checks on persisted characters."""

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("id", "", "Missing or invalid character ID"),
            ("name", None, "Missing or invalid character name"),
            ("gameSystem", "dnd5e", "Invalid game system (must be pathfinder1e)"),
            ("abilityScores", [10, 10], "Missing or invalid ability scores"),
            ("feats", None, "Missing or invalid feats array"),
        ],
    )
    def test_rejects(
        self,
        sample_character_data: dict[str, Any],
        field: str,
        value: Any,
        message: str,
    ) -> None:
        """Test each structural check names the failing field."""
        data = {**sample_character_data, field: value}

        with pytest.raises(ValidationError) as exc_info:
            parse_character(data)

        assert exc_info.value.message == message

    def test_wraps_model_errors(self, sample_character_data: dict[str, Any]) -> None:
        """Test model constraint failures carry the pydantic error list."""
        data = {**sample_character_data, "feats": [{"featId": "toughness"}, {"featId": "toughness"}]}

        with pytest.raises(ValidationError) as exc_info:
            parse_character(data)

        assert exc_info.value.details["errors"]

    def test_not_an_object(self) -> None:
        """Test non-mapping payloads are rejected."""
        with pytest.raises(ValidationError):
            parse_character([])  # type: ignore[arg-type]


class TestJsonFormat:
    """Tests for export and import."""

    def test_export_uses_camel_case(self, sample_character: Character) -> None:
        """Test exported keys match the persisted JSON shape."""
        data = json.loads(export_character_json(sample_character))

        assert data["gameSystem"] == "pathfinder1e"
        assert data["abilityScores"]["STR"] == 16
        assert data["classes"][0]["classId"] == "fighter"
        assert "created_at" not in data

    def test_import_exported(self, sample_character: Character) -> None:
        """Test an export imports with its creation time kept."""
        imported = import_character_json(export_character_json(sample_character))

        assert imported.id == sample_character.id
        assert imported.ability_scores == sample_character.ability_scores
        assert imported.created_at == sample_character.created_at
        assert imported.updated_at > sample_character.updated_at

    def test_import_defaults_created_at(self, sample_character_data: dict[str, Any]) -> None:
        """Test a missing creation time defaults to the import time."""
        data = {key: value for key, value in sample_character_data.items() if key != "createdAt"}

        imported = import_character_json(json.dumps(data))

        assert imported.created_at > datetime(2024, 1, 2, tzinfo=timezone.utc)
        assert imported.created_at <= imported.updated_at

    def test_import_invalid_json(self) -> None:
        """Test malformed JSON is rejected."""
        with pytest.raises(ValidationError, match="Invalid JSON format"):
            import_character_json("{not json")

    def test_import_missing_arrays(self, sample_character_data: dict[str, Any]) -> None:
        """Test an import without skills is rejected."""
        data = {key: value for key, value in sample_character_data.items() if key != "skills"}

        with pytest.raises(ValidationError, match="skills"):
            import_character_json(json.dumps(data))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"level": 7},
            {"skills": [{"skillId": "climb", "ranks": 5, "isClassSkill": True}]},
        ],
    )
    def test_import_inconsistent_level(
        self,
        sample_character_data: dict[str, Any],
        overrides: dict[str, Any],
    ) -> None:
        """Test an import whose level disagrees with its classes or skills is rejected."""
        data = {**sample_character_data, **overrides}

        with pytest.raises(ValidationError) as exc_info:
            import_character_json(json.dumps(data))

        assert exc_info.value.details["errors"]

    def test_export_filename(self, sample_character: Character) -> None:
        """Test the name is slugged and suffixed with the id."""
        character = sample_character.model_copy(update={"name": "Seoni the Sorcerer!"})

        assert export_filename(character) == "seoni_the_sorcerer__char_0123456789ab.json"
