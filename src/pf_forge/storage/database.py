"""SQLite persistence layer for pf_forge.

Provides persistent storage for completed characters and the JSON
import/export format used to move them between stores. Derived stats are
never stored; they are recomputed from the saved selections.

Storage location: ~/.pf_forge/characters.db (see StorageSettings)
"""

from __future__ import annotations

import json
import re
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generator

from pydantic import ValidationError as PydanticValidationError

from pf_forge.core.config import get_settings
from pf_forge.core.constants import GAME_SYSTEM
from pf_forge.core.exceptions import StorageError, ValidationError
from pf_forge.core.logging import character_context, get_logger
from pf_forge.models.character import Character

logger = get_logger(__name__)


# =============================================================================
# JSON Format
# =============================================================================

_REQUIRED_ARRAYS = ("classes", "skills", "feats", "equipment")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def parse_character(data: dict[str, Any]) -> Character:
    """Validate a character mapping in the persisted JSON shape.

    Args:
        data: Mapping with camelCase keys.

    Returns:
        The validated character.

    Raises:
        ValidationError: If a required field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError("Character data must be an object", invalid_value=type(data).__name__)
    if not isinstance(data.get("id"), str) or not data["id"]:
        raise ValidationError("Missing or invalid character ID", field_name="id")
    if not isinstance(data.get("name"), str) or not data["name"]:
        raise ValidationError("Missing or invalid character name", field_name="name")
    if data.get("gameSystem", data.get("game_system")) != GAME_SYSTEM:
        raise ValidationError(f"Invalid game system (must be {GAME_SYSTEM})", field_name="gameSystem")
    if not isinstance(data.get("abilityScores", data.get("ability_scores")), dict):
        raise ValidationError("Missing or invalid ability scores", field_name="abilityScores")
    for key in _REQUIRED_ARRAYS:
        if not isinstance(data.get(key), list):
            raise ValidationError(f"Missing or invalid {key} array", field_name=key)

    try:
        return Character.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Character data failed validation",
            details={"errors": exc.errors(include_url=False)},
        ) from exc


def export_character_json(character: Character) -> str:
    """Serialize a character to indented JSON with camelCase keys."""
    return character.model_dump_json(by_alias=True, indent=2)


def import_character_json(json_string: str) -> Character:
    """Load a character from exported JSON.

    A missing creation time defaults to now; the update time is always
    reset to now.

    Args:
        json_string: JSON produced by export_character_json() or a
            compatible tool.

    Returns:
        The imported character.

    Raises:
        ValidationError: If the JSON is malformed or the character invalid.
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as exc:
        raise ValidationError("Invalid JSON format", details={"error": str(exc)}) from exc

    if isinstance(data, dict):
        now = _now().isoformat()
        data = {**data, "createdAt": data.get("createdAt") or data.get("created_at") or now, "updatedAt": now}
        data.pop("created_at", None)
        data.pop("updated_at", None)
    return parse_character(data)


def export_filename(character: Character) -> str:
    """Suggested file name for an exported character."""
    slug = re.sub(r"[^a-z0-9]", "_", character.name, flags=re.IGNORECASE).lower()
    return f"{slug}_{character.id}.json"


# =============================================================================
# Character Store
# =============================================================================


class CharacterStore:
    """SQLite store for completed characters.

    Each row holds the character's JSON alongside a few columns used for
    listing. Every sqlite3 failure surfaces as StorageError.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            db_path: Path to database file. If None, uses the configured path.
        """
        if db_path is None:
            self.db_path = get_settings().storage.database_path
        else:
            self.db_path = Path(db_path)

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

        logger.info("Character store initialized", db_path=str(self.db_path))

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with proper cleanup."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                "Could not open character store", details={"db_path": str(self.db_path)}
            ) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError("Character store operation failed", details={"error": str(exc)}) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS characters (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    race TEXT NOT NULL,
                    level INTEGER NOT NULL,
                    character_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_characters_updated
                ON characters(updated_at DESC)
            """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Character:
        try:
            data = json.loads(row["character_json"])
        except json.JSONDecodeError as exc:
            raise ValidationError(
                "Stored character is not valid JSON", details={"character_id": row["id"]}
            ) from exc
        return parse_character(data)

    # =========================================================================
    # Character Operations
    # =========================================================================

    def save_character(self, character: Character) -> Character:
        """Insert or update a character.

        The update time is stamped now. An existing row keeps its original
        creation time.

        Args:
            character: Character to persist.

        Returns:
            The character as stored, with timestamps applied.

        Raises:
            StorageError: If the write fails.
        """
        now = _now()
        with character_context(character.id):
            with self._get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT created_at FROM characters WHERE id = ?", (character.id,))
                row = cursor.fetchone()
                created_at = datetime.fromisoformat(row["created_at"]) if row else character.created_at

                saved = character.model_copy(update={"created_at": created_at, "updated_at": now})
                cursor.execute("""
                    INSERT OR REPLACE INTO characters
                    (id, name, race, level, character_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    saved.id,
                    saved.name,
                    saved.race,
                    saved.level,
                    saved.model_dump_json(by_alias=True),
                    saved.created_at.isoformat(),
                    saved.updated_at.isoformat(),
                ))

            logger.info("Saved character", name=saved.name, level=saved.level)
        return saved

    def get_character(self, character_id: str) -> Character | None:
        """Get a character by ID.

        Returns:
            The character if found, None otherwise.

        Raises:
            ValidationError: If the stored data is malformed.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, character_json FROM characters WHERE id = ?",
                (character_id,),
            )
            row = cursor.fetchone()

        if row:
            return self._from_row(row)
        return None

    def list_characters(self) -> list[Character]:
        """Get all characters, most recently updated first."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT id, character_json FROM characters ORDER BY updated_at DESC
            """)
            rows = cursor.fetchall()

        return [self._from_row(row) for row in rows]

    def delete_character(self, character_id: str) -> bool:
        """Delete a character.

        Returns:
            True if deleted, False if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters WHERE id = ?", (character_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("Deleted character", character_id=character_id)

        return deleted

    def count(self) -> int:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM characters")
            return cursor.fetchone()[0]

    def clear(self) -> int:
        """Delete every character.

        Returns:
            Number of characters removed.
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM characters")
            removed = cursor.rowcount

        logger.warning("Cleared character store", removed=removed)
        return removed


# =============================================================================
# Singleton Instance
# =============================================================================


_store_instance: CharacterStore | None = None


def get_character_store() -> CharacterStore:
    """Get the global character store at the configured path.

    Returns:
        CharacterStore singleton instance.
    """
    global _store_instance

    if _store_instance is None:
        _store_instance = CharacterStore()

    return _store_instance


def reset_character_store() -> None:
    """Drop the global store so the next access reopens it."""
    global _store_instance
    _store_instance = None


__all__ = [
    "CharacterStore",
    "parse_character",
    "export_character_json",
    "import_character_json",
    "export_filename",
    "get_character_store",
    "reset_character_store",
]
