"""Storage module for pf_forge persistence.

Provides SQLite-based storage for completed characters and the JSON
import/export format.
"""

from pf_forge.storage.database import (
    CharacterStore,
    export_character_json,
    export_filename,
    get_character_store,
    import_character_json,
    parse_character,
    reset_character_store,
)

__all__ = [
    "CharacterStore",
    "export_character_json",
    "export_filename",
    "get_character_store",
    "import_character_json",
    "parse_character",
    "reset_character_store",
]
