"""
Type mapping logic for converting Kotlin and Swift types to Dart types
"""

from .constants import (
    DART_TYPE_MAP,
    DART_GENERIC_MAP,
    LIST_PREFIXES,
    MAP_PREFIXES,
    DART_LIST,
    DART_MAP,
    DART_DYNAMIC,
)
from .scanner import split_top_level


class TypeMapper:
    """Maps Kotlin/Swift type spellings to Dart types"""

    def __init__(self):
        self.type_map = DART_TYPE_MAP.copy()
        self.generic_map = DART_GENERIC_MAP.copy()
        # User supplied mappings, checked before the built-in tables
        self.custom_map = {}

    def add_mapping(self, source_type: str, dart_type: str):
        """Register an extra exact mapping, e.g. UUID -> String"""
        self.custom_map[self._normalize(source_type)] = dart_type.strip()

    def map_type(self, source_type: str) -> str:
        """Map a Kotlin or Swift type to a Dart type.

        Never fails: unknown types fall back to ``dynamic``. Generic element
        types are only preserved for the few spellings in the generic table.
        """
        type_name = (source_type or "").strip()
        if type_name.endswith("?") or type_name.endswith("!"):
            type_name = type_name[:-1].strip()

        key = self._normalize(type_name)
        if key in self.custom_map:
            return self.custom_map[key]

        if type_name in self.type_map:
            return self.type_map[type_name]

        if key in self.generic_map:
            return self.generic_map[key]

        # Map check comes first so that Swift's [K: V] is not taken for a list
        if self._is_map(type_name):
            return DART_MAP
        if type_name.startswith(LIST_PREFIXES):
            return DART_LIST

        return DART_DYNAMIC

    @staticmethod
    def _is_map(type_name: str) -> bool:
        if type_name.startswith(MAP_PREFIXES):
            return True
        if type_name.startswith("[") and type_name.endswith("]"):
            # [K: V] has a separator at the top level of the brackets
            return len(split_top_level(type_name[1:-1], ":")) > 1
        return False

    @staticmethod
    def _normalize(type_name: str) -> str:
        return "".join(type_name.split())
