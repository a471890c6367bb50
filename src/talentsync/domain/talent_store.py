"""In-memory model of the ``TalentLoadoutEx`` saved-variables table.

Layout: class key (``"WARRIOR"``) -> specialization index -> ordered loadouts.
The ``OPTION`` entry is not a class; it is dropped on read and re-emitted with a
fixed value on write.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .identifiers import is_machine_owned
from .lua_table import LuaTable, parse_chunk, quote_string

if TYPE_CHECKING:
    from .lua_table import LuaValue

log = getLogger(__name__)

TABLE_NAME: Final[str] = "TalentLoadoutEx"
OPTION_KEY: Final[str] = "OPTION"
OPTION_BLOCK: Final[str] = '  ["OPTION"] = { ["IsEnabledPvp"] = false },\n'

ClassBucket = dict[int, list["TalentEntry"]]


@dataclass(slots=True)
class TalentEntry:
    """One saved loadout. ``text`` is the opaque talent export string."""

    icon: int = 0
    name: str = ""
    text: str = ""

    @property
    def is_machine_owned(self) -> bool:
        return is_machine_owned(self.name)


class TalentStore:
    def __init__(self, classes: dict[str, ClassBucket] | None = None) -> None:
        self._classes: dict[str, ClassBucket] = classes if classes is not None else {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TalentStore):
            return NotImplemented
        return self._classes == other._classes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TalentStore(classes={sorted(self._classes)!r}, entries={self.entry_count()})"

    # -- queries -----------------------------------------------------------------

    def class_keys(self) -> list[str]:
        return sorted(self._classes)

    def class_entries(self, class_key: str) -> ClassBucket | None:
        return self._classes.get(class_key)

    def spec_entries(self, class_key: str, spec_index: int) -> list[TalentEntry] | None:
        bucket = self._classes.get(class_key)
        if bucket is None:
            return None
        return bucket.get(spec_index)

    def entry_count(self) -> int:
        return sum(len(entries) for bucket in self._classes.values() for entries in bucket.values())

    def machine_owned_count(self) -> int:
        return sum(
            1
            for bucket in self._classes.values()
            for entries in bucket.values()
            for entry in entries
            if entry.is_machine_owned
        )

    # -- mutations ---------------------------------------------------------------

    def add_entry(self, class_key: str, spec_index: int, entry: TalentEntry) -> None:
        """Append ``entry`` to the slot, creating the class and slot when needed.

        Names are not checked for uniqueness; callers clear stale generated
        entries before adding fresh ones.
        """

        if class_key == OPTION_KEY:
            raise ValueError(f"{OPTION_KEY!r} is reserved and cannot hold talent entries")
        self._classes.setdefault(class_key, {}).setdefault(spec_index, []).append(entry)

    def remove_machine_owned(self, class_key: str, spec_index: int) -> int:
        """Drop generated entries from one slot and return how many were removed."""

        entries = self.spec_entries(class_key, spec_index)
        if entries is None:
            return 0
        kept = [entry for entry in entries if not entry.is_machine_owned]
        removed = len(entries) - len(kept)
        entries[:] = kept
        return removed

    def remove_all_machine_owned(self) -> int:
        removed = 0
        for class_key, bucket in self._classes.items():
            for spec_index in bucket:
                removed += self.remove_machine_owned(class_key, spec_index)
        return removed

    # -- codec -------------------------------------------------------------------

    @classmethod
    def decode(cls, text: str) -> TalentStore:
        """Build a store from saved-variables text.

        Only the ``TalentLoadoutEx`` assignment is read. Pieces with an unexpected
        shape are skipped one by one so a hand-edited file keeps whatever can be
        understood. ``LuaSyntaxError`` propagates when the text is not a valid
        chunk of table literals.
        """

        root = parse_chunk(text).get(TABLE_NAME)
        store = cls()
        if not isinstance(root, LuaTable):
            if root is not None:
                log.debug("Ignoring non-table %s value", TABLE_NAME)
            return store

        for key, value in root.items():
            if key == OPTION_KEY:
                continue
            if not isinstance(key, str) or not isinstance(value, LuaTable):
                log.debug("Skipping top-level entry with key %r", key)
                continue
            store._classes[key] = _decode_class(key, value)
        return store

    def encode(self) -> str:
        lines: list[str] = [f"{TABLE_NAME} = {{\n"]
        for class_key in sorted(self._classes):
            bucket = self._classes[class_key]
            lines.append(f"  [{quote_string(class_key)}] = {{\n")
            for spec_index in sorted(bucket):
                lines.append(f"    [{spec_index}] = {{\n")
                lines.extend(f"      {_encode_entry(entry)},\n" for entry in bucket[spec_index])
                lines.append("    },\n")
            lines.append("  },\n")
        lines.append(OPTION_BLOCK)
        lines.append("}\n")
        return "".join(lines)


def _as_index(key: LuaValue) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, float) and key.is_integer():
        key = int(key)
    if isinstance(key, int) and key > 0:
        return key
    return None


def _decode_class(class_key: str, table: LuaTable) -> ClassBucket:
    bucket: ClassBucket = {}
    for key, value in table.items():
        spec_index = _as_index(key)
        if spec_index is None or not isinstance(value, LuaTable):
            log.debug("Skipping %s entry with key %r", class_key, key)
            continue
        bucket[spec_index] = _decode_slot(value)
    return bucket


def _decode_slot(table: LuaTable) -> list[TalentEntry]:
    entries: list[TalentEntry] = []
    for lua_field in table.fields:
        if not lua_field.positional and _as_index(lua_field.key) is None:
            continue
        if not isinstance(lua_field.value, LuaTable):
            continue
        entries.append(_decode_entry(lua_field.value))
    return entries


def _decode_entry(table: LuaTable) -> TalentEntry:
    entry = TalentEntry()
    for lua_field in table.fields:
        if lua_field.positional:
            continue
        key, value = lua_field.key, lua_field.value
        if key == "icon":
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if isinstance(value, int) and not isinstance(value, bool):
                entry.icon = value
        elif key in ("name", "text") and isinstance(value, str):
            setattr(entry, key, value)
    return entry


def _encode_entry(entry: TalentEntry) -> str:
    return (
        f'{{ ["icon"] = {entry.icon}, ["name"] = {quote_string(entry.name)}, '
        f'["text"] = {quote_string(entry.text)} }}'
    )


__all__ = ["OPTION_KEY", "TABLE_NAME", "ClassBucket", "TalentEntry", "TalentStore"]
