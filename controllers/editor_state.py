"""
In-memory editing state for the admin pages.

Nothing in this module talks to the network. Pages edit a local copy of a
resource and only replace it after a successful commit:

    - `CollectionEditor` holds an ordered list of records (gallery, results,
        schedule) plus the current selection and an optional sport filter.
    - `ObjectEditor` holds the single Contact object.

Updates are copy-on-write: a new list and a new record dict are built for
every change, so a payload captured earlier (e.g. an in-flight commit) never
sees later edits.
"""

from __future__ import annotations
import copy
import time
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from common.constants import ALL_FILTER
from models.schema import RecordSchema, coerce_list

Key = Union[int, str]   # int: list index, str: record id


def new_record_id(existing: Iterable[str] = ()) -> str:
    """Millisecond timestamp id, bumped until it is unique in `existing`."""
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class CollectionEditor:
    def __init__(self, schema: RecordSchema, filter_field: Optional[str] = None):
        self.schema = schema
        self.filter_field = filter_field
        self.filter_value = ALL_FILTER
        self.selected_id = ""
        self._records: List[Dict[str, Any]] = []
        self.revision = 0       # bumped whenever the collection is replaced wholesale

    # ----- reads -----
    @property
    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def snapshot(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._records)

    def ids(self) -> List[str]:
        return [str(r.get("id", "")) for r in self._records]

    def index_of(self, key: Key) -> int:
        if isinstance(key, int) and not isinstance(key, bool):
            if not 0 <= key < len(self._records):
                raise IndexError(f"No {self.schema.name} at index {key}")
            return key
        for i, record in enumerate(self._records):
            if record.get("id") == key:
                return i
        raise KeyError(f"No {self.schema.name} with id {key!r}")

    def get(self, key: Key) -> Dict[str, Any]:
        return self._records[self.index_of(key)]

    def matches_filter(self, record: Dict[str, Any]) -> bool:
        if not self.filter_field or self.filter_value == ALL_FILTER:
            return True
        return record.get(self.filter_field) == self.filter_value

    def visible(self, records: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
        pool = self._records if records is None else records
        return [r for r in pool if self.matches_filter(r)]

    @property
    def selected(self) -> Optional[Dict[str, Any]]:
        if not self.selected_id:
            return None
        try:
            return self.get(self.selected_id)
        except KeyError:
            return None

    @property
    def selected_index(self) -> int:
        try:
            return self.index_of(self.selected_id) if self.selected_id else -1
        except KeyError:
            return -1

    # ----- writes -----
    def load(self, initial: Any) -> None:
        records: List[Dict[str, Any]] = []
        seen: List[str] = []
        for raw in coerce_list(initial):
            record = self.schema.normalize(raw)
            if "id" in self.schema.field_names:
                # Ids are addressed as strings; an int key always means a position
                record["id"] = str(record["id"]) if record["id"] != "" else new_record_id(seen)
            seen.append(str(record.get("id", "")))
            records.append(record)
        self._records = records
        self.revision += 1
        self._select_first_visible()

    def add_record(self, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        record = self.schema.normalize(defaults)
        record["id"] = new_record_id(self.ids())
        self._records = [record] + self._records
        self.selected_id = record["id"]
        return record

    def update_field(self, key: Key, field: str, value: Any) -> Dict[str, Any]:
        index = self.index_of(key)
        updated = {**self._records[index], field: value}
        self._records = self._records[:index] + [updated] + self._records[index + 1:]
        return updated

    def remove_record(self, key: Key) -> Tuple[int, List[Dict[str, Any]]]:
        """Return (index, candidate collection); the live collection is unchanged."""
        index = self.index_of(key)
        candidate = copy.deepcopy(self._records[:index] + self._records[index + 1:])
        return index, candidate

    def replace(self, records: List[Dict[str, Any]]) -> None:
        self._records = list(records)
        self.revision += 1
        if self.selected is None:
            self._select_first_visible()

    def apply_removal(self, candidate: List[Dict[str, Any]], index: int) -> None:
        """Install a committed removal and move the selection.

        Prefers the record now at the removed index, then the one before it.
        If that record falls outside the active filter, the first record that
        matches the filter is chosen instead; nothing is selected when the
        filtered view is empty.
        """
        self._records = list(candidate)
        self.revision += 1
        nxt = None
        if index < len(candidate):
            nxt = candidate[index]
        elif 0 <= index - 1 < len(candidate):
            nxt = candidate[index - 1]

        if nxt is None:
            self.selected_id = ""
        elif self.matches_filter(nxt):
            self.selected_id = str(nxt.get("id", ""))
        else:
            self._select_first_visible()

    def select(self, record_id: str) -> None:
        self.selected_id = record_id or ""

    def set_filter(self, value: str) -> None:
        self.filter_value = value or ALL_FILTER
        self._select_first_visible()

    def _select_first_visible(self) -> None:
        visible = self.visible()
        self.selected_id = str(visible[0].get("id", "")) if visible else ""


class ObjectEditor:
    def __init__(self, schema: RecordSchema):
        self.schema = schema
        self._data: Optional[Dict[str, Any]] = None
        self.revision = 0

    @property
    def data(self) -> Optional[Dict[str, Any]]:
        return self._data

    @property
    def loaded(self) -> bool:
        return self._data is not None

    def snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data or {})

    def load(self, raw: Any) -> None:
        self._data = self.schema.normalize(raw if isinstance(raw, dict) else {})
        self.revision += 1

    def replace(self, data: Dict[str, Any]) -> None:
        self._data = data
        self.revision += 1

    def update_field(self, field: str, value: Any) -> None:
        self._data = {**self._require(), field: value}

    def update_nested(self, section: str, key: str, value: Any) -> None:
        data = self._require()
        self._data = {**data, section: {**(data.get(section) or {}), key: value}}

    def items(self, list_field: str) -> List[Dict[str, Any]]:
        return list(self._require().get(list_field) or [])

    def prepend_item(self, list_field: str, item: Dict[str, Any]) -> None:
        self._data = {**self._require(), list_field: [item] + self.items(list_field)}
        self.revision += 1      # positions shift

    def update_item(self, list_field: str, index: int, field: str, value: Any) -> None:
        items = self.items(list_field)
        if not 0 <= index < len(items):
            raise IndexError(f"No {list_field} item at index {index}")
        items[index] = {**items[index], field: value}
        self._data = {**self._require(), list_field: items}

    def without_item(self, list_field: str, index: int) -> Dict[str, Any]:
        """Candidate object with one list item removed; live data is unchanged."""
        items = self.items(list_field)
        if not 0 <= index < len(items):
            raise IndexError(f"No {list_field} item at index {index}")
        candidate = copy.deepcopy(self._require())
        del candidate[list_field][index]
        return candidate

    def _require(self) -> Dict[str, Any]:
        if self._data is None:
            raise RuntimeError(f"{self.schema.name} has not been loaded")
        return self._data
