"""
Schema-driven normalization for the plain records the API returns.

Records stay plain dicts so they can be posted back unchanged; a
`RecordSchema` only documents which fields every record must carry and the
default each one takes when the server omitted it (or sent `None` / "").
Unknown keys are kept as-is.
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    default: Any = ""
    nested: Optional["RecordSchema"] = None
    many: bool = False      # nested schema applies to each item of a list


@dataclass(frozen=True)
class RecordSchema:
    name: str
    fields: Tuple[FieldSpec, ...]

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def defaults(self) -> Dict[str, Any]:
        return self.normalize({})

    def normalize(self, raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        out = dict(raw) if isinstance(raw, dict) else {}
        for f in self.fields:
            value = out.get(f.name)
            if f.nested is not None and f.many:
                items = value if isinstance(value, list) else []
                out[f.name] = [f.nested.normalize(item) for item in items if isinstance(item, dict)]
            elif f.nested is not None:
                out[f.name] = f.nested.normalize(value if isinstance(value, dict) else {})
            elif value is None or value == "":
                out[f.name] = copy.deepcopy(f.default)
        return out


def coerce_list(raw: Any) -> List[Dict[str, Any]]:
    """API payloads are expected to be lists of objects; a single object becomes a one-item list.

    Items that are not objects are skipped.
    """
    items = raw if isinstance(raw, list) else ([raw] if raw else [])
    records = [item for item in items if isinstance(item, dict)]
    if len(records) != len(items):
        logger.warning("Skipped %d non-object item(s) in API payload", len(items) - len(records))
    return records
