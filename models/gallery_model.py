from typing import Any, Dict, List, Tuple

from models.schema import FieldSpec, RecordSchema

GALLERY_ITEM = RecordSchema(
    "GalleryItem",
    (
        FieldSpec("id"),
        FieldSpec("title"),
        FieldSpec("url"),
        FieldSpec("type", "url"),
    ),
)


def is_complete(item: Dict[str, Any]) -> bool:
    return bool(item.get("title")) and bool(item.get("url"))


def split_complete(items: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Return (complete, incomplete) preserving order."""
    complete = [i for i in items if is_complete(i)]
    incomplete = [i for i in items if not is_complete(i)]
    return complete, incomplete
