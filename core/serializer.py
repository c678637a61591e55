from __future__ import annotations

import json
from typing import Any, Dict, List

from core.errors import MalformedDocument
from core.item import Item

__all__ = ["serialize", "deserialize", "item_to_dict", "item_from_dict"]

# Key spellings accepted on load, first match wins. The PascalCase names are
# what older save files (written by the Windows build) used.
_TITLE_KEYS = ("title", "Title")
_URL_KEYS = ("url", "URL", "Url")
_DONE_KEYS = ("isDone", "IsDone")
_QUANTITY_KEYS = ("quantity", "Quantity")
_CHILDREN_KEYS = ("subTasks", "children", "SubTasks", "Children")

_MISSING = object()


def _lookup(obj: Dict[str, Any], keys, default: Any = _MISSING) -> Any:
    for key in keys:
        if key in obj:
            return obj[key]
    return default


# ---------- Item -> dict ----------

def item_to_dict(item: Item) -> Dict[str, Any]:
    out: Dict[str, Any] = {"title": item.title}
    if item.url is not None:
        out["url"] = item.url
    out["isDone"] = item.is_done
    out["quantity"] = item.quantity
    out["subTasks"] = [item_to_dict(child) for child in item.children]
    return out


def serialize(forest: List[Item]) -> str:
    """Render the forest as pretty-printed JSON text."""
    return json.dumps([item_to_dict(item) for item in forest], indent=2, ensure_ascii=False)


# ---------- dict -> Item ----------

def item_from_dict(obj: Any, path: str = "$") -> Item:
    if not isinstance(obj, dict):
        raise MalformedDocument(f"{path}: expected an object, got {type(obj).__name__}")

    title = _lookup(obj, _TITLE_KEYS)
    if not isinstance(title, str):
        raise MalformedDocument(f"{path}: 'title' must be a string")

    url = _lookup(obj, _URL_KEYS, None)
    if url is not None and not isinstance(url, str):
        raise MalformedDocument(f"{path}: 'url' must be a string or null")

    is_done = _lookup(obj, _DONE_KEYS, False)
    if not isinstance(is_done, bool):
        raise MalformedDocument(f"{path}: 'isDone' must be a boolean")

    quantity = _lookup(obj, _QUANTITY_KEYS, 1)
    if quantity is None:
        quantity = 1
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise MalformedDocument(f"{path}: 'quantity' must be an integer")

    children = _lookup(obj, _CHILDREN_KEYS, None)
    if children is None:
        children = []
    if not isinstance(children, list):
        raise MalformedDocument(f"{path}: 'subTasks' must be an array")

    return Item(
        title=title,
        url=url,
        is_done=is_done,
        quantity=quantity,
        children=[item_from_dict(child, f"{path}[{i}]") for i, child in enumerate(children)],
    )


def deserialize(text: str) -> List[Item]:
    """
    Parse saved JSON text back into a forest.
    Raises MalformedDocument on bad JSON or an unexpected document shape.
    """
    try:
        data = json.loads(text)
    except RecursionError as e:
        raise MalformedDocument("Malformed JSON: nested too deeply") from e
    except ValueError as e:
        # JSONDecodeError, and int literals past the digit limit
        raise MalformedDocument(f"Malformed JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedDocument(f"Expected a top-level array, got {type(data).__name__}")

    try:
        return [item_from_dict(obj, f"$[{i}]") for i, obj in enumerate(data)]
    except RecursionError as e:
        raise MalformedDocument("List is nested too deeply") from e
