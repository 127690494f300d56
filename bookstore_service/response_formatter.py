"""
Response formatter: turns driver results into JSON-safe values and the
console sections printed by the runner.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict, List


def clean_documents(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sanitise non-JSON-serialisable values (ObjectId, datetime, bytes, ...).

    ``_id`` is kept, stringified.
    """
    return [sanitise_value(doc) for doc in results]


def sanitise_value(obj: Any) -> Any:
    """Recursively convert non-JSON-safe types to safe representations."""
    # SON and RawBSONDocument are Mappings but not dicts
    if isinstance(obj, Mapping):
        return {str(k): sanitise_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitise_value(item) for item in obj]
    if isinstance(obj, bytes):
        try:
            return obj.decode("utf-8")
        except UnicodeDecodeError:
            return f"[binary {len(obj)} bytes]"
    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj
    # datetime, ObjectId, Decimal128, Timestamp, etc.
    return str(obj)


def format_result(result: Any) -> str:
    return json.dumps(sanitise_value(result), indent=2)


def format_section(title: str, result: Any) -> str:
    """Render one ``-- title --`` block followed by its result.

    Strings are printed verbatim so plain status lines stay readable.
    """
    body = result if isinstance(result, str) else format_result(result)
    return f"\n-- {title} --\n{body}"
