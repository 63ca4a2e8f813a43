# modcore/core/jsonutils.py
from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Iterable
from dataclasses import is_dataclass, asdict
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import json5

logger = logging.getLogger(__name__)

__all__ = ["fixJson", "fixJsonFile", "readJsonFile", "safeJsonDumps", "tryJSONify"]



_BOM = "\ufeff"



# ------------------------------------------------
#                 Manifest repair
# ------------------------------------------------

def fixJson(text: str) -> str:
    """
    Returns `text` rewritten as strict JSON.

    Mod authors hand-edit manifests, so these are tolerated:
      • a leading UTF-8 BOM
      • trailing commas, comments, single-quoted strings (anything JSON5 accepts)

    Raises ValueError when the text isn't even valid JSON5.
    """
    text = text.removeprefix(_BOM)
    data = json5.loads(text)
    return json.dumps(data, ensure_ascii=False, indent=2)



def fixJsonFile(path: Path) -> bool:
    """
    Best-effort, in-place repair of a JSON file.

    Returns True when the file was rewritten. Never raises: if the file can't be
    read, parsed as JSON5 or written back, it is left untouched and the strict
    parse that follows reports the problem.
    """
    try:
        original = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False

    try:
        json.loads(original)
        return False
    except ValueError:
        pass

    try:
        fixed = fixJson(original)
        path.write_text(fixed, encoding="utf-8")
    except (ValueError, TypeError, OSError) as err:
        logger.debug("Could not repair JSON at '%s': %s", path, err)
        return False

    logger.debug("Repaired malformed JSON at '%s'", path)
    return True



def readJsonFile(path: Path) -> Any:
    """Strict JSON read. Raises OSError / ValueError on failure."""
    return json.loads(path.read_text(encoding="utf-8").removeprefix(_BOM))



# ------------------------------------------------
#                JSON serialization
# ------------------------------------------------

def safeJsonDumps(obj: object) -> str:
    """
    Serializes an object to a compact JSON string.
    Uses deterministic separators (",", ":") and disallows NaN/infinity.
    If direct JSON encoding fails, falls back to tryJSONify (circular/depth-safe) and retries.
    """
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError):
        safePayload = tryJSONify(obj, _maxDepth=None)
        return json.dumps(safePayload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))



def tryJSONify(obj: Any, *, _seen: set[int] | None = None, _depth: int = 0, _maxDepth: int | None = 10) -> Any:
    """
    Attempts to make any object JSON-serializable.

    Rules:
      • Basic scalars (None, bool, int, float, str) are preserved.
      • Exceptions → {"type", "message"}.
      • date/datetime → ISO8601 string.
      • Path → string path.
      • Enum → its value.
      • Dataclasses → dict.
      • sets/tuples/iterables → list.
      • Mappings → dict with str keys.
      • fallback → repr(obj)
    """
    if _seen is None:
        _seen = set()

    oid = id(obj)
    if oid in _seen:
        return f"<circular_ref {type(obj).__name__}>"
    if isinstance(_maxDepth, int) and _depth > _maxDepth:
        return f"<max_depth_exceeded {type(obj).__name__}>"
    _seen.add(oid)

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, BaseException):
        return {"type": type(obj).__name__, "message": str(obj)}

    if isinstance(obj, (date, datetime)):
        return obj.isoformat()

    if isinstance(obj, Enum):
        return tryJSONify(obj.value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth)

    if is_dataclass(obj) and not isinstance(obj, type):
        return tryJSONify(asdict(obj), _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth)

    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, (set, frozenset, tuple)):
        return [tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for value in obj]

    if isinstance(obj, Mapping):
        return {
            str(key): tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for key, value in obj.items()
        }

    if isinstance(obj, Iterable):
        return [tryJSONify(value, _seen=_seen, _depth=_depth + 1, _maxDepth=_maxDepth) for value in obj]

    # Last-ditch representation (avoid raising during logging)
    return repr(obj)
