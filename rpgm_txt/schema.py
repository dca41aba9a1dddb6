"""Shape of RPG Maker MV/MZ data documents.

Three families are handled:

* Map documents (``MapNNN.json``): ``events[]`` -> ``pages[]`` -> ``list[]``.
* Entity collections: an array of records.  ``CommonEvents.json`` records
  hold a command ``list`` and ``Troops.json`` records hold ``pages[].list``;
  every other collection has flat text attributes.
* ``System.json``: typed string arrays, ``gameTitle`` and a ``terms`` map.

The editor writes ``null`` at index 0 of the events array and of every
entity collection.  That slot is reserved, never data: the iterators below
start at index 1 and are the only place that rule is applied.  Later
``null`` entries are deleted events/records and are skipped as well.

Anything else that does not match the family is a :class:`SchemaViolation`.
"""

import json

from .errors import IOFailure, SchemaViolation

EVENT_LIST_PREFIXES = ("CommonEvents", "Troops")

# System.json string arrays, in extraction order around gameTitle
SYSTEM_ARRAYS_BEFORE_TITLE = ("armorTypes", "elements", "equipTypes")
SYSTEM_ARRAYS_AFTER_TITLE = ("skillTypes",)
SYSTEM_ARRAYS_LAST = ("weaponTypes",)


def load_json(path: str):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except UnicodeDecodeError as exc:
        raise SchemaViolation(f"File is not valid UTF-8: {exc.reason}", path) from exc
    except json.JSONDecodeError as exc:
        raise SchemaViolation(f"Invalid JSON: {exc}", path) from exc
    except OSError as exc:
        raise IOFailure(f"Cannot read file: {exc.strerror or exc}", path) from exc


def dump_json(data) -> str:
    """Serialize the way the editor does: compact, UTF-8 kept as is."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def is_event_list_file(filename: str) -> bool:
    return filename.startswith(EVENT_LIST_PREFIXES)


def _array(value, field: str) -> list:
    if not isinstance(value, list):
        raise SchemaViolation("expected an array", field=field)
    return value


def _object(value, field: str) -> dict:
    if not isinstance(value, dict):
        raise SchemaViolation("expected an object", field=field)
    return value


def records(array: list, field: str):
    """Yield ``(index, record)`` for the data records of a sentinel array."""
    for index in range(1, len(array)):
        record = array[index]
        if record is None:
            continue
        yield index, _object(record, f"{field}[{index}]")


# ── Maps ──────────────────────────────────────────────────────────────

def map_events(data) -> list:
    data = _object(data, "$")
    return _array(data.get("events"), "events")


def iter_map_command_lists(data):
    """Yield every page command list of a map document."""
    events = map_events(data)
    for ei, event in records(events, "events"):
        pages = _array(event.get("pages"), f"events[{ei}].pages")
        for pi, page in enumerate(pages):
            page = _object(page, f"events[{ei}].pages[{pi}]")
            yield _array(page.get("list"), f"events[{ei}].pages[{pi}].list")


def map_display_name(data) -> str:
    name = _object(data, "$").get("displayName", "")
    if name is None:
        return ""
    if not isinstance(name, str):
        raise SchemaViolation("expected a string", field="displayName")
    return name


# ── Entity collections ────────────────────────────────────────────────

def entity_records(data):
    """Yield ``(index, record)`` for a flat entity collection."""
    return records(_array(data, "$"), "$")


def iter_event_command_lists(filename: str, data):
    """Yield every command list of CommonEvents.json or Troops.json."""
    troops = filename.startswith("Troops")
    for index, record in records(_array(data, "$"), "$"):
        if troops:
            pages = _array(record.get("pages"), f"[{index}].pages")
            for pi, page in enumerate(pages):
                page = _object(page, f"[{index}].pages[{pi}]")
                yield _array(page.get("list"), f"[{index}].pages[{pi}].list")
        else:
            yield _array(record.get("list"), f"[{index}].list")


# ── System ────────────────────────────────────────────────────────────

def _typed_array_slots(data: dict, key: str):
    array = _array(data.get(key), key)
    for i, value in enumerate(array):
        if not isinstance(value, str):
            raise SchemaViolation("expected a string", field=f"{key}[{i}]")
        yield array, i


def iter_system_slots(data):
    """Yield ``(container, key)`` for every text slot of System.json.

    ``container[key]`` is the string; the injector assigns through the same
    pair.  Order is fixed so pools come out the same on every run.
    """
    data = _object(data, "$")
    for key in SYSTEM_ARRAYS_BEFORE_TITLE:
        yield from _typed_array_slots(data, key)

    if not isinstance(data.get("gameTitle"), str):
        raise SchemaViolation("expected a string", field="gameTitle")
    yield data, "gameTitle"

    for key in SYSTEM_ARRAYS_AFTER_TITLE:
        yield from _typed_array_slots(data, key)

    terms = _object(data.get("terms"), "terms")
    for key, value in terms.items():
        if key == "messages":
            if not isinstance(value, dict):
                continue
            for msg_key, msg in value.items():
                if isinstance(msg, str):
                    yield value, msg_key
        else:
            for i, item in enumerate(_array(value, f"terms.{key}")):
                if isinstance(item, str):
                    yield value, i

    for key in SYSTEM_ARRAYS_LAST:
        yield from _typed_array_slots(data, key)


def game_title(data) -> str:
    if not isinstance(data, dict):
        return ""
    title = data.get("gameTitle", "")
    return title if isinstance(title, str) else ""
