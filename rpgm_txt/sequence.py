"""Run detection over event command lists.

Consecutive Show Text (401) or Scroll Text (405) commands make up one
message box; they are extracted as a single newline-joined unit and a
translated unit is spread back over the same commands on injection.  Both
passes call :func:`scan_command_list` on an untouched original list, so the
units (and their command indices) line up one for one.
"""

from dataclasses import dataclass
from typing import Optional

from .classifier import (
    MERGEABLE, Category, DocumentKind, TitleProfile, classify, payload_index,
)
from .errors import SchemaViolation


@dataclass
class TextUnit:
    """One logical piece of text inside a command list."""
    category: Category
    text: str                  # raw text; runs are joined with "\n"
    indices: list              # command positions holding the text
    param_index: int = 0       # parameters[] slot of the payload
    item_index: Optional[int] = None   # position inside a choice array

    @property
    def is_run(self) -> bool:
        return self.category in MERGEABLE


def _command(cmd, position: int):
    """Return (code, parameters) of a command node, checking its shape."""
    if not isinstance(cmd, dict):
        raise SchemaViolation("command is not an object", field=f"list[{position}]")
    code = cmd.get("code")
    params = cmd.get("parameters")
    if not isinstance(code, int) or isinstance(code, bool):
        raise SchemaViolation("command has no integer code",
                              field=f"list[{position}].code")
    if not isinstance(params, list):
        raise SchemaViolation("command has no parameters array",
                              field=f"list[{position}].parameters")
    return code, params


def scan_command_list(cmd_list: list, document_kind: DocumentKind,
                      profile: Optional[TitleProfile] = None) -> list:
    """Split *cmd_list* into text units, left to right.

    A run is the maximal stretch of commands sharing one mergeable
    category; any other command (or a change of category) closes it.
    Choices and plugin command text come out one unit per string.
    """
    if not isinstance(cmd_list, list):
        raise SchemaViolation("command list is not an array", field="list")

    units = []
    run_category = None
    run_text: list = []
    run_indices: list = []

    def close_run():
        nonlocal run_category
        if run_indices:
            units.append(TextUnit(run_category, "\n".join(run_text),
                                  list(run_indices)))
        run_category = None
        run_text.clear()
        run_indices.clear()

    for i, cmd in enumerate(cmd_list):
        code, params = _command(cmd, i)
        category = classify(code, document_kind, profile)

        if category in MERGEABLE:
            if run_category is not None and category is not run_category:
                close_run()
            run_category = category
            payload = params[0] if params else None
            if isinstance(payload, str):
                run_text.append(payload)
                run_indices.append(i)
            continue

        close_run()

        if category is Category.UNRECOGNIZED:
            continue

        pi = payload_index(code)
        payload = params[pi] if len(params) > pi else None
        if isinstance(payload, list):
            if category is not Category.CHOICE:
                continue
            for j, item in enumerate(payload):
                if isinstance(item, str):
                    units.append(TextUnit(category, item, [i], pi, j))
        elif isinstance(payload, str):
            units.append(TextUnit(category, payload, [i], pi))

    close_run()
    return units


def distribute(translated: str, slot_count: int) -> list:
    """Spread a translated unit over *slot_count* commands.

    Missing lines become empty strings; surplus lines are joined back into
    the last slot.  No command is ever added or removed.
    """
    if slot_count <= 0:
        return []
    parts = translated.split("\n")
    if len(parts) <= slot_count:
        return parts + [""] * (slot_count - len(parts))
    head = parts[:slot_count - 1]
    head.append("\n".join(parts[slot_count - 1:]))
    return head


def write_unit(cmd_list: list, unit: TextUnit, translated: str):
    """Store *translated* into the command(s) *unit* was read from."""
    if unit.is_run:
        for index, segment in zip(unit.indices,
                                  distribute(translated, len(unit.indices))):
            cmd_list[index]["parameters"][0] = segment
        return

    params = cmd_list[unit.indices[0]]["parameters"]
    if unit.item_index is not None:
        params[unit.param_index][unit.item_index] = translated
    else:
        params[unit.param_index] = translated
