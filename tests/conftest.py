"""
Pytest configuration.

Shared in-memory documents and an on-disk project tree built from them.
"""

import copy
import os
import sys
from pathlib import Path

import pytest

# Make the project root importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rpgm_txt.schema import dump_json  # noqa: E402


def cmd(code, *parameters):
    return {"code": code, "indent": 0, "parameters": list(parameters)}


MAP001 = {
    "displayName": "Village",
    "events": [
        None,
        {"id": 1, "name": "Elder", "pages": [{"list": [
            cmd(401, "Welcome, traveller."),
            cmd(401, "Rest a while."),
            cmd(101, "", 0, 0, 2),
            cmd(401, "Will you help us?"),
            cmd(102, ["Yes", "No"], 1, 0, 2, 0),
            cmd(402, 0, "Yes"),
            cmd(401, " Thank you! "),
            cmd(402, 1, "No"),
            cmd(0),
        ]}]},
        None,
        {"id": 3, "name": "Sign", "pages": [{"list": [
            cmd(401, "Rest a while."),
            cmd(405, "Not credits in a map"),
            cmd(356, "GabText sign_1"),
            cmd(0),
        ]}]},
    ],
}

MAP002 = {
    "displayName": "",
    "events": [
        None,
        {"id": 1, "name": "Guard", "pages": [
            {"list": [cmd(401, "Halt!"), cmd(401, "Welcome, traveller."), cmd(0)]},
            {"list": [cmd(401, "Move along."), cmd(0)]},
        ]},
    ],
}

COMMON_EVENTS = [
    None,
    {"id": 1, "name": "Ending", "list": [
        cmd(405, "Directed by"),
        cmd(405, "Somebody"),
        cmd(401, "The end."),
        cmd(0),
    ]},
]

TROOPS = [
    None,
    {"id": 1, "name": "Slimes", "pages": [{"list": [
        cmd(401, "Slimes appear!"),
        cmd(0),
    ]}]},
]

ITEMS = [
    None,
    {"id": 1, "name": "Potion", "description": "Restores 50 HP.",
     "note": "<Menu Category: Healing>\n<Price: 50>"},
    None,
    {"id": 3, "name": "Bread", "description": "", "note": ""},
]

ACTORS = [
    None,
    {"id": 1, "name": "Harold", "nickname": "The Brave", "note": "",
     "profile": "Not a translated field."},
]

TILESETS = [None, {"id": 1, "name": "Outside", "note": "never read"}]

SYSTEM = {
    "gameTitle": "Test Quest",
    "armorTypes": ["", "Light Armor"],
    "elements": ["", "Fire"],
    "equipTypes": ["", "Weapon"],
    "skillTypes": ["", "Magic"],
    "weaponTypes": ["", "Sword"],
    "terms": {
        "basic": ["Level", "Lv"],
        "commands": ["Fight", None],
        "params": ["Max HP"],
        "messages": {"alwaysDash": "Always Dash", "victory": "%1 was victorious!"},
    },
    "switches": ["", "ignored"],
}


@pytest.fixture
def map_doc():
    return copy.deepcopy(MAP001)


@pytest.fixture
def common_events_doc():
    return copy.deepcopy(COMMON_EVENTS)


@pytest.fixture
def troops_doc():
    return copy.deepcopy(TROOPS)


@pytest.fixture
def items_doc():
    return copy.deepcopy(ITEMS)


@pytest.fixture
def system_doc():
    return copy.deepcopy(SYSTEM)


ORIGINAL_FILES = {
    "Map001.json": MAP001,
    "Map002.json": MAP002,
    "CommonEvents.json": COMMON_EVENTS,
    "Troops.json": TROOPS,
    "Items.json": ITEMS,
    "Actors.json": ACTORS,
    "Tilesets.json": TILESETS,
    "System.json": SYSTEM,
}


def write_project(root, files=None, folder="original"):
    data_dir = os.path.join(str(root), folder)
    os.makedirs(data_dir, exist_ok=True)
    for name, data in (files or ORIGINAL_FILES).items():
        with open(os.path.join(data_dir, name), "w", encoding="utf-8") as f:
            f.write(dump_json(data))
    return str(root)


def read_file(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def project(tmp_path):
    """A game folder with every sample document under original/."""
    return write_project(tmp_path)
