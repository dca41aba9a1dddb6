"""
End-to-end read and write phases on a project tree.
"""

import json
import os
import shutil

import pytest

from conftest import ORIGINAL_FILES, cmd, read_file, write_project
from rpgm_txt.classifier import GameTitle
from rpgm_txt.config import EngineConfig, ProcessingMode
from rpgm_txt.engine import extract, inject
from rpgm_txt.errors import IOFailure, PoolMismatch, SchemaViolation
from rpgm_txt.schema import dump_json
from rpgm_txt.text_pool import write_text


def pool(project, *parts):
    return os.path.join(project, "translation", *parts)


def output(project, filename):
    return os.path.join(project, "output", "data", filename)


def fill_identity(project):
    """Copy every pool into its translation file."""
    for folder in ("maps", "other"):
        directory = pool(project, folder)
        for name in os.listdir(directory):
            if name.endswith(".txt") and not name.endswith("_trans.txt"):
                shutil.copyfile(os.path.join(directory, name),
                                os.path.join(directory, name[:-4] + "_trans.txt"))


class TestExtract:

    def test_writes_every_pool(self, project):
        report = extract(project)

        assert report.title is None
        for parts in (("maps", "maps.txt"), ("maps", "names.txt"),
                      ("other", "items.txt"), ("other", "actors.txt"),
                      ("other", "commonevents.txt"), ("other", "troops.txt"),
                      ("other", "system.txt")):
            assert os.path.isfile(pool(project, *parts))
            assert os.path.isfile(pool(project, *parts)[:-4] + "_trans.txt")
        assert not os.path.exists(pool(project, "other", "tilesets.txt"))
        assert not os.path.exists(pool(project, "other", "map001.txt"))

    def test_maps_pool_in_first_seen_order(self, project):
        extract(project)
        assert read_file(pool(project, "maps", "maps.txt")).split("\n") == [
            "Welcome, traveller.\\#Rest a while.",
            "Will you help us?",
            "Yes",
            "No",
            "Thank you!",
            "Rest a while.",
            "Halt!\\#Welcome, traveller.",
            "Move along.",
        ]
        assert read_file(pool(project, "maps", "names.txt")) == "Village"
        assert read_file(pool(project, "maps", "maps_trans.txt")) == "\n" * 7

    def test_output_dir(self, project, tmp_path):
        work = str(tmp_path / "work")
        extract(project, work)
        assert os.path.isfile(os.path.join(work, "translation", "maps", "maps.txt"))

    def test_disabled_corpora(self, project):
        extract(project, config=EngineConfig(disabled={"maps", "system"}))
        assert not os.path.exists(pool(project, "maps"))
        assert not os.path.exists(pool(project, "other", "system.txt"))
        assert os.path.isfile(pool(project, "other", "items.txt"))

    def test_append_keeps_translations(self, project):
        extract(project)
        names = pool(project, "maps", "names")
        write_text(names + "_trans.txt", "Dorf")

        doc = json.loads(read_file(os.path.join(project, "original", "Map002.json")))
        doc["displayName"] = "Castle"
        write_text(os.path.join(project, "original", "Map002.json"), dump_json(doc))

        report = extract(project, config=EngineConfig(mode=ProcessingMode.APPEND))

        assert report.pools["names"] == 1
        assert read_file(names + ".txt") == "Village\nCastle"
        assert read_file(names + "_trans.txt") == "Dorf\n"

    def test_second_read_keeps_filled_pools(self, project):
        extract(project)
        names = pool(project, "maps", "names_trans.txt")
        write_text(names, "Dorf")

        report = extract(project)
        assert report.total_units == 0
        assert read_file(names) == "Dorf"

        extract(project, config=EngineConfig(mode=ProcessingMode.FORCE))
        assert read_file(names) == ""

    def test_data_folder_fallback(self, tmp_path):
        project = write_project(tmp_path, folder="data")
        extract(project)
        assert os.path.isfile(pool(project, "maps", "maps.txt"))

    def test_no_data_folder(self, tmp_path):
        with pytest.raises(IOFailure):
            extract(str(tmp_path))

    def test_schema_error_names_file(self, tmp_path):
        files = dict(ORIGINAL_FILES)
        files["Map003.json"] = {"displayName": "", "events": {"1": None}}
        project = write_project(tmp_path, files)

        with pytest.raises(SchemaViolation) as exc_info:
            extract(project)
        assert exc_info.value.file_path.endswith("Map003.json")
        assert exc_info.value.field == "events"

    def test_invalid_utf8_names_file(self, tmp_path):
        project = write_project(tmp_path)
        with open(os.path.join(project, "original", "Items.json"), "wb") as f:
            f.write(b'[null,{"id":1,"name":"\xff\xfe"}]')

        with pytest.raises(SchemaViolation) as exc_info:
            extract(project)
        assert exc_info.value.file_path.endswith("Items.json")

    def test_termina_detected(self, tmp_path):
        files = dict(ORIGINAL_FILES)
        files["System.json"] = dict(ORIGINAL_FILES["System.json"],
                                    gameTitle="Fear & Hunger 2: Termina")
        project = write_project(tmp_path, files)

        assert extract(project).title is GameTitle.TERMINA
        assert "GabText sign_1" in read_file(pool(project, "maps", "maps.txt"))

        off = extract(project, config=EngineConfig(custom_parsing=False))
        assert off.title is None


class TestInject:

    def test_blank_translations_reproduce_originals(self, project):
        extract(project)
        report = inject(project)

        assert report.replaced == 0
        for filename, data in ORIGINAL_FILES.items():
            if filename == "Tilesets.json":
                assert not os.path.exists(output(project, filename))
                continue
            assert read_file(output(project, filename)) == dump_json(data)

    def test_identity_translations_reproduce_originals(self, project):
        extract(project)
        fill_identity(project)
        report = inject(project)

        assert report.missed == 0
        assert report.replaced > 0
        for filename in ("Map001.json", "Map002.json", "Items.json",
                         "CommonEvents.json", "System.json"):
            assert read_file(output(project, filename)) \
                == dump_json(ORIGINAL_FILES[filename])

    def test_windows_line_breaks_survive_round_trip(self, tmp_path):
        files = dict(ORIGINAL_FILES)
        files["Items.json"] = [None, {"id": 1, "name": "Potion",
                                      "description": "Line one\r\nLine two",
                                      "note": ""}]
        project = write_project(tmp_path, files)

        extract(project)
        inject(project)
        assert read_file(output(project, "Items.json")) == dump_json(files["Items.json"])

        fill_identity(project)
        report = inject(project)
        assert report.stats["other"].missed == 0
        assert read_file(output(project, "Items.json")) == dump_json(files["Items.json"])

    def test_translation_applied(self, project):
        extract(project)
        write_text(pool(project, "maps", "maps_trans.txt"),
                   "Willkommen!\\#Ruh dich aus.\n\nJa\nNein\n\n\n\nWeiter.")
        write_text(pool(project, "maps", "names_trans.txt"), "Dorf")

        report = inject(project)

        map001 = json.loads(read_file(output(project, "Map001.json")))
        cmds = map001["events"][1]["pages"][0]["list"]
        assert map001["displayName"] == "Dorf"
        assert [c["parameters"][0] for c in cmds[:2]] == ["Willkommen!", "Ruh dich aus."]
        assert cmds[4]["parameters"][0] == ["Ja", "Nein"]

        map002 = json.loads(read_file(output(project, "Map002.json")))
        assert map002["events"][1]["pages"][1]["list"][0]["parameters"][0] == "Weiter."
        assert report.stats["maps"].replaced == 7

    def test_mismatch_aborts_before_writing(self, project):
        extract(project)
        write_text(pool(project, "maps", "maps_trans.txt"), "\n" * 20)

        with pytest.raises(PoolMismatch):
            inject(project)
        assert not os.path.exists(os.path.join(project, "output"))

    def test_shuffle_is_repeatable(self, project):
        extract(project)
        fill_identity(project)
        config = EngineConfig(shuffle_level=2)

        inject(project, config=config)
        first = read_file(output(project, "Map001.json"))
        inject(project, config=config)

        assert read_file(output(project, "Map001.json")) == first

    def test_plugins_for_termina(self, tmp_path):
        files = dict(ORIGINAL_FILES)
        files["System.json"] = dict(ORIGINAL_FILES["System.json"],
                                    gameTitle="Fear & Hunger 2: Termina")
        project = write_project(tmp_path, files)
        plugins = [{"name": "YEP_ItemCore", "status": True, "description": "",
                    "parameters": {"Item Name": "Items"}}]
        plugins_dir = os.path.join(project, "translation", "plugins")
        write_text(os.path.join(plugins_dir, "plugins.json"), json.dumps(plugins))
        write_text(os.path.join(plugins_dir, "plugins.txt"), "Items")
        write_text(os.path.join(plugins_dir, "plugins_trans.txt"), "Objets")

        extract(project)
        report = inject(project)

        js = read_file(os.path.join(project, "output", "js", "plugins.js"))
        assert js.startswith("var $plugins =\n")
        assert json.loads(js.split("\n", 1)[1])[0]["parameters"]["Item Name"] == "Objets"
        assert report.stats["plugins"].replaced == 1

    def test_plugins_ignored_for_other_titles(self, project):
        write_text(os.path.join(project, "translation", "plugins", "plugins.json"), "[]")
        extract(project)
        inject(project)
        assert not os.path.exists(os.path.join(project, "output", "js"))

    def test_new_event_after_extract_is_untouched(self, project):
        extract(project)
        fill_identity(project)
        doc = json.loads(read_file(os.path.join(project, "original", "Map002.json")))
        doc["events"].append({"id": 2, "pages": [{"list": [cmd(401, "Brand new")]}]})
        write_text(os.path.join(project, "original", "Map002.json"), dump_json(doc))

        report = inject(project)

        assert report.stats["maps"].missed == 1
        assert read_file(output(project, "Map002.json")) == dump_json(doc)
