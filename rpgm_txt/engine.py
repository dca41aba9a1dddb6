"""Disk-level read and write phases.

``extract`` walks the original documents and writes the pool files a
translator fills in; ``inject`` reads the filled pools back and writes
translated copies of the documents.  Both take an :class:`EngineConfig`
and share no state between calls.
"""

import logging
import os
import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from .classifier import GameTitle, TitleProfile, detect_title, get_profile
from .config import EngineConfig
from .errors import SchemaViolation
from .extractor import CorpusExtractor
from .injector import CorpusInjector, InjectStats
from .plugins import inject_plugins, render_plugins_js
from .project_layout import ProjectLayout, entity_stem
from .schema import dump_json, game_title, load_json
from .shuffle import shuffle_translation_map
from .text_pool import TextPool, pool_paths, write_pool, write_text
from .translation_map import load_translation_map

log = logging.getLogger(__name__)


@dataclass
class ExtractReport:
    title: Optional[GameTitle] = None
    # pool name -> units newly written
    pools: dict = field(default_factory=dict)

    @property
    def total_units(self) -> int:
        return sum(self.pools.values())


@dataclass
class InjectReport:
    title: Optional[GameTitle] = None
    # corpus -> replaced/missed counts
    stats: dict = field(default_factory=dict)
    written: list = field(default_factory=list)

    @property
    def replaced(self) -> int:
        return sum(s.replaced for s in self.stats.values())

    @property
    def missed(self) -> int:
        return sum(s.missed for s in self.stats.values())


def _run_on_file(path: str, func, *args):
    """Call *func*, binding any bare SchemaViolation to *path*."""
    try:
        return func(*args)
    except SchemaViolation as exc:
        if exc.file_path is None:
            raise exc.in_file(path) from exc
        raise


def detect_game_title(layout: ProjectLayout,
                      config: EngineConfig) -> Optional[GameTitle]:
    if not config.custom_parsing or not os.path.isfile(layout.system_path):
        return None
    return detect_title(game_title(load_json(layout.system_path)))


def _resolve(input_dir, output_dir, config):
    layout = ProjectLayout.resolve(input_dir, output_dir)
    title = detect_game_title(layout, config)
    profile: TitleProfile = get_profile(title)
    if title is not None:
        log.info("Detected game title profile: %s", profile.name)
    return layout, title, profile


# ── Read phase ────────────────────────────────────────────────────────

def extract(input_dir: str, output_dir: Optional[str] = None,
            config: Optional[EngineConfig] = None) -> ExtractReport:
    """Write the pool files of every enabled corpus."""
    config = config or EngineConfig()
    layout, title, profile = _resolve(input_dir, output_dir, config)
    extractor = CorpusExtractor(profile, config.romanize)
    report = ExtractReport(title=title)

    def save(pool: TextPool, directory: str, stem: str):
        original_path, translation_path = pool_paths(directory, stem)
        report.pools[stem] = write_pool(pool, original_path, translation_path,
                                        config.mode, config.messages)
        if config.log_files:
            log.info("%s %s", config.messages.write, original_path)

    def read_map(filename: str):
        path = layout.original_path(filename)
        data = load_json(path)
        keys = _run_on_file(path, extractor.extract_map, data, filename)
        name = _run_on_file(path, extractor.extract_display_name, data)
        if config.log_files:
            log.info("%s %s", config.messages.read, filename)
        return keys, name

    def read_entities(filename: str) -> TextPool:
        path = layout.original_path(filename)
        pool = _run_on_file(path, extractor.extract_entities,
                            filename, load_json(path))
        if config.log_files:
            log.info("%s %s", config.messages.read, filename)
        return pool

    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        if config.enabled("maps"):
            maps_pool, names_pool = TextPool(), TextPool()
            # Union in sorted filename order so first-seen order is stable
            for keys, name in executor.map(read_map, layout.list_map_files()):
                maps_pool.update(keys)
                if name:
                    names_pool.add(name)
            save(maps_pool, layout.maps_dir, "maps")
            save(names_pool, layout.maps_dir, "names")

        if config.enabled("other"):
            files = layout.list_entity_files()
            for filename, pool in zip(files, executor.map(read_entities, files)):
                save(pool, layout.other_dir, entity_stem(filename))

    if config.enabled("system"):
        path = layout.system_path
        pool = _run_on_file(path, extractor.extract_system, load_json(path))
        if config.log_files:
            log.info("%s %s", config.messages.read, path)
        save(pool, layout.other_dir, "system")

    log.info("Extracted %d new units into %d pools",
             report.total_units, len(report.pools))
    return report


# ── Write phase ───────────────────────────────────────────────────────

def _load_translations(config: EngineConfig, layout: ProjectLayout,
                       profile: TitleProfile) -> dict:
    """Build every translation map of the run, before any document is read.

    Keys are ``"maps"``, ``"names"``, ``"system"``, ``"plugins"`` and the
    entity file names.  Line count mismatches surface here.
    """
    maps = {}
    if config.enabled("maps"):
        maps["maps"] = load_translation_map(*pool_paths(layout.maps_dir, "maps"))
        maps["names"] = load_translation_map(*pool_paths(layout.maps_dir, "names"))
    if config.enabled("other"):
        for filename in layout.list_entity_files():
            maps[filename] = load_translation_map(
                *pool_paths(layout.other_dir, entity_stem(filename)))
    if config.enabled("system"):
        maps["system"] = load_translation_map(
            *pool_paths(layout.other_dir, "system"))
    if config.enabled("plugins") and os.path.isfile(layout.plugins_path):
        if profile.plugin_names:
            # Hand-maintained pool: lines are used exactly as written
            maps["plugins"] = load_translation_map(
                *pool_paths(layout.plugins_dir, "plugins"),
                unescape=False, strip=False)
        else:
            log.warning(config.messages.plugins_skipped)

    if config.shuffle_level:
        rng = random.Random(config.seed)
        for name in maps:
            maps[name] = shuffle_translation_map(
                maps[name], config.shuffle_level, rng)
    return maps


def inject(input_dir: str, output_dir: Optional[str] = None,
           config: Optional[EngineConfig] = None) -> InjectReport:
    """Write translated copies of every enabled corpus to ``output/``."""
    config = config or EngineConfig()
    layout, title, profile = _resolve(input_dir, output_dir, config)
    translations = _load_translations(config, layout, profile)
    injector = CorpusInjector(profile, config.romanize)
    report = InjectReport(title=title)

    def save(path: str, content: str):
        write_text(path, content)
        report.written.append(path)
        if config.log_files:
            log.info("%s %s", config.messages.write, path)

    def write_document(filename: str, func, *args) -> InjectStats:
        path = layout.original_path(filename)
        data = load_json(path)
        stats = _run_on_file(path, func, data, *args)
        save(os.path.join(layout.output_data_dir, filename), dump_json(data))
        return stats

    def write_map(filename: str) -> InjectStats:
        return write_document(filename, injector.inject_map,
                              translations["maps"], translations["names"],
                              filename)

    def write_entities(filename: str) -> InjectStats:
        return write_document(
            filename,
            lambda data: injector.inject_entities(
                filename, data, translations[filename]))

    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        if config.enabled("maps"):
            total = InjectStats()
            for stats in executor.map(write_map, layout.list_map_files()):
                total += stats
            report.stats["maps"] = total

        if config.enabled("other"):
            total = InjectStats()
            for stats in executor.map(write_entities, layout.list_entity_files()):
                total += stats
            report.stats["other"] = total

    if config.enabled("system"):
        report.stats["system"] = write_document(
            os.path.basename(layout.system_path), injector.inject_system,
            translations["system"])

    if "plugins" in translations:
        plugins = load_json(layout.plugins_path)
        report.stats["plugins"] = _run_on_file(
            layout.plugins_path, inject_plugins,
            plugins, translations["plugins"], profile)
        save(os.path.join(layout.output_js_dir, "plugins.js"),
             render_plugins_js(plugins))

    log.info("Replaced %d units, %d left untranslated",
             report.replaced, report.missed)
    return report
