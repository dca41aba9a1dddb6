"""Translation of plugin parameters (js/plugins.js).

Plugin parameters are free-form, so only plugins whitelisted by the title
profile are touched.  Their pools are maintained by hand: lines are neither
escaped nor trimmed.
"""

import logging

from .classifier import TitleProfile
from .errors import SchemaViolation
from .injector import InjectStats
from .schema import dump_json

log = logging.getLogger(__name__)

OPTIONS_CORE = "YEP_OptionsCore"
# Not a JSON value but a packed string; translated by substring replacement
OPTIONS_CATEGORIES = "OptionsCategories"

PLUGINS_JS_PREFIX = "var $plugins =\n"


def inject_plugins(plugins, translations: dict,
                   profile: TitleProfile) -> InjectStats:
    """Translate the parameters of whitelisted plugins in place."""
    if not isinstance(plugins, list):
        raise SchemaViolation("expected an array of plugins", field="$")

    stats = InjectStats()
    for i, plugin in enumerate(plugins):
        if not isinstance(plugin, dict):
            raise SchemaViolation("expected an object", field=f"[{i}]")
        name = plugin.get("name")
        if name not in profile.plugin_names:
            continue
        params = plugin.get("parameters")
        if not isinstance(params, dict):
            raise SchemaViolation("expected an object",
                                  field=f"[{i}].parameters")

        for key, value in params.items():
            if not isinstance(value, str):
                continue
            if name == OPTIONS_CORE and key == OPTIONS_CATEGORIES:
                packed = value
                for original, translated in translations.items():
                    packed = packed.replace(original, translated, 1)
                if packed != value:
                    params[key] = packed
                    stats.replaced += 1
            elif value in translations:
                params[key] = translations[value]
                stats.replaced += 1
            elif value:
                stats.missed += 1
    log.debug("Plugins: %d replaced, %d missed", stats.replaced, stats.missed)
    return stats


def render_plugins_js(plugins) -> str:
    return PLUGINS_JS_PREFIX + dump_json(plugins)
