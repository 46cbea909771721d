# -*- coding: utf-8 -*-
import os
import copy
import json
import logging

logger = logging.getLogger(__name__)

ENV_VAR = "TASKNEST_SETTINGS"

DEFAULTS = {
    "app": {
        "search": True,
        "encoding": "utf-8",
    },
    "config": {
        "buildfiles": ["Nestfile", "Nestfile.py"],
    },
    "output": {
        "level": "INFO",
        "quiet": False,
    },
    "context": {
        "include": [],
        "imports": {},
    },
}

_default_settings = None


def default():
    """Return the process-wide settings store, creating it on first use.
    If the ``TASKNEST_SETTINGS`` environment variable names a JSON file,
    it's imported into the new store."""
    global _default_settings
    if _default_settings is None:
        _default_settings = Settings(DEFAULTS)
        if ENV_VAR in os.environ:
            _default_settings.import_file(os.environ[ENV_VAR])
    return _default_settings


def merge(target, source):
    """Deep-merge ``source`` into ``target``. Nested dicts are merged,
    everything else (lists included) replaces the old value."""
    for key, value in source.items():
        if isinstance(value, dict):
            if not isinstance(target.get(key), dict):
                target[key] = dict()
            merge(target[key], value)
        else:
            target[key] = value
    return target


class Settings(object):
    """A key/value store addressed by dotted keys, e.g.
    ``settings.get("output.level")``. Interested parties can
    :meth:`tasknest.settings.Settings.connect` to hear about changes.

    :keyword defaults: Initial values; deep-copied.
    :type defaults: dict

    """

    def __init__(self, defaults=None):
        self.current = copy.deepcopy(defaults) if defaults else dict()
        self._listeners = list()


    def get(self, key, default=None):
        node = self.current
        for name in key.split("."):
            if not isinstance(node, dict) or node.get(name) is None:
                return default
            node = node[name]
        return node

    __getitem__ = get


    def set(self, key, value):
        path = key.split(".")
        node = self.current
        for name in path[:-1]:
            if not isinstance(node.get(name), dict):
                node[name] = dict()
            node = node[name]
        node[path[-1]] = value
        logger.debug("Setting `%s' = `%r'", key, value)
        self._notify(key, value)

    __setitem__ = set


    def update(self, values):
        merge(self.current, values)
        self._notify(None, None)


    def import_file(self, path):
        """Merge the settings in a JSON file. Missing files are ignored."""
        if not os.path.isfile(path):
            logger.debug("No settings file at %s", path)
            return
        with open(path, encoding="utf-8-sig") as f:
            values = json.load(f)
        logger.info("Loaded settings from %s", path)
        self.update(values)


    def connect(self, callback):
        """Call ``callback(key, value)`` after every change. Bulk changes
        from :meth:`update` and :meth:`import_file` pass ``(None, None)``."""
        self._listeners.append(callback)

    def disconnect(self, callback):
        self._listeners.remove(callback)


    def _notify(self, key, value):
        for callback in list(self._listeners):
            callback(key, value)
