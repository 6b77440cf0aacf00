# What it does: Holds the options that steer a resolution call and loads them from an INI file
# How it does: `Options` is an immutable value passed into every call, so nothing is shared between calls. `load_options` reads the `[repo-info]` section with Python's `configparser`
# What data structure it uses: Map / Dictionary (INI sections of key-value pairs, handled by `configparser`)

import configparser
import os
from dataclasses import dataclass, replace

DEFAULT_METADATA_DIR = '.git'
CONFIG_SECTION = 'repo-info'


@dataclass(frozen=True)
class Options:
    strict: bool = False
    metadata_dir_name: str = DEFAULT_METADATA_DIR

    def merged(self, **overrides): # Returns a copy with the non-None overrides applied
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)


def load_options(path=None, **overrides): # Reads options from an INI file, then applies explicit overrides on top
    config = configparser.ConfigParser()
    if path and os.path.exists(path):
        config.read(path)

    options = Options(
        strict=config.getboolean(CONFIG_SECTION, 'strict', fallback=False),
        metadata_dir_name=config.get(CONFIG_SECTION, 'metadata-dir', fallback=DEFAULT_METADATA_DIR),
    )
    return options.merged(**overrides)
