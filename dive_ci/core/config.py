"""CI configuration for dive-ci rules.

Sources, lowest precedence first:
  1. YAML config file (.dive-ci by default), e.g.

         rules:
           lowestEfficiency: 0.95
           highestWastedBytes: 20MB
           highestUserWastedPercent: 0.20

  2. .env file at env_file (if given), else walking up from cwd.
  3. The process environment (or the `env` mapping passed in).

Overrides from 2 and 3 use DIVE_CI_<DOTTED_KEY> names with dots turned
into underscores and the key upper-cased, e.g.
DIVE_CI_RULES_LOWESTEFFICIENCY=0.95.

Both file lookups walk up from the start directory and stop at the
nearest .git so nothing is loaded from outside the repo. .env values are
never written into os.environ.

No defaults are applied: a rule with no configured value gets '' and
fails closed when evaluated.
"""

from __future__ import annotations

import copy
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from dive_ci.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = '.dive-ci'
ENV_PREFIX = 'DIVE_CI_'


class CiConfig:
    """Dotted-key string lookup over a nested mapping. Missing keys read as ''."""

    def __init__(self, values: Mapping[str, Any] | None = None, source: Path | None = None):
        self._values: dict[str, Any] = copy.deepcopy(dict(values or {}))
        self.source = source

    def get_string(self, key: str) -> str:
        node: Any = self._values
        for part in key.split('.'):
            if not isinstance(node, Mapping) or part not in node:
                return ''
            node = node[part]
        return to_string(node)

    def set_string(self, key: str, value: str) -> None:
        """Set a dotted key, creating intermediate tables as needed."""
        parts = key.split('.')
        node = self._values
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)


def to_string(value: Any) -> str:
    """Render a config scalar the way get_string() returns it. Tables and None are ''."""
    if value is None or isinstance(value, Mapping):
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value).strip()


def _find_upward(start: Path, name: str) -> Path | None:
    """Walk up from start, return first file called name, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / name
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or a file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export ') :].strip()
        if key:
            result[key] = raw_value.strip().strip('"').strip("'")
    return result


def read_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file. An empty file is an empty config."""
    try:
        with open(path, encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f'{path}: cannot read config: {exc}') from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f'{path}: invalid YAML: {exc}') from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f'{path}: top level must be a mapping, got {type(data).__name__}')
    return dict(data)


def env_name(key: str) -> str:
    """Environment variable that overrides a dotted config key."""
    return ENV_PREFIX + key.replace('.', '_').upper()


def _apply_overrides(config: CiConfig, keys: Iterable[str], env: Mapping[str, str], origin: str) -> None:
    for key in keys:
        name = env_name(key)
        if name in env:
            logger.debug('%s overrides %s from %s', name, key, origin)
            config.set_string(key, env[name])


def load_ci_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    env_file: str | Path | None = None,
    keys: Iterable[str] | None = None,
    start: Path | None = None,
) -> CiConfig:
    """Resolve the CI config from file, .env and environment.

    keys lists the dotted keys that may be overridden from the environment;
    it defaults to every built-in rule key. An explicit path that does not
    exist raises ConfigError; a missing default file is not an error.
    """
    if keys is None:
        from dive_ci.registry import RULE_KEYS

        keys = [f'rules.{k}' for k in RULE_KEYS]
    keys = list(keys)
    start = start or Path.cwd()

    if path is not None:
        config_path: Path | None = Path(path)
        if not config_path.is_file():
            raise ConfigError(f'config file not found: {config_path}')
    else:
        config_path = _find_upward(start, DEFAULT_CONFIG_NAME)

    if config_path is not None:
        logger.debug('loading CI config from %s', config_path)
        config = CiConfig(read_config_file(config_path), source=config_path)
    else:
        logger.debug('no %s file found from %s', DEFAULT_CONFIG_NAME, start)
        config = CiConfig()

    dotenv_path = Path(env_file) if env_file else _find_upward(start, '.env')
    if dotenv_path is not None and dotenv_path.is_file():
        _apply_overrides(config, keys, parse_dotenv(dotenv_path), str(dotenv_path))

    _apply_overrides(config, keys, os.environ if env is None else env, 'environment')
    return config
