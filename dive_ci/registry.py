"""Rule catalog: discovery of rule kinds and binding them to configuration.

Rule modules live in dive_ci/rules/ and each define a `rule` object of
type RuleDefinition. They are imported in RULE_KEYS order so the catalog
always lists rules the same way. Order only matters for display; rules
are evaluated independently.

Adding a rule kind means adding a module and listing it below. The Rule
contract does not change.
"""

import importlib
import logging
from collections.abc import Mapping
from typing import Protocol

from dive_ci.core.config import CiConfig, to_string
from dive_ci.core.types import Rule, RuleDefinition

logger = logging.getLogger(__name__)

# (config key, module name), in catalog order
_RULE_MODULES = [
    ('lowestEfficiency', 'lowest_efficiency'),
    ('highestWastedBytes', 'highest_wasted_bytes'),
    ('highestUserWastedPercent', 'highest_user_wasted_percent'),
]

RULE_KEYS: tuple[str, ...] = tuple(key for key, _mod in _RULE_MODULES)

_registry: dict[str, RuleDefinition] = {}


class ConfigSource(Protocol):
    def get_string(self, key: str) -> str: ...


def discover() -> dict[str, RuleDefinition]:
    """Import all rule modules and return the registry, in catalog order."""
    if _registry:
        return _registry

    found: dict[str, RuleDefinition] = {}
    for key, modname in _RULE_MODULES:
        module = importlib.import_module(f'dive_ci.rules.{modname}')
        definition = getattr(module, 'rule', None)
        if not isinstance(definition, RuleDefinition):
            raise RuntimeError(f'dive_ci.rules.{modname} defines no RuleDefinition named `rule`')
        if definition.key != key:
            raise RuntimeError(f'dive_ci.rules.{modname} registers {definition.key!r}, expected {key!r}')
        if key in found:
            raise RuntimeError(f'Duplicate rule key: {key}')
        found[key] = definition

    _registry.update(found)
    return _registry


def get(key: str) -> RuleDefinition:
    """Get a rule definition by key."""
    reg = discover()
    if key not in reg:
        raise KeyError(f'Unknown rule: {key}. Available: {", ".join(reg)}')
    return reg[key]


def config_key(rule_key: str) -> str:
    """Config entry holding the threshold for a rule."""
    return f'rules.{rule_key}'


def _lookup(config: ConfigSource | Mapping[str, str], key: str) -> str:
    if hasattr(config, 'get_string'):
        return config.get_string(key)
    # flat dotted keys first, then a nested {'rules': {...}} table
    if key in config:
        return to_string(config[key])
    return CiConfig(config).get_string(key)


def load_rules(config: ConfigSource | Mapping[str, str]) -> list[Rule]:
    """Build one rule per known key, bound to its raw configured value.

    Values are not validated here. A missing key binds '' which fails
    closed at evaluation time.
    """
    rules: list[Rule] = []
    for key, definition in discover().items():
        value = _lookup(config, config_key(key))
        logger.debug('rule %s configured with %r', key, value)
        rules.append(definition.bind(value))
    return rules
