"""Shared types for dive-ci: RuleStatus, RuleResult, Rule, ConfigurableRule, RuleDefinition."""

from __future__ import annotations

import abc
import enum
from collections.abc import Callable
from typing import Any, NamedTuple

from dive_ci.core.analysis import AnalysisResult


class RuleStatus(enum.IntEnum):
    """Outcome kinds for a rule. Categorical, the values carry no ranking."""

    UNKNOWN = 0  # zero-value sentinel, never a legitimate evaluator output
    PASSED = 1
    FAILED = 2
    WARNING = 3
    DISABLED = 4

    @property
    def label(self) -> str:
        return status_label(self)

    def __str__(self) -> str:
        return status_label(self)


_LABELS: dict[int, str] = {
    RuleStatus.PASSED: 'PASS',
    RuleStatus.FAILED: 'FAIL',
    RuleStatus.WARNING: 'WARN',
    RuleStatus.DISABLED: 'SKIP',
}


def status_label(status: Any) -> str:
    """Map a status to its display label. Anything unrecognised is 'Unknown'."""
    if isinstance(status, bool) or not isinstance(status, int):
        return 'Unknown'
    return _LABELS.get(int(status), 'Unknown')


class RuleResult(NamedTuple):
    """(status, message) pair returned by every evaluation. Empty message on success."""

    status: RuleStatus
    message: str = ''


Evaluator = Callable[[AnalysisResult, str], RuleResult]


class Rule(abc.ABC):
    """A named, configured, executable check."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def key(self) -> str:
        """Stable identifier, matching the `rules.<key>` config entry."""

    @property
    @abc.abstractmethod
    def configuration(self) -> str:
        """Raw configuration value bound at construction."""

    @abc.abstractmethod
    def evaluate(self, analysis: AnalysisResult) -> RuleResult:
        """Check the analysis result. Bad configuration yields FAILED, never an exception."""


class ConfigurableRule(Rule):
    """Rule bound to a raw config string and the evaluator that interprets it.

    The config value is not validated here; parse errors surface as a
    FAILED result when the rule is evaluated.
    """

    __slots__ = ('_key', '_config_value', '_evaluator')

    def __init__(self, key: str, config_value: str, evaluator: Evaluator):
        self._key = key
        self._config_value = config_value
        self._evaluator = evaluator

    @property
    def key(self) -> str:
        return self._key

    @property
    def configuration(self) -> str:
        return self._config_value

    def evaluate(self, analysis: AnalysisResult) -> RuleResult:
        return self._evaluator(analysis, self._config_value)

    def __repr__(self) -> str:
        return f'ConfigurableRule(key={self._key!r}, configuration={self._config_value!r})'


class RuleDefinition:
    """A self-registering rule kind.

    Usage in a rule module:

        rule = RuleDefinition(key='lowestEfficiency', help='Fail below an efficiency floor')

        @rule.evaluator
        def evaluate(analysis, value):
            ...
    """

    def __init__(self, key: str, help: str = ''):
        self.key = key
        self.help = help
        self._evaluate_fn: Evaluator | None = None

    def evaluator(self, fn: Evaluator) -> Evaluator:
        """Decorator to register the evaluator function."""
        self._evaluate_fn = fn
        return fn

    def bind(self, config_value: str) -> ConfigurableRule:
        """Build a rule instance holding the given raw config value."""
        if self._evaluate_fn is None:
            raise RuntimeError(f'Rule {self.key} has no evaluator')
        return ConfigurableRule(self.key, config_value, self._evaluate_fn)
