"""Run every CI rule against one analysis result and aggregate the outcome.

The gate fails when any rule FAILED. WARNING and DISABLED outcomes are
reported but never fail the gate.

A rule configured with the value `disabled` is skipped and recorded as
DISABLED without calling its evaluator:

    rules:
      highestWastedBytes: disabled

Mapping the result to a process exit code is up to the caller;
GateReport.exit_code gives the usual 0/1 convention.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from dive_ci.core.analysis import AnalysisResult
from dive_ci.core.types import Rule, RuleStatus
from dive_ci.registry import ConfigSource, load_rules

logger = logging.getLogger(__name__)

DISABLED_VALUE = 'disabled'
DISABLED_MESSAGE = 'rule disabled'


@dataclass(frozen=True)
class RuleOutcome:
    """Result of one rule: what was checked, with which threshold, and how it went."""

    key: str
    configuration: str
    status: RuleStatus
    message: str = ''


@dataclass
class GateReport:
    """Per-rule outcomes for one analysis result."""

    outcomes: list[RuleOutcome] = field(default_factory=list)

    def count(self, status: RuleStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def failed(self) -> bool:
        return any(o.status is RuleStatus.FAILED for o in self.outcomes)

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def status(self) -> RuleStatus:
        return RuleStatus.FAILED if self.failed else RuleStatus.PASSED

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def get(self, key: str) -> RuleOutcome:
        for outcome in self.outcomes:
            if outcome.key == key:
                return outcome
        raise KeyError(key)


def is_disabled(configuration: str) -> bool:
    return configuration.strip().lower() == DISABLED_VALUE


def evaluate_rule(rule: Rule, analysis: AnalysisResult) -> RuleOutcome:
    """Evaluate one rule. Raises RuntimeError if the evaluator returns no real status."""
    if is_disabled(rule.configuration):
        return RuleOutcome(rule.key, rule.configuration, RuleStatus.DISABLED, DISABLED_MESSAGE)

    status, message = rule.evaluate(analysis)
    if not isinstance(status, RuleStatus) or status is RuleStatus.UNKNOWN:
        raise RuntimeError(f'Rule {rule.key} returned invalid status {status!r}')
    return RuleOutcome(rule.key, rule.configuration, status, message)


def evaluate_rules(rules: Iterable[Rule], analysis: AnalysisResult) -> GateReport:
    """Evaluate every rule once against the same analysis result."""
    report = GateReport()
    for rule in rules:
        outcome = evaluate_rule(rule, analysis)
        logger.debug('%s: %s %s', outcome.key, outcome.status.label, outcome.message)
        report.outcomes.append(outcome)
    return report


def run_gate(analysis: AnalysisResult, config: ConfigSource | Mapping[str, str]) -> GateReport:
    """Load the rule catalog from config and evaluate it."""
    report = evaluate_rules(load_rules(config), analysis)
    logger.info('CI gate %s (%d rules)', report.status.label, len(report.outcomes))
    return report
