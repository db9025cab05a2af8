"""dive-ci — pass/fail CI gate over precomputed image analysis results."""

from dive_ci.core.analysis import AnalysisResult, load_analysis
from dive_ci.core.config import CiConfig, load_ci_config
from dive_ci.core.errors import AnalysisError, ConfigError
from dive_ci.core.types import ConfigurableRule, Rule, RuleDefinition, RuleResult, RuleStatus, status_label
from dive_ci.gate import GateReport, RuleOutcome, evaluate_rules, run_gate
from dive_ci.registry import RULE_KEYS, load_rules

__all__ = [
    'RULE_KEYS',
    'AnalysisError',
    'AnalysisResult',
    'CiConfig',
    'ConfigError',
    'ConfigurableRule',
    'GateReport',
    'Rule',
    'RuleDefinition',
    'RuleOutcome',
    'RuleResult',
    'RuleStatus',
    'evaluate_rules',
    'load_analysis',
    'load_ci_config',
    'load_rules',
    'run_gate',
    'status_label',
]
