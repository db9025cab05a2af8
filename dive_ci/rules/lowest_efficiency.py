"""Fail when image efficiency drops below a floor.

Config: rules.lowestEfficiency — a float, compared against the analysis
efficiency as produced upstream (0.95 means 95% efficient).

FAILED if threshold > efficiency. Equal values pass.

Example .dive-ci:
    rules:
      lowestEfficiency: 0.95
"""

from dive_ci.core.analysis import AnalysisResult
from dive_ci.core.types import RuleDefinition, RuleResult, RuleStatus
from dive_ci.rules._parse import invalid_config, parse_float

rule = RuleDefinition(
    key='lowestEfficiency',
    help='Lowest allowable image efficiency (as a ratio between 0-1).',
)


@rule.evaluator
def evaluate(analysis: AnalysisResult, value: str) -> RuleResult:
    try:
        threshold = parse_float(value)
    except ValueError as err:
        return invalid_config(value, err)

    if threshold > analysis.efficiency:
        return RuleResult(
            RuleStatus.FAILED,
            f'image efficiency is too low (efficiency={analysis.efficiency} < threshold={threshold})',
        )
    return RuleResult(RuleStatus.PASSED, '')
