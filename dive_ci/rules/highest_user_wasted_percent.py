"""Fail when wasted bytes are too large a share of the user-added bytes.

Config: rules.highestUserWastedPercent — a float ceiling, compared against
the upstream wasted-user-percent figure.

FAILED if threshold < wasted_user_percent. Equal values pass.

Example .dive-ci:
    rules:
      highestUserWastedPercent: 0.20
"""

from dive_ci.core.analysis import AnalysisResult
from dive_ci.core.types import RuleDefinition, RuleResult, RuleStatus
from dive_ci.rules._parse import invalid_config, parse_float

rule = RuleDefinition(
    key='highestUserWastedPercent',
    help='Highest allowable percentage of bytes wasted, relative to the user bytes added.',
)


@rule.evaluator
def evaluate(analysis: AnalysisResult, value: str) -> RuleResult:
    try:
        threshold = parse_float(value)
    except ValueError as err:
        return invalid_config(value, err)

    if threshold < analysis.wasted_user_percent:
        return RuleResult(
            RuleStatus.FAILED,
            'too many bytes wasted, relative to the user bytes added '
            f'(%-user-wasted-bytes={analysis.wasted_user_percent} > threshold={threshold})',
        )
    return RuleResult(RuleStatus.PASSED, '')
