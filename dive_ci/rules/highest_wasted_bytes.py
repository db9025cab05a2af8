"""Fail when the image wastes more bytes than allowed.

Config: rules.highestWastedBytes — a human-readable size parsed by
humanfriendly.parse_size:

    1000, 10MB, 1.5 GB   decimal (SI) units
    10MiB, 1GiB          binary units

Negative sizes and unknown units fail to parse.

FAILED if wasted_bytes > threshold. Equal values pass.

Example .dive-ci:
    rules:
      highestWastedBytes: 20MB
"""

from humanfriendly import InvalidSize, parse_size

from dive_ci.core.analysis import AnalysisResult
from dive_ci.core.types import RuleDefinition, RuleResult, RuleStatus
from dive_ci.rules._parse import invalid_config

rule = RuleDefinition(
    key='highestWastedBytes',
    help='Highest allowable bytes wasted (e.g. 20MB, 512KiB).',
)


@rule.evaluator
def evaluate(analysis: AnalysisResult, value: str) -> RuleResult:
    try:
        threshold = parse_size(value)
    except InvalidSize as err:
        return invalid_config(value, err)

    if analysis.wasted_bytes > threshold:
        return RuleResult(
            RuleStatus.FAILED,
            f'too many bytes wasted (wasted-bytes={analysis.wasted_bytes} > threshold={threshold})',
        )
    return RuleResult(RuleStatus.PASSED, '')
