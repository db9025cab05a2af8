"""Report builder — plain text and JSON output for a gate run."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from dive_ci.core.types import RuleStatus

if TYPE_CHECKING:
    from dive_ci.gate import GateReport

_COLUMNS = ('Rule', 'Status', 'Configuration', 'Message')


def summary_line(report: GateReport) -> str:
    return (
        f'Result:{report.status.label} '
        f'[Total:{len(report.outcomes)}] '
        f'[Passed:{report.count(RuleStatus.PASSED)}] '
        f'[Failed:{report.count(RuleStatus.FAILED)}] '
        f'[Warn:{report.count(RuleStatus.WARNING)}] '
        f'[Skipped:{report.count(RuleStatus.DISABLED)}]'
    )


def format_text(report: GateReport) -> str:
    """Format report as an aligned table followed by a summary line."""
    rows = [(o.key, o.status.label, o.configuration, o.message) for o in report.outcomes]
    widths = [max([len(col)] + [len(row[i]) for row in rows]) for i, col in enumerate(_COLUMNS)]

    def _line(cells: tuple[str, ...]) -> str:
        # message column is left unpadded
        return '  '.join(c.ljust(w) for c, w in zip(cells[:-1], widths[:-1])) + '  ' + cells[-1]

    lines = [_line(_COLUMNS).rstrip()]
    lines.extend(_line(row).rstrip() for row in rows)
    lines.append('')
    lines.append(summary_line(report))
    return '\n'.join(lines)


def format_json(report: GateReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'rules': [
            {
                'key': o.key,
                'status': o.status.label,
                'configuration': o.configuration,
                'message': o.message,
            }
            for o in report.outcomes
        ],
        'summary': {
            'result': report.status.label,
            'total': len(report.outcomes),
            'pass': report.count(RuleStatus.PASSED),
            'fail': report.count(RuleStatus.FAILED),
            'warn': report.count(RuleStatus.WARNING),
            'skip': report.count(RuleStatus.DISABLED),
        },
    }
    return json.dumps(obj, indent=2)
