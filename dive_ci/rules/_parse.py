"""Threshold parsing shared by the built-in rules."""

from dive_ci.core.types import RuleResult, RuleStatus


def parse_float(value: str) -> float:
    """Parse a float threshold. Raises ValueError on bad input, including ''."""
    return float(value)


def invalid_config(value: str, err: Exception) -> RuleResult:
    return RuleResult(RuleStatus.FAILED, f"invalid config value ('{value}'): {err}")
