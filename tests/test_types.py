"""Tests for dive_ci.core.types — status labels and the rule contract."""

import pytest
from dive_ci.core.analysis import AnalysisResult
from dive_ci.core.types import ConfigurableRule, Rule, RuleDefinition, RuleResult, RuleStatus, status_label

ANALYSIS = AnalysisResult(efficiency=0.9, wasted_bytes=0, wasted_user_percent=0.0)


class TestStatusLabel:
    def test_passed(self) -> None:
        assert status_label(RuleStatus.PASSED) == 'PASS'

    def test_failed(self) -> None:
        assert status_label(RuleStatus.FAILED) == 'FAIL'

    def test_warning(self) -> None:
        assert status_label(RuleStatus.WARNING) == 'WARN'

    def test_disabled(self) -> None:
        assert status_label(RuleStatus.DISABLED) == 'SKIP'

    def test_unknown(self) -> None:
        assert status_label(RuleStatus.UNKNOWN) == 'Unknown'

    def test_out_of_range_never_raises(self) -> None:
        for value in (-1, 5, 99, None, 'PASS', 1.0, True, object()):
            assert status_label(value) == 'Unknown'

    def test_plain_int_matches_enum(self) -> None:
        assert status_label(2) == 'FAIL'

    def test_str_and_label(self) -> None:
        assert str(RuleStatus.FAILED) == 'FAIL'
        assert RuleStatus.DISABLED.label == 'SKIP'

    def test_unknown_is_zero_value(self) -> None:
        assert RuleStatus(0) is RuleStatus.UNKNOWN


class TestConfigurableRule:
    def test_accessors(self) -> None:
        rule = ConfigurableRule('someRule', '0.5', lambda a, v: RuleResult(RuleStatus.PASSED, ''))
        assert rule.key == 'someRule'
        assert rule.configuration == '0.5'
        assert isinstance(rule, Rule)

    def test_evaluate_passes_value_through(self) -> None:
        seen = []

        def evaluator(analysis: AnalysisResult, value: str) -> RuleResult:
            seen.append((analysis, value))
            return RuleResult(RuleStatus.WARNING, 'careful')

        rule = ConfigurableRule('someRule', 'raw', evaluator)
        assert rule.evaluate(ANALYSIS) == RuleResult(RuleStatus.WARNING, 'careful')
        assert seen == [(ANALYSIS, 'raw')]

    def test_no_validation_at_construction(self) -> None:
        rule = ConfigurableRule('someRule', 'not-a-number', lambda a, v: RuleResult(RuleStatus.PASSED))
        assert rule.configuration == 'not-a-number'

    def test_immutable(self) -> None:
        rule = ConfigurableRule('someRule', '1', lambda a, v: RuleResult(RuleStatus.PASSED))
        with pytest.raises(AttributeError):
            rule.key = 'other'  # type: ignore[misc]

    def test_no_instance_dict(self) -> None:
        rule = ConfigurableRule('someRule', '1', lambda a, v: RuleResult(RuleStatus.PASSED))
        assert not hasattr(rule, '__dict__')
        with pytest.raises(AttributeError):
            rule.extra = 'x'  # type: ignore[attr-defined]

    def test_rule_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Rule()  # type: ignore[abstract]


class TestRuleDefinition:
    def test_bind(self) -> None:
        definition = RuleDefinition(key='demo', help='demo rule')

        @definition.evaluator
        def evaluate(analysis, value):
            return RuleResult(RuleStatus.PASSED)

        rule = definition.bind('42')
        assert rule.key == 'demo'
        assert rule.configuration == '42'
        assert rule.evaluate(ANALYSIS).status is RuleStatus.PASSED

    def test_bind_without_evaluator(self) -> None:
        with pytest.raises(RuntimeError, match='no evaluator'):
            RuleDefinition(key='empty').bind('')
