"""Built-in CI rules.

Each module defines a `rule` RuleDefinition and registers its evaluator
with @rule.evaluator. dive_ci.registry loads them in RULE_KEYS order.

Keep the imports below in sync with dive_ci.registry._RULE_MODULES.
"""

import dive_ci.rules.highest_user_wasted_percent as _highest_user_wasted_percent  # noqa: F401
import dive_ci.rules.highest_wasted_bytes as _highest_wasted_bytes  # noqa: F401
import dive_ci.rules.lowest_efficiency as _lowest_efficiency  # noqa: F401
