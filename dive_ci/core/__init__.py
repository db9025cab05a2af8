"""dive_ci.core — Foundation layer.

Contains the rule contract, status enum, analysis value object, config
accessor and report builder. Nothing here imports dive_ci.rules at module
load; config.load_ci_config() reads the built-in rule keys lazily.
"""
