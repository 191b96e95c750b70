"""Integration tests for the Prometheus CLI.

This package contains integration tests that validate complete user workflows
against a configuration file in a temporary directory.

Test Structure:
- test_config_profiles.py: Profile management and legacy upgrades on disk
- test_cli.py: The `prom config` command group end to end
"""
