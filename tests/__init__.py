# Tests Package
"""
Test suite for alert-trigger.

- unit/: Component-level tests
- test_config.py: Settings and TriggerConfig validation
- test_cli.py: End-to-end command runs against a mock Alertmanager
"""
