"""Pytest configuration for next-a11y.

pythonpath in pyproject.toml puts both src/ and the project root on
sys.path, so tests import shared helpers as ``tests.a11y_test_utils``.
"""

from unittest.mock import MagicMock


def scan_use_case_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for ScanProjectUseCase. Pass overrides to customize."""
    base = {
        "filesystem": MagicMock(),
        "parser": MagicMock(),
        "fixer": MagicMock(),
        "score_store": MagicMock(),
        "telemetry": MagicMock(),
    }
    base.update(overrides)
    return base
