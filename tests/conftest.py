"""Pytest configuration and shared fixtures."""

import pytest

from oncall.engine.orchestrator import OnCallScheduler


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def make_scheduler():
    """Factory for a scheduler with `team_size` people named RA 1..N (ra1@example.com...)."""

    def _make(team_size, start="2025-01-06", end="2025-01-12", primary=1, secondary=1):
        scheduler = OnCallScheduler()
        scheduler.set_shift_counts(primary, secondary)
        for i in range(team_size):
            scheduler.add_person(f"RA {i + 1}", f"ra{i + 1}@example.com")
        scheduler.set_date_range(start, end)
        return scheduler

    return _make
