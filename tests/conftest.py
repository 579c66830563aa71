"""Shared pytest configuration."""


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large-store tests excluded from regular runs")
