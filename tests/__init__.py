"""
Test Suite for Perf Telemetry.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Monitor lifecycle and end-to-end flows
    - fixtures/: Shared sample configuration

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest --cov=src/perf_telemetry         # With coverage
"""
