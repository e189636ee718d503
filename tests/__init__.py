# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Blink Actions API:
# - test_logger.py: Console logger formatting and stream routing
# - test_config.py: Settings loading and computed values
# - test_autoroutes.py: Route-file discovery and registration
# - test_app.py: Application composition over HTTP (TestClient)
# - test_server.py: Port binding and the startup log line
# - test_targets.py / test_combine.py: RAG target table and combine tool
#
# Run tests with: poetry run pytest
# =============================================================================
