# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the web starter:
# - test_config.py: Settings defaults, lenient parsing, fail-fast port
# - test_models.py: Pydantic model validation
# - test_user_repository.py: MongoDB queries against a mocked collection
# - test_user_service.py: Business rules on an in-memory repository
# - test_users_api.py / test_home.py / test_health.py: HTTP endpoints
# - test_main.py: App factory modes and startup
#
# Run tests with: pytest
# =============================================================================
