# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the task API:
# - test_models.py / test_validation.py: Task schema and payload rules
# - test_identity.py / test_responses.py: Request edge helpers
# - test_task_store.py: Store gateway against mocked Supabase
# - test_task_service.py: Operation handlers against an in-memory store
# - test_handler.py: End-to-end event routing and the error boundary
# - test_main.py: Local HTTP server
#
# Run tests with: pytest
# =============================================================================
