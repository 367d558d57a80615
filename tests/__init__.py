# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Contact Manager API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_contact_service.py: ContactService against a mocked store
# - test_contacts_api.py: Contact, dashboard and health endpoints
# - test_auth.py: Token verification, login and session endpoints
# - test_views.py: View states, guards and the page shell
#
# Run tests with: poetry run pytest
# =============================================================================
