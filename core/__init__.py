# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the contact manager's logic:
# - models/: Pydantic schemas for data validation
# - services/: Contact store operations
# - views.py: The client's routed view states and guards
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
