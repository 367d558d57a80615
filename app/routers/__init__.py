# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - contacts.py: Contact CRUD endpoints
# - dashboard.py: Dashboard summary endpoint
# - pages.py: Client view states and the HTML5-mode page shell
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import contacts
from . import dashboard
from . import pages

__all__ = [
    "health",
    "contacts",
    "dashboard",
    "pages",
]
