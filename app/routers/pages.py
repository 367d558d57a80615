# =============================================================================
# app/routers/pages.py - Client View Routing
# =============================================================================
# Serves the single-page client in HTML5 mode: every non-API path is
# resolved against the view state table (core/views.py), its guard is
# applied, and the page shell for that state is returned.
#
# Endpoints:
#   GET /api/v1/views          - the state table
#   GET /api/v1/views/resolve  - resolve a path without rendering
#   GET /{path}                - page shell (mounted last in main.py)
# =============================================================================

import html
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from app.auth import get_current_user_optional, AuthUser
from app.exceptions import ContactManagerException
from core.views import STATES, Resolution, resolve

logger = logging.getLogger(__name__)

# JSON endpoints, mounted under /api/v1
api_router = APIRouter()

# HTML catch-all, mounted at the root after every other router
router = APIRouter()

PAGE_SHELL = """<!DOCTYPE html>
<html lang="en" ng-app="app">
<head>
    <meta charset="utf-8">
    <base href="/">
    <title>{title}</title>
</head>
<body>
    <div ui-view
         data-state="{state}"
         data-template-url="{template_url}"
         data-params="{params}"></div>
</body>
</html>
"""


def render_shell(resolution: Resolution) -> str:
    """Page shell for a resolved state."""
    state = resolution.state
    params = "&".join(f"{key}={value}" for key, value in resolution.params.items())
    return PAGE_SHELL.format(
        title=html.escape(state.title),
        state=html.escape(state.name),
        template_url=html.escape(state.template_url),
        params=html.escape(params),
    )


# =============================================================================
# JSON Endpoints
# =============================================================================

@api_router.get("/views")
async def list_views():
    """The client's view states, in match order."""
    return {"states": [state.to_dict() for state in STATES]}


@api_router.get("/views/resolve")
async def resolve_view(
    path: Annotated[str, Query(description="Browser path to resolve")] = "/",
    user: AuthUser | None = Depends(get_current_user_optional),
):
    """
    Resolve a path for the current visitor.

    `redirect` is set when the state's guard sends the visitor elsewhere.
    """
    return resolve(path, logged_in=user is not None).to_dict()


# =============================================================================
# Page Shell
# =============================================================================

@router.get("/{full_path:path}", include_in_schema=False)
async def serve_page(
    full_path: str,
    user: AuthUser | None = Depends(get_current_user_optional),
):
    """
    Render the client page for any non-API path.

    A guard redirect is a 303 to the target state's url. Otherwise the
    shell is returned with 404 for notFound, 401 for unauthorized.
    """
    if full_path.startswith("api/"):
        # Unknown API routes stay JSON
        raise ContactManagerException(
            message=f"No API route: /{full_path}",
            code="ROUTE_NOT_FOUND",
            status_code=404,
        )

    resolution = resolve("/" + full_path, logged_in=user is not None)

    if resolution.redirect_to is not None:
        target = resolution.redirect_to.href()
        logger.debug(f"Guard on {resolution.state.name} redirects to {target}")
        return RedirectResponse(url=target, status_code=303)

    return HTMLResponse(
        content=render_shell(resolution),
        status_code=resolution.status_code,
    )
