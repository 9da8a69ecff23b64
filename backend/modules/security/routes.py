"""
Security endpoints: CSRF token bootstrap and CSP violation reports.

Both are mounted without the CSRF dependency; CSP reports are sent by
the browser itself and carry no token.
"""

import json
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from shared.logging_config import safe_context

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/csrf-token")
async def get_csrf_token(request: Request) -> JSONResponse:
    """Return this browser's token in the body and the X-CSRF-Token header."""
    container = request.app.state.container
    token = request.state.context.csrf_token
    return JSONResponse(
        {"success": True, "csrfToken": token},
        headers={container.csrf.header_name: token},
    )


@router.post("/csp-report", status_code=204)
async def csp_report(request: Request) -> Response:
    try:
        report = json.loads(await request.body())
    except ValueError:
        logger.error("Error processing CSP violation report")
        return JSONResponse(
            {"success": False, "error": "Invalid report format"}, status_code=400
        )

    logger.warning(
        "CSP Violation Report: %s",
        safe_context(
            report=report,
            url=str(request.url),
            user_agent=request.headers.get("user-agent"),
        ),
    )
    return Response(status_code=204)


@router.options("/csp-report")
async def csp_report_preflight() -> Response:
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Methods": "POST",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )
