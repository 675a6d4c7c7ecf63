from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

logger = logging.getLogger("misc.routes")

# Stamped on every response, including preflight acks and 404s
COMMON_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Maintained by hand, not derived from the registered routes.
# Update it whenever a public route is added or removed.
AVAILABLE_ROUTES = ["/health", "/api/data"]


def raw_request_path(scope: dict) -> str:
    """Path exactly as the client sent it: still percent-encoded, without the query string."""
    raw = scope.get("raw_path")
    if raw is None:
        return scope["path"]
    return raw.split(b"?", 1)[0].decode("latin-1")


async def common_headers_middleware(request: Request, call_next):
    """Answer CORS preflights for any path and add the JSON/CORS headers to every response."""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        # Route on the undecoded path so /heal%74h is not /health
        request.scope["path"] = raw_request_path(request.scope)
        response = await call_next(request)
    response.headers.update(COMMON_HEADERS)
    return response


def not_found_payload(path: str) -> dict:
    return {
        "error": "Not Found",
        "message": f"Route {path} not found",
        "availableRoutes": list(AVAILABLE_ROUTES),
    }


async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths (404) and known paths hit with another method (405) are both "not found"
    if exc.status_code not in (404, 405):
        return await http_exception_handler(request, exc)
    path = raw_request_path(request.scope)
    logger.debug(f"No route for {request.method} {path}")
    return JSONResponse(status_code=404, content=not_found_payload(path))
