"""CORS middleware for browser players calling the API directly."""

import falcon.asgi

ALLOWED_HEADERS = "Authorization, Content-Type, X-Access-Code, X-Stream-Token"
EXPOSED_HEADERS = "X-Stream-Token"


class CORSMiddleware:
    """Echoes allowed origins only and answers OPTIONS preflight itself.

    Players read the replacement stream token from X-Stream-Token, so it is
    exposed to scripts.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = set(origins)

    def _apply(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.append_header("Vary", "Origin")
        origin = req.get_header("Origin")
        if not origin or origin not in self._origins:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Access-Control-Allow-Methods", "GET, POST, PUT, DELETE, OPTIONS")
        resp.set_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)
        resp.set_header("Access-Control-Expose-Headers", EXPOSED_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method == "OPTIONS":
            self._apply(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        if req.method != "OPTIONS":
            self._apply(req, resp)
