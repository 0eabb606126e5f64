"""ASGI request lifecycle.

One request moves through RECEIVING -> PARSED -> AUTHORIZING -> HANDLING ->
RESPONDED and never goes back. Public routes skip AUTHORIZING; a route miss,
a bad body or a failed auth gate jump straight to RESPONDED.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import Response

from kcnotes.errors import ApiError, BadRequest, NotFound, Unauthorized
from kcnotes.http.context import RequestContext, RequestState, Services
from kcnotes.http.responses import send_error
from kcnotes.http.router import Match, Router
from kcnotes.utils.jwt_auth import check_auth

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, router: Router, services: Optional[Services] = None):
        self.router = router
        self.services = services

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] != "http":
            # lifespan is owned by the FastAPI shell
            return
        request = Request(scope, receive)
        response = await self.handle(request)
        await response(scope, receive, send)

    async def handle(self, request: Request) -> Response:
        if self.services is None:
            raise RuntimeError("Dispatcher used before startup")

        method = request.method.upper()
        path = request.scope["path"]
        ctx = RequestContext(method=method, path=path, headers=request.headers, services=self.services)

        try:
            response = await self._run(request, ctx)
        except ApiError as exc:
            response = send_error(exc.status_code, exc.message)
        except Exception:
            logger.exception("Unhandled error on %s %s", method, path)
            response = send_error()

        if ctx.state is not RequestState.RESPONDED:
            ctx.advance(RequestState.RESPONDED)
        logger.info("%s %s -> %s", method, path, response.status_code)
        return response

    async def _run(self, request: Request, ctx: RequestContext) -> Response:
        resolved = self.router.resolve(ctx.method, ctx.path)
        if isinstance(resolved, NotFound):
            raise resolved
        match: Match = resolved
        ctx.params = match.params

        chunks: list[bytes] = []
        async for chunk in request.stream():
            chunks.append(chunk)
        ctx.body = b"".join(chunks)

        if match.route.body:
            ctx.payload = _parse_json(ctx.body)
        ctx.advance(RequestState.PARSED)

        if match.route.auth:
            ctx.advance(RequestState.AUTHORIZING)
            identity = check_auth(ctx.headers.get("authorization"), ctx.services.settings)
            if identity is None:
                raise Unauthorized()
            ctx.identity = identity

        ctx.advance(RequestState.HANDLING)
        return await match.route.handler(ctx)


def _parse_json(body: bytes):
    if not body.strip():
        raise BadRequest("Invalid JSON body.")
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise BadRequest("Invalid JSON body.") from exc
