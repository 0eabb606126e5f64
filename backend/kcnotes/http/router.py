"""Route table and matcher.

Routes are declared as ``(method, pattern)`` pairs and compiled once into
anchored regular expressions. A ``{name}`` placeholder captures a single path
segment, except the last placeholder of a pattern, which captures the rest of
the path. That keeps the prefix behaviour of the service: ``/notes/{note_id}``
answers every path under ``/notes/`` once the exact ``/notes`` route has not
matched.

Routers nest the way FastAPI's ``APIRouter`` does: a sub-router carries a
prefix and its own not-found message, and ``include_router`` merges it into
the root table.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Pattern, Union

from fastapi.responses import Response

from kcnotes.errors import NotFound
from kcnotes.http.context import RequestContext

Handler = Callable[[RequestContext], Awaitable[Response]]

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def compile_pattern(pattern: str) -> Pattern[str]:
    names = _PLACEHOLDER.findall(pattern)
    out = []
    pos = 0
    for i, m in enumerate(_PLACEHOLDER.finditer(pattern)):
        out.append(re.escape(pattern[pos:m.start()]))
        tail = i == len(names) - 1
        out.append(f"(?P<{m.group(1)}>.+)" if tail else f"(?P<{m.group(1)}>[^/]+)")
        pos = m.end()
    out.append(re.escape(pattern[pos:]))
    return re.compile("^" + "".join(out) + "$")


@dataclass(frozen=True)
class Route:
    method: str
    pattern: str
    handler: Handler
    auth: bool = False
    body: bool = False
    regex: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", compile_pattern(self.pattern))

    def match(self, method: str, path: str) -> Optional[dict[str, str]]:
        if method != self.method:
            return None
        m = self.regex.match(path)
        return m.groupdict() if m else None


@dataclass(frozen=True)
class Match:
    route: Route
    params: dict[str, str]


class Router:
    def __init__(self, prefix: str = "", not_found_message: str = NotFound.default_message):
        self.prefix = prefix.rstrip("/")
        self.not_found_message = not_found_message
        self.routes: list[Route] = []
        self._children: list[Router] = []

    # -- registration -------------------------------------------------------

    def add_route(self, method: str, path: str, handler: Handler, auth: bool = False, body: bool = False) -> Route:
        full = self.prefix + path if path != "/" else (self.prefix or "/")
        route = Route(method=method.upper(), pattern=full, handler=handler, auth=auth, body=body)
        self.routes.append(route)
        return route

    def route(self, method: str, path: str, auth: bool = False, body: bool = False) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.add_route(method, path, handler, auth=auth, body=body)
            return handler

        return decorator

    def get(self, path: str, auth: bool = False) -> Callable[[Handler], Handler]:
        return self.route("GET", path, auth=auth)

    def post(self, path: str, auth: bool = False, body: bool = True) -> Callable[[Handler], Handler]:
        return self.route("POST", path, auth=auth, body=body)

    def patch(self, path: str, auth: bool = False, body: bool = True) -> Callable[[Handler], Handler]:
        return self.route("PATCH", path, auth=auth, body=body)

    def delete(self, path: str, auth: bool = False) -> Callable[[Handler], Handler]:
        return self.route("DELETE", path, auth=auth)

    def include_router(self, child: "Router") -> None:
        self._children.append(child)

    # -- resolution ---------------------------------------------------------

    def owns(self, path: str) -> bool:
        if not self.prefix:
            return True
        return path == self.prefix or path.startswith(self.prefix + "/")

    def resolve(self, method: str, path: str) -> Union[Match, NotFound]:
        """Pick exactly one route for ``method path`` or a not-found terminal.

        Own routes are tried first in registration order, then the first child
        router whose prefix owns the path decides, including its not-found.
        """
        method = method.upper()
        for route in self.routes:
            params = route.match(method, path)
            if params is not None:
                return Match(route=route, params=params)
        for child in self._children:
            if child.owns(path):
                return child.resolve(method, path)
        return NotFound(self.not_found_message)

    def iter_routes(self) -> list[Route]:
        out = list(self.routes)
        for child in self._children:
            out.extend(child.iter_routes())
        return out
