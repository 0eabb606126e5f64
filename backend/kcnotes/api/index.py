from kcnotes.api import auth, notes
from kcnotes.http.context import RequestContext
from kcnotes.http.responses import send_html
from kcnotes.http.router import Router

WELCOME = "Hello, Kodecamp"


async def index(ctx: RequestContext):
    return send_html(WELCOME)


def build_router() -> Router:
    """Root route table: the index page plus the /auth and /notes routers."""
    root = Router()
    root.add_route("GET", "/", index)
    root.include_router(auth.router)
    root.include_router(notes.router)
    return root
