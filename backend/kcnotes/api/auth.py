from __future__ import annotations

from fastapi import status
from fastapi.concurrency import run_in_threadpool

from kcnotes.errors import BadRequest, Unauthorized
from kcnotes.http.context import RequestContext
from kcnotes.http.responses import send_success
from kcnotes.http.router import Router
from kcnotes.http.validation import validate_body
from kcnotes.models.auth import SigninRequest, SignupRequest
from kcnotes.utils.auth_hash import hash_password, verify_password
from kcnotes.utils.jwt_auth import create_access_token

router = Router(prefix="/auth", not_found_message="Auth route not found.")

INVALID_CREDENTIALS = "Invalid credentials."


@router.post("/signup")
async def signup(ctx: RequestContext):
    req = validate_body(SignupRequest, ctx.payload)
    users = ctx.services.users

    # check-then-insert is not atomic; two racing signups can still collide
    if users.get(req.username) is not None:
        raise BadRequest("User already exists.")

    # hashing is CPU bound; keep it off the event loop
    hashed = await run_in_threadpool(hash_password, req.password)
    user = users.create(req.username, hashed)
    token = create_access_token(user.id, user.username, ctx.services.settings)
    return send_success({"token": token}, message="Sign up success.", status_code=status.HTTP_201_CREATED)


@router.post("/signin")
async def signin(ctx: RequestContext):
    req = validate_body(SigninRequest, ctx.payload)

    rec = ctx.services.users.get(req.username)
    if rec is None:
        raise BadRequest(INVALID_CREDENTIALS)
    if not await run_in_threadpool(verify_password, req.password, rec.hashed_password):
        raise BadRequest(INVALID_CREDENTIALS)

    token = create_access_token(rec.id, rec.username, ctx.services.settings)
    return send_success({"token": token}, message="Sign in success.")


@router.get("/me", auth=True)
async def me(ctx: RequestContext):
    identity = ctx.require_identity()
    user = ctx.services.users.get_by_id(identity.user_id)
    if user is None:
        # valid signature, but the account is gone
        raise Unauthorized()

    notes = ctx.services.notes.list_notes(user_id=user.id)
    return send_success({"user": user.to_public_dict(), "notes": [n.to_dict() for n in notes]})


@router.get("/signout", auth=True)
async def signout(ctx: RequestContext):
    # tokens are stateless; the client drops its copy
    return send_success({"token": None}, message="Sign out success.")
