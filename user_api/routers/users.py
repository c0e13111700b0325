from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from user_api.domain.users import user_id_from_path
from user_api.schemas.user import UserCreate, UserUpdate
from user_api.services.user_service import (
    EmailExistsError,
    UserNotFoundError,
    UserService,
    UserServiceError,
    parse_payload,
)

router = APIRouter(tags=["users"])

INVALID_ID_MESSAGE = "Invalid user ID"


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _service_error(exc: UserServiceError) -> JSONResponse:
    if isinstance(exc, UserNotFoundError):
        return error_response(404, exc.message)
    if isinstance(exc, EmailExistsError):
        return error_response(409, exc.message)
    return error_response(400, exc.message)


@router.get("/user")
def list_users(request: Request):
    svc = _get_user_service(request)
    return {"users": svc.list_users()}


@router.post("/user", status_code=201)
async def create_user(request: Request):
    svc = _get_user_service(request)
    body = await request.body()
    try:
        user = await run_in_threadpool(svc.create_user, parse_payload(body, UserCreate))
    except UserServiceError as exc:
        return _service_error(exc)
    return {"message": "User added successfully", "user": user}


# ``path`` so that "/user/" and "/user/1/extra" reach these handlers too;
# the id is always the third segment of the request path.
@router.get("/user/{raw_id:path}")
def get_user(raw_id: str, request: Request):
    user_id = user_id_from_path(request.url.path)
    if user_id is None:
        return error_response(400, INVALID_ID_MESSAGE)
    svc = _get_user_service(request)
    try:
        user = svc.get_user(user_id)
    except UserServiceError as exc:
        return _service_error(exc)
    return {"user": user}


@router.patch("/user/{raw_id:path}")
async def update_user(raw_id: str, request: Request):
    user_id = user_id_from_path(request.url.path)
    if user_id is None:
        return error_response(400, INVALID_ID_MESSAGE)
    svc = _get_user_service(request)
    body = await request.body()
    try:
        user = await run_in_threadpool(svc.update_user, user_id, parse_payload(body, UserUpdate))
    except UserServiceError as exc:
        return _service_error(exc)
    return {"message": "User updated successfully", "user": user}


@router.delete("/user/{raw_id:path}")
def delete_user(raw_id: str, request: Request):
    user_id = user_id_from_path(request.url.path)
    if user_id is None:
        return error_response(400, INVALID_ID_MESSAGE)
    svc = _get_user_service(request)
    try:
        user = svc.delete_user(user_id)
    except UserServiceError as exc:
        return _service_error(exc)
    return {"message": "User deleted successfully", "user": user}
