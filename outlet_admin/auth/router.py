import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from outlet_admin.auth.mock_users import APP_VERSION, InvalidCredentials, current_user, login_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


class SLogin(BaseModel):
    email: str | None = None
    password: str | None = None


@router.post("/login")
async def login(data: SLogin):
    if not data.email or not data.password:
        return JSONResponse({"error": "Email and password required"}, status_code=400)

    try:
        user = login_user(data.email, data.password)
    except InvalidCredentials as e:
        logger.info("Rejected login for %s", data.email)
        return JSONResponse({"error": str(e)}, status_code=401)

    return {
        "user": user,
        "token": "mock-access-token",
        "refresh": "mock-refresh-token",
        "app_version": APP_VERSION,
    }


@router.get("/me")
async def me():
    user = current_user()
    return {
        "id": user["id"],
        "fullname": user["name"],
        "email": user["email"],
        "phone": None,
        "app_version": APP_VERSION,
    }


@router.get("/my-outlets")
async def my_outlets():
    outlets = current_user()["outlets"]
    return {
        "msg": "Success",
        "data": [
            {
                "business_name": outlet["name"],
                "outlet_id": outlet["id"],
                "user_role_id": "admin",
            }
            for outlet in outlets
        ],
        "pagination": {"total": len(outlets)},
        "error": False,
        "app_version": APP_VERSION,
    }
