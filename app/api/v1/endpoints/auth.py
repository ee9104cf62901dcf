"""
Authentication endpoints for the gateway API.
"""
import logging
from fastapi import APIRouter, Depends, Response, Request

from api.deps import get_app_settings, get_current_user, get_user_repository
from core.config import Settings
from middlewares.authentication import GatewayUser
from models.auth import AuthStatus, LoginRequest, Token
from repositories.user_repository import UserRepositoryInterface
from services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=Token)
async def login(
    login_request: LoginRequest,
    response: Response,
    repo: UserRepositoryInterface = Depends(get_user_repository),
    app_settings: Settings = Depends(get_app_settings)
):
    """使用帳號密碼登入並取得 JWT token"""
    auth_service = AuthService(app_settings.jwt)
    user = await auth_service.authenticate_user(repo, login_request.username, login_request.password)
    token = auth_service.create_access_token(user)

    # Browsers send the cookie with static file requests
    response.set_cookie(
        key=app_settings.jwt.cookie_name,
        value=token.access_token,
        max_age=token.expires_in,
        httponly=True,
        secure=not app_settings.is_development,
        samesite="lax",
    )
    return token


@router.post("/logout", response_model=dict)
async def logout(response: Response, app_settings: Settings = Depends(get_app_settings)):
    """清除登入 cookie"""
    response.delete_cookie(app_settings.jwt.cookie_name)
    return {"message": "Logged out"}


@router.get("/me", response_model=AuthStatus)
async def me(request: Request, user: GatewayUser = Depends(get_current_user)):
    """目前的身分與 claims"""
    return AuthStatus(
        authenticated=True,
        user_id=user.user_id,
        user_name=user.user_name,
        full_name=user.full_name,
        role=user.role,
        scopes=list(request.auth.scopes),
    )
