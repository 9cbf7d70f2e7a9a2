"""
Auth API Endpoints

Registration, sign-in/out and password reset against the identity provider.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, Response, status

from talenteval.api.deps import get_auth_service, get_current_user, get_profile_store
from talenteval.auth import AuthService, AuthUser, SessionPersistence
from talenteval.config import settings
from talenteval.core.schemas import (
    AuthUserSchema,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    SessionSchema,
)
from talenteval.storage.profiles import ProfileStore

router = APIRouter()


def _session_response(user: AuthUser, persistence: SessionPersistence) -> SessionSchema:
    return SessionSchema(
        user=AuthUserSchema(
            uid=user.uid,
            email=user.email,
            email_verified=user.email_verified,
            display_name=user.display_name,
        ),
        id_token=user.id_token or "",
        persistence=persistence.value,
    )


def _set_session_cookie(response: Response, user: AuthUser, persistence: SessionPersistence) -> None:
    # No max_age makes it a browser-session cookie
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        user.id_token or "",
        max_age=settings.SESSION_COOKIE_MAX_AGE
        if persistence is SessionPersistence.LOCAL
        else None,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post("/register", response_model=SessionSchema, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    profiles: ProfileStore = Depends(get_profile_store),
) -> SessionSchema:
    """Create an account and a pending profile awaiting admin approval."""
    user = await auth.register(payload.email, payload.password)
    await profiles.create_profile(
        user.uid,
        {"email": user.email or payload.email, "display_name": payload.display_name},
    )

    _set_session_cookie(response, user, auth.persistence)
    return _session_response(user, auth.persistence)


@router.post("/login", response_model=SessionSchema)
async def login(
    payload: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> SessionSchema:
    """Sign in; `remember` keeps the session cookie across browser restarts."""
    user = await auth.login(payload.email, payload.password, remember=payload.remember)

    _set_session_cookie(response, user, auth.persistence)
    return _session_response(user, auth.persistence)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response, auth: AuthService = Depends(get_auth_service)) -> None:
    await auth.logout()
    response.delete_cookie(settings.SESSION_COOKIE_NAME)


@router.post("/reset-password", status_code=status.HTTP_202_ACCEPTED)
async def reset_password(
    payload: PasswordResetRequest, auth: AuthService = Depends(get_auth_service)
) -> dict[str, str]:
    """Request a password reset notice. Delivery is not confirmed."""
    await auth.reset_password(payload.email)
    return {"status": "sent"}


@router.get("/me", response_model=AuthUserSchema)
async def me(user: AuthUser = Depends(get_current_user)) -> AuthUserSchema:
    return AuthUserSchema(
        uid=user.uid,
        email=user.email,
        email_verified=user.email_verified,
        display_name=user.display_name,
    )
