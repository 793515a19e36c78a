from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from storefront.domain.schemas import RequestResetIn, ResetPasswordIn, SigninIn, SignupIn
from storefront.services.auth_service import AuthService
from storefront.services.password_reset_service import PasswordResetService
from storefront.services.session_service import apply_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service() -> AuthService:
    return AuthService()


def get_reset_service() -> PasswordResetService:
    return PasswordResetService()


@router.post("/signup", status_code=201)
def signup(payload: SignupIn, response: Response, svc: AuthService = Depends(get_auth_service)):
    result = svc.signup(payload.email, payload.password, payload.name)
    apply_session_cookie(response, result.cookie)
    return result.user


@router.post("/signin")
def signin(payload: SigninIn, response: Response, svc: AuthService = Depends(get_auth_service)):
    result = svc.signin(payload.email, payload.password)
    apply_session_cookie(response, result.cookie)
    return result.user


@router.post("/signout")
def signout(response: Response, svc: AuthService = Depends(get_auth_service)):
    result = svc.signout()
    apply_session_cookie(response, result.cookie)
    return {"message": result.message}


@router.post("/request-reset")
def request_reset(payload: RequestResetIn, svc: PasswordResetService = Depends(get_reset_service)):
    result = svc.request_reset(payload.email)
    return {"message": result.message}


@router.post("/reset")
def reset_password(payload: ResetPasswordIn, response: Response, svc: PasswordResetService = Depends(get_reset_service)):
    result = svc.reset_password(payload.reset_token, payload.password, payload.confirm_password)
    apply_session_cookie(response, result.cookie)
    return result.user
