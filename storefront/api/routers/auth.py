from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_auth_service
from storefront.api.errors import ok, to_http
from storefront.domain.errors import UserExistsError, ValidationError
from storefront.domain.schemas import LoginIn, RegisterIn
from storefront.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    try:
        user = svc.register(payload.email, payload.password, payload.name)
    except (UserExistsError, ValidationError) as e:
        raise to_http(e)
    return ok(user, message="User registered successfully")


@router.post("/login")
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    user = svc.login(payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    # the user id doubles as the bearer token until real sessions exist
    return ok(user, token=user.id, message="Login successful")
