from fastapi import APIRouter, Depends

from tenthouse.core.deps import require_admin
from tenthouse.core.security import authenticate_admin, create_admin_token
from tenthouse.schemas.auth import AdminOut, LoginIn, Token

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=Token)
def login(data: LoginIn):
    username = authenticate_admin(data.username, data.password)
    return Token(access_token=create_admin_token(username))

@router.get("/me", response_model=AdminOut)
def me(username: str = Depends(require_admin)):
    return AdminOut(username=username)
