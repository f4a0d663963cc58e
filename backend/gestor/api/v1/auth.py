"""
Authentication API Routes
"""
from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.orm import Session

from gestor.core.config import settings
from gestor.core.database import get_db
from gestor.core.security import create_access_token, get_current_user
from gestor.schemas import LoginRequest, SignupRequest, Token, UserResponse
from gestor.services.user_service import UserService
from gestor.api.v1.common import write_operation

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_token_cookie(response: Response, token: str):
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/signup", response_model=Token)
async def signup(
    signup_data: SignupRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Register a new user account"""
    user_service = UserService(db)
    with write_operation(db, "Erro ao criar conta"):
        user = user_service.create(signup_data)

    access_token = create_access_token(data={"sub": str(user.id)})
    _set_token_cookie(response, access_token)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db)
):
    """Login and get access token"""
    user_service = UserService(db)
    user = user_service.authenticate(login_data.email, login_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha inválidos"
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Conta de usuário desativada"
        )
    db.commit()

    access_token = create_access_token(data={"sub": str(user.id)})
    _set_token_cookie(response, access_token)
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie("access_token")
    return {"message": "Sessão encerrada"}


@router.get("/me", response_model=UserResponse)
async def read_me(current_user=Depends(get_current_user)):
    """Get the authenticated user"""
    return current_user
