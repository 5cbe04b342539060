import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hireflow.core.errors import ConflictError, UnauthenticatedError
from hireflow.core.security import create_access_token, verify_password
from hireflow.database import get_db
from hireflow.dependencies import get_current_user
from hireflow.models.user import User
from hireflow.repos.user_repo import create as create_user, get_by_email, update as update_user
from hireflow.schemas.auth import Token, UserLogin, UserRegister, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _token_for(user: User) -> Token:
    return Token(
        access_token=create_access_token(user.id, user.role),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    if get_by_email(db, data.email):
        raise ConflictError("Email already registered")
    try:
        user = create_user(
            db,
            data.email,
            data.password,
            name=data.name,
            role=data.role.value,
            company_name=data.company_name,
        )
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Email already registered") from e
    logger.info("User registered: %s role=%s", user.email, user.role)
    return _token_for(user)


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = get_by_email(db, data.email)
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Login failed for email=%s", data.email)
        raise UnauthenticatedError("Invalid email or password")
    logger.info("User logged in: %s", user.email)
    return _token_for(user)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserResponse)
def update_me(
    data: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update display name and, for employers, company name. Role and email are fixed."""
    return update_user(db, user.id, name=data.name, company_name=data.company_name)
