import logging

from sqlalchemy.orm import Session

from hireflow.core.security import hash_password, generate_id
from hireflow.core.statuses import UserRole
from hireflow.models.user import User

logger = logging.getLogger(__name__)


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    email: str,
    password: str,
    *,
    name: str,
    role: str,
    company_name: str | None = None,
) -> User:
    if role != UserRole.EMPLOYER.value:
        company_name = None
    user = User(
        id=generate_id(),
        email=email.strip().lower(),
        name=name.strip(),
        password_hash=hash_password(password),
        role=role,
        company_name=(company_name or "").strip() or None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    name: str | None = None,
    company_name: str | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if name is not None:
        user.name = name.strip()
    if company_name is not None and user.is_employer:
        user.company_name = company_name.strip() or None
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    """Delete a user; owned rows go with it through ON DELETE CASCADE."""
    user = get_by_id(db, user_id)
    if not user:
        return False
    try:
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Deleting user %s failed", user_id)
        raise
    return True
