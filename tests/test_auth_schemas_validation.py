import pytest
from pydantic import ValidationError

from hireflow.core.statuses import UserRole
from hireflow.schemas.auth import UserRegister


def _register(**kw):
    data = {"email": "u@example.com", "name": "Una", "password": "longenough1", "confirm_password": "longenough1"}
    data.update(kw)
    return UserRegister(**data)


def test_user_register_password_min_and_match_validators():
    with pytest.raises(ValidationError):
        _register(password="short", confirm_password="short")
    with pytest.raises(ValidationError):
        _register(confirm_password="different1")


def test_user_register_defaults_to_candidate():
    data = _register(name="  Una  ")
    assert data.role is UserRole.CANDIDATE
    assert data.name == "Una"


def test_user_register_rejects_blank_name():
    with pytest.raises(ValidationError):
        _register(name="   ")


def test_employer_registration_requires_company():
    with pytest.raises(ValidationError):
        _register(role="employer")
    with pytest.raises(ValidationError):
        _register(role="employer", company_name="  ")
    assert _register(role="employer", company_name="Acme").company_name == "Acme"


def test_unknown_role_is_rejected():
    with pytest.raises(ValidationError):
        _register(role="admin")
