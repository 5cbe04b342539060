from pydantic import BaseModel, EmailStr, field_validator, model_validator

from hireflow.core.statuses import UserRole


class UserRegister(BaseModel):
    email: EmailStr
    name: str
    password: str
    confirm_password: str
    role: UserRole = UserRole.CANDIDATE
    company_name: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self

    @model_validator(mode="after")
    def employer_needs_company(self):
        if self.role == UserRole.EMPLOYER and not (self.company_name or "").strip():
            raise ValueError("Company name is required for employer accounts")
        return self


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    company_name: str | None = None

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    name: str | None = None
    company_name: str | None = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
