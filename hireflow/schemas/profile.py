from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    headline: str | None = None
    location: str | None = None
    experience_years: int | None = None
    bio: str | None = None
    resume_url: str | None = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    headline: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    experience_years: int | None = Field(None, ge=0, le=80)
    bio: str | None = None


class ResumeResponse(BaseModel):
    resume_url: str | None = None


class SkillsUpdate(BaseModel):
    skills: list[str] = Field(default_factory=list, max_length=100)


class SkillsResponse(BaseModel):
    skills: list[str]
