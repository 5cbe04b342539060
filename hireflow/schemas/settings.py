from enum import Enum

from pydantic import BaseModel


class Theme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class SettingsResponse(BaseModel):
    job_alerts_email: bool
    job_alerts_push: bool
    activity_emails: bool
    marketing_emails: bool
    login_alerts: bool
    two_factor: bool
    theme: Theme

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    job_alerts_email: bool | None = None
    job_alerts_push: bool | None = None
    activity_emails: bool | None = None
    marketing_emails: bool | None = None
    login_alerts: bool | None = None
    two_factor: bool | None = None
    theme: Theme | None = None
