from hireflow.models.user import User
from hireflow.models.candidate_profile import CandidateProfile, CandidateSkill
from hireflow.models.job import Job
from hireflow.models.application import Application
from hireflow.models.application_event import ApplicationEvent
from hireflow.models.saved_job import SavedJob
from hireflow.models.user_settings import UserSettings

__all__ = [
    "User",
    "CandidateProfile",
    "CandidateSkill",
    "Job",
    "Application",
    "ApplicationEvent",
    "SavedJob",
    "UserSettings",
]
