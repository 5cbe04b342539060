from sqlalchemy.orm import Session

from hireflow.core.clock import utcnow
from hireflow.models.candidate_profile import CandidateProfile, CandidateSkill

MAX_SKILL_LENGTH = 100


def get_profile(db: Session, user_id: str) -> CandidateProfile | None:
    return db.query(CandidateProfile).filter(CandidateProfile.user_id == user_id).first()


def _get_or_create(db: Session, user_id: str) -> CandidateProfile:
    profile = get_profile(db, user_id)
    if profile is None:
        profile = CandidateProfile(user_id=user_id)
        db.add(profile)
    return profile


def upsert(db: Session, user_id: str, **fields) -> CandidateProfile:
    """Create the profile on first write; only keys passed with a non-None value are changed."""
    profile = _get_or_create(db, user_id)
    for key in ("headline", "location", "experience_years", "bio"):
        value = fields.get(key)
        if value is not None:
            setattr(profile, key, value)
    profile.updated_at = utcnow()
    db.commit()
    db.refresh(profile)
    return profile


def upsert_resume_url(db: Session, user_id: str, resume_url: str) -> CandidateProfile:
    profile = _get_or_create(db, user_id)
    profile.resume_url = resume_url
    profile.updated_at = utcnow()
    db.commit()
    db.refresh(profile)
    return profile


def normalize_skills(skills: list[str]) -> list[str]:
    """Trim, drop blanks and case-insensitive duplicates, keep first spelling."""
    seen = set()
    result = []
    for raw in skills:
        skill = (raw or "").strip()[:MAX_SKILL_LENGTH]
        if not skill or skill.lower() in seen:
            continue
        seen.add(skill.lower())
        result.append(skill)
    return result


def replace_skills(db: Session, user_id: str, skills: list[str]) -> list[str]:
    cleaned = normalize_skills(skills)
    db.query(CandidateSkill).filter(CandidateSkill.user_id == user_id).delete(synchronize_session=False)
    for skill in cleaned:
        db.add(CandidateSkill(user_id=user_id, skill=skill))
    db.commit()
    return get_skills(db, user_id)


def get_skills(db: Session, user_id: str) -> list[str]:
    rows = (
        db.query(CandidateSkill.skill)
        .filter(CandidateSkill.user_id == user_id)
        .order_by(CandidateSkill.skill.asc())
        .all()
    )
    return [skill for (skill,) in rows]
