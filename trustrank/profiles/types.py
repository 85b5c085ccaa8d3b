"""TrustRank – Profile subsystem types.

This module defines the in-memory representation of member profiles
consumed by the encoder, the concept tagger and the ranking engine.
Profiles are read-only snapshots owned by an external profile store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


MBA_DEGREE: str = "MBA"


@dataclass(frozen=True)
class Education:
    """Single education entry on a profile.

    Attributes:
        school_name: Free-text school name as entered by the member.
        degree: Degree label (e.g. "Bachelor's", "MBA").
        field_of_study: Optional free-text field of study.
    """

    school_name: str
    degree: Optional[str] = None
    field_of_study: Optional[str] = None

    @property
    def is_mba(self) -> bool:
        return (self.degree or "").strip().upper() == MBA_DEGREE


@dataclass(frozen=True)
class Profile:
    """Snapshot of the profile fields the engine reads.

    Attributes:
        user_id: Identifier of the member.
        intention: Main networking intention (e.g. "learnGrow").
        experience_level: Experience level (e.g. "Senior").
        career_stage: Career stage (e.g. "founder").
        industry: Industry label (e.g. "FinTech").
        skills: Skills the member lists.
        hobbies: Hobbies the member lists.
        values: Value tags the member lists.
        skills_to_learn: Skills the member wants to learn.
        skills_to_teach: Skills the member can teach.
        years_of_experience: Years of professional experience.
        profile_completion: Completion fraction, nominally in [0, 1].
        is_verified: Whether the member is a verified professional.
        current_company: Free-text current employer.
        educations: Education history.
    """

    user_id: str
    intention: Optional[str] = None
    experience_level: Optional[str] = None
    career_stage: Optional[str] = None
    industry: Optional[str] = None
    skills: Tuple[str, ...] = ()
    hobbies: Tuple[str, ...] = ()
    values: Tuple[str, ...] = ()
    skills_to_learn: Tuple[str, ...] = ()
    skills_to_teach: Tuple[str, ...] = ()
    years_of_experience: float = 0.0
    profile_completion: float = 0.0
    is_verified: bool = False
    current_company: Optional[str] = None
    educations: Tuple[Education, ...] = field(default_factory=tuple)
