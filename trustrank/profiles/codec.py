"""TrustRank – Profile wire codec.

Profiles arrive from the external profile store as JSON-like payloads
using snake_case field names. They are validated exactly once here and
converted into immutable :class:`~trustrank.profiles.types.Profile`
snapshots. Each field has a single decoding rule:

- list fields are lists of strings (``null`` is read as empty);
- ``years_of_experience`` and ``profile_completion`` are numbers;
- ``is_verified`` is a boolean (pydantic's lax boolean parsing accepts
  0/1 and "true"/"false" style strings);
- ``educations`` is a list of objects with ``school_name``, ``degree``
  and ``field_of_study``.

A malformed value is skipped and logged rather than failing the
profile: bad list entries are dropped, bad scalars fall back to their
default. Only a missing or non-string ``user_id`` raises
:class:`~trustrank.core.errors.ProfileDecodeError`.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator

from trustrank.core.errors import ProfileDecodeError
from trustrank.core.logging import get_logger
from trustrank.core.types import Payload
from trustrank.profiles.types import Education, Profile


logger = get_logger(__name__)

_STRING_LIST_FIELDS = ("skills", "hobbies", "values", "skills_to_learn", "skills_to_teach")
_OPTIONAL_TEXT_FIELDS = ("intention", "experience_level", "career_stage", "industry", "current_company")
_BOOL: TypeAdapter[bool] = TypeAdapter(bool)


def _skip(info: ValidationInfo, value: Any) -> None:
    logger.warning(
        "decode_profile: user_id=%s skipping malformed %s value %r",
        info.data.get("user_id"),
        info.field_name,
        value,
    )


class EducationRecord(BaseModel):
    """Wire schema for one education entry."""

    model_config = ConfigDict(extra="ignore")

    school_name: str
    degree: Optional[str] = None
    field_of_study: Optional[str] = None


class ProfileRecord(BaseModel):
    """Wire schema for a profile snapshot."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: str
    intention: Optional[str] = Field(default=None, alias="main_intention")
    experience_level: Optional[str] = None
    career_stage: Optional[str] = None
    industry: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    hobbies: List[str] = Field(default_factory=list)
    values: List[str] = Field(default_factory=list)
    skills_to_learn: List[str] = Field(default_factory=list)
    skills_to_teach: List[str] = Field(default_factory=list)
    years_of_experience: float = 0.0
    profile_completion: float = 0.0
    is_verified: bool = False
    current_company: Optional[str] = None
    educations: List[EducationRecord] = Field(default_factory=list)

    @field_validator(*_STRING_LIST_FIELDS, mode="before")
    @classmethod
    def _string_entries(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            _skip(info, value)
            return []
        kept = [item for item in value if isinstance(item, str)]
        for item in value:
            if not isinstance(item, str):
                _skip(info, item)
        return kept

    @field_validator("educations", mode="before")
    @classmethod
    def _education_entries(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            _skip(info, value)
            return []
        kept: List[EducationRecord] = []
        for item in value:
            try:
                kept.append(EducationRecord.model_validate(item))
            except ValidationError:
                _skip(info, item)
        return kept

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def _text_or_none(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or isinstance(value, str):
            return value
        _skip(info, value)
        return None

    @field_validator("years_of_experience", "profile_completion", mode="before")
    @classmethod
    def _number_or_zero(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            _skip(info, value)
            return 0.0

    @field_validator("is_verified", mode="before")
    @classmethod
    def _flag_or_false(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return False
        try:
            return _BOOL.validate_python(value)
        except ValidationError:
            _skip(info, value)
            return False


def decode_profile(payload: Mapping[str, Any]) -> Profile:
    """Decode a profile payload into a :class:`Profile`.

    Raises:
        ProfileDecodeError: If the payload does not match the schema.
    """

    try:
        record = ProfileRecord.model_validate(payload)
    except ValidationError as exc:
        user_id = payload.get("user_id") if isinstance(payload, Mapping) else None
        raise ProfileDecodeError(
            f"Invalid profile payload for user_id={user_id!r}: {exc.error_count()} error(s)",
            user_id=str(user_id) if user_id is not None else None,
        ) from exc

    return Profile(
        user_id=record.user_id,
        intention=record.intention,
        experience_level=record.experience_level,
        career_stage=record.career_stage,
        industry=record.industry,
        skills=tuple(record.skills),
        hobbies=tuple(record.hobbies),
        values=tuple(record.values),
        skills_to_learn=tuple(record.skills_to_learn),
        skills_to_teach=tuple(record.skills_to_teach),
        years_of_experience=record.years_of_experience,
        profile_completion=record.profile_completion,
        is_verified=record.is_verified,
        current_company=record.current_company,
        educations=tuple(
            Education(
                school_name=edu.school_name,
                degree=edu.degree,
                field_of_study=edu.field_of_study,
            )
            for edu in record.educations
        ),
    )


def encode_profile(profile: Profile) -> Payload:
    """Encode a :class:`Profile` into its wire payload."""

    record = ProfileRecord(
        user_id=profile.user_id,
        intention=profile.intention,
        experience_level=profile.experience_level,
        career_stage=profile.career_stage,
        industry=profile.industry,
        skills=list(profile.skills),
        hobbies=list(profile.hobbies),
        values=list(profile.values),
        skills_to_learn=list(profile.skills_to_learn),
        skills_to_teach=list(profile.skills_to_teach),
        years_of_experience=profile.years_of_experience,
        profile_completion=profile.profile_completion,
        is_verified=profile.is_verified,
        current_company=profile.current_company,
        educations=[
            EducationRecord(
                school_name=edu.school_name,
                degree=edu.degree,
                field_of_study=edu.field_of_study,
            )
            for edu in profile.educations
        ],
    )
    return record.model_dump(by_alias=True)
