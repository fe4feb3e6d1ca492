"""
User profile model.
A profile carries exactly one role-shaped details document, keyed by role.
"""

from mongoengine import (
    Document, EmbeddedDocument, StringField, DateTimeField,
    IntField, ListField, GenericEmbeddedDocumentField, ValidationError
)
from datetime import datetime, timezone

ROLES = ("student", "alumni", "admin", "unset")


class StudentDetails(EmbeddedDocument):
    """Student-specific profile data."""

    college = StringField(default="", db_field="college")
    year = IntField(default=1, min_value=1, db_field="year")
    academic_interests = ListField(StringField(), default=list, db_field="academicInterests")
    goals = StringField(default="", db_field="goals")

    def to_dict(self) -> dict:
        return {
            "college": self.college,
            "year": self.year,
            "academicInterests": list(self.academic_interests),
            "goals": self.goals,
        }


class AlumniDetails(EmbeddedDocument):
    """Alumni-specific profile data."""

    job_title = StringField(default="", db_field="jobTitle")
    company = StringField(default="", db_field="company")
    skills = ListField(StringField(), default=list, db_field="skills")
    experience_years = IntField(default=0, min_value=0, db_field="experienceYears")
    education = StringField(default="", db_field="education")
    industry = StringField(default="", db_field="industry")
    linkedin_url = StringField(db_field="linkedinUrl")

    def to_dict(self) -> dict:
        return {
            "jobTitle": self.job_title,
            "company": self.company,
            "skills": list(self.skills),
            "experienceYears": self.experience_years,
            "education": self.education,
            "industry": self.industry,
            "linkedinUrl": self.linkedin_url,
        }


# role -> details document class (None means the role carries no details)
DETAILS_BY_ROLE = {
    "student": StudentDetails,
    "alumni": AlumniDetails,
    "admin": None,
    "unset": None,
}


class UserModel(Document):
    """User profile stored in the users collection."""

    email = StringField(required=True, unique=True, db_field="email")
    role = StringField(choices=ROLES, default="unset", db_field="role")
    name = StringField(db_field="name")
    avatar_url = StringField(db_field="avatarUrl")
    details = GenericEmbeddedDocumentField(
        choices=[StudentDetails, AlumniDetails], db_field="details"
    )
    created_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="createdAt")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "users",
        "indexes": ["role"],
    }

    def clean(self):
        """Reject details that do not match the role."""
        expected = DETAILS_BY_ROLE.get(self.role)
        if expected is None:
            if self.details is not None:
                raise ValidationError(f"A profile with role '{self.role}' cannot carry role details")
        elif not isinstance(self.details, expected):
            raise ValidationError(f"A {self.role} profile requires {expected.__name__}")

    @property
    def student_profile(self):
        return self.details if isinstance(self.details, StudentDetails) else None

    @property
    def alumni_profile(self):
        return self.details if isinstance(self.details, AlumniDetails) else None

    def to_dict(self) -> dict:
        data = {
            "id": str(self.id),
            "email": self.email,
            "role": self.role,
            "name": self.name,
            "avatarUrl": self.avatar_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if self.student_profile is not None:
            data["studentProfile"] = self.student_profile.to_dict()
        if self.alumni_profile is not None:
            data["alumniProfile"] = self.alumni_profile.to_dict()
        return data
