"""
Tests for profile_service: role-shaped details, role selection and the alumni directory.
"""

import pytest

from conftest import make_alumni, make_student
from backend.models import UserModel, StudentDetails, AlumniDetails
from backend.services import profile_service
from backend.utils.errors import NotFoundError, ValidationError
from backend.utils.session_context import SessionContext


class TestSetProfile:
    """Test creating and merging profiles"""

    def test_creates_student_with_details(self, student):
        """Test that a student profile gets student details"""
        stored = UserModel.objects.get(id=student.id)
        assert stored.role == "student"
        assert isinstance(stored.details, StudentDetails)
        assert stored.student_profile.year == 2
        assert stored.student_profile.academic_interests == ["AI", "Robotics"]
        assert stored.alumni_profile is None
        assert stored.created_at is not None

    def test_merge_keeps_unsent_fields(self, alumni):
        """Test that a merge keeps fields that were not sent"""
        profile_service.set_profile(str(alumni.id), {"alumniProfile": {"company": "Babbage Ltd"}})
        stored = UserModel.objects.get(id=alumni.id)
        assert stored.alumni_profile.company == "Babbage Ltd"
        assert stored.alumni_profile.job_title == "Engineer"
        assert stored.name == "Ada Lovelace"

    def test_created_at_not_touched_on_update(self, alumni):
        """Test that updates keep the creation time"""
        before = UserModel.objects.get(id=alumni.id).created_at
        profile_service.set_profile(str(alumni.id), {"name": "Ada King"})
        after = UserModel.objects.get(id=alumni.id)
        assert after.created_at == before
        assert after.name == "Ada King"

    def test_skills_are_deduplicated(self, alumni):
        """Test that skills are deduplicated"""
        profile_service.set_profile(
            str(alumni.id), {"alumniProfile": {"skills": "Go, Python, Go, "}}
        )
        assert UserModel.objects.get(id=alumni.id).alumni_profile.skills == ["Go", "Python"]

    def test_wrong_details_for_role_rejected(self, student):
        """Test that details for the other role are rejected"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(str(student.id), {"alumniProfile": {"company": "X"}})

    def test_negative_experience_rejected(self, alumni):
        """Test that negative experience is rejected"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(
                str(alumni.id), {"alumniProfile": {"experienceYears": -1}}
            )

    def test_year_must_be_positive(self, student):
        """Test that the study year must be positive"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(str(student.id), {"studentProfile": {"year": 0}})

    def test_invalid_email_rejected(self):
        """Test that an invalid email is rejected"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(None, {"email": "not-an-email"})

    def test_duplicate_email_rejected(self, alumni):
        """Test that a taken email is rejected"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(None, {"email": "ada@example.com"})

    def test_only_student_or_alumni_role_can_be_written(self):
        """Test that profile writes only accept the student or alumni role"""
        with pytest.raises(ValidationError):
            profile_service.set_profile(None, {"email": "eve@example.com", "role": "admin"})
        assert UserModel.objects(email="eve@example.com").count() == 0

    def test_non_text_name_is_cleared(self, alumni):
        """Test that a non-text name is stored as no name"""
        profile_service.set_profile(str(alumni.id), {"name": 42})
        assert UserModel.objects.get(id=alumni.id).name is None

    def test_document_rejects_mismatched_details(self):
        """Test that the document rejects details for the other role"""
        profile = UserModel(email="x@example.com", role="student", details=AlumniDetails())
        with pytest.raises(Exception):
            profile.validate()


class TestRoles:
    """Test role selection"""

    def test_initialize_role_profile_defaults(self):
        """Test the default details for each role"""
        student = profile_service.initialize_role_profile("student")
        alumni = profile_service.initialize_role_profile("alumni")
        assert student.year == 1
        assert student.academic_interests == []
        assert alumni.experience_years == 0
        assert alumni.skills == []

    def test_select_role_initializes_details(self):
        """Test that selecting a role creates its details"""
        profile = profile_service.find_or_create_by_email("new@example.com", name="New User")
        assert profile.role == "unset"
        assert profile.details is None

        ctx = SessionContext.from_profile(profile)
        updated = profile_service.select_role(ctx, "alumni")
        assert updated.role == "alumni"
        assert isinstance(UserModel.objects.get(id=profile.id).details, AlumniDetails)

    def test_same_role_again_is_noop(self, student_ctx):
        """Test that selecting the same role again changes nothing"""
        profile = profile_service.select_role(student_ctx, "student")
        assert profile.student_profile.college == "State College"

    def test_role_cannot_change(self, student_ctx):
        """Test that a selected role cannot change"""
        with pytest.raises(ValidationError):
            profile_service.select_role(student_ctx, "alumni")

    def test_invalid_role(self, student_ctx):
        """Test that unknown roles are rejected"""
        with pytest.raises(ValidationError):
            profile_service.select_role(student_ctx, "admin")

    def test_select_role_unknown_user(self):
        """Test selecting a role for a user that does not exist"""
        ctx = SessionContext(user_id="64b000000000000000000000")
        with pytest.raises(NotFoundError):
            profile_service.select_role(ctx, "student")


class TestLookups:
    """Test profile lookups"""

    def test_get_profile_missing_id(self):
        """Test that a missing or malformed id finds nothing"""
        assert profile_service.get_profile("") is None
        assert profile_service.get_profile("garbage") is None

    def test_find_or_create_by_email_is_idempotent(self):
        """Test that email lookup creates the profile once"""
        first = profile_service.find_or_create_by_email("Mixed@Example.com")
        second = profile_service.find_or_create_by_email("mixed@example.com")
        assert first.id == second.id
        assert UserModel.objects(email="mixed@example.com").count() == 1

    def test_get_profiles_by_role(self, alumni, student):
        """Test listing profiles by role"""
        alumni_profiles = profile_service.get_profiles_by_role("alumni")
        assert [p.id for p in alumni_profiles] == [alumni.id]
        assert profile_service.get_profiles_by_role("") == []


class TestAlumniDirectory:
    """Test filtering the alumni directory"""

    @pytest.fixture
    def directory(self):
        return [
            make_alumni("ada@example.com", "Ada Lovelace", skills=["Python", "Math"],
                        industry="Technology", company="Analytical Engines"),
            make_alumni("grace@example.com", "Grace Hopper", skills=["COBOL", "Python"],
                        industry="Defense", company="US Navy"),
            make_alumni("alan@example.com", "Alan Turing", skills=["Math"],
                        industry="technology", company="Bletchley Park"),
        ]

    def names(self, profiles):
        return [p.name for p in profiles]

    def test_search_term_matches_name_or_email(self, directory):
        """Test that the search term matches name or email"""
        assert self.names(profile_service.filter_alumni(directory, search_term="grace")) == ["Grace Hopper"]
        assert self.names(profile_service.filter_alumni(directory, search_term="ALAN@")) == ["Alan Turing"]

    def test_all_skills_required(self, directory):
        """Test that every requested skill must match"""
        result = profile_service.filter_alumni(directory, skills=["Python", "Math"])
        assert self.names(result) == ["Ada Lovelace"]

    def test_industry_is_case_insensitive_equality(self, directory):
        """Test that industry matches exactly, ignoring case"""
        result = profile_service.filter_alumni(directory, industry="TECHNOLOGY")
        assert self.names(result) == ["Ada Lovelace", "Alan Turing"]
        assert profile_service.filter_alumni(directory, industry="Tech") == []

    def test_company_substring(self, directory):
        """Test that company matches a substring"""
        result = profile_service.filter_alumni(directory, company="navy")
        assert self.names(result) == ["Grace Hopper"]

    def test_no_filters_returns_all(self, directory):
        """Test that no filters return everyone"""
        assert len(profile_service.filter_alumni(directory)) == 3

    def test_facets(self, directory):
        """Test the skill and industry facets"""
        assert profile_service.available_skills(directory) == ["COBOL", "Math", "Python"]
        assert profile_service.available_industries(directory) == ["Defense", "Technology", "technology"]

    def test_get_alumni_industries(self, directory):
        """Test the stored alumni industries"""
        assert profile_service.get_alumni_industries() == ["Defense", "Technology", "technology"]

    def test_get_alumni_industries_swallows_store_errors(self, monkeypatch):
        """Test that industries fall back to empty on store errors"""
        def broken(role):
            raise RuntimeError("store unavailable")
        monkeypatch.setattr(profile_service, "get_profiles_by_role", broken)
        assert profile_service.get_alumni_industries() == []


def test_student_fixture_helper_creates_distinct_profiles():
    """Test that the student helper creates separate profiles"""
    first = make_student("one@example.com")
    second = make_student("two@example.com")
    assert first.id != second.id
