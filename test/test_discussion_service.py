"""
Tests for discussion threads and thread comments.
"""

from datetime import datetime

import pytest

from backend.models import DiscussionThreadModel, ThreadCommentModel
from backend.services import discussion_service
from backend.utils.errors import NotFoundError, PermissionDeniedError, ValidationError


@pytest.fixture
def thread(alumni_ctx):
    return discussion_service.create_thread(
        alumni_ctx, "Breaking into data science", "Share how you got your first data job."
    )


class TestCreateThread:
    """Test starting discussion threads"""

    def test_initial_state(self, thread, alumni):
        """Test the counters and creator fields of a new thread"""
        stored = DiscussionThreadModel.objects.get(id=thread.id)
        assert stored.comments_count == 0
        assert stored.created_at == stored.last_activity_at
        assert stored.created_by == str(alumni.id)
        assert stored.creator_role == "alumni"
        assert stored.creator_name == "Ada Lovelace"

    def test_students_cannot_create(self, student_ctx):
        """Test that students cannot start threads"""
        with pytest.raises(PermissionDeniedError):
            discussion_service.create_thread(student_ctx, "A student thread", "Some content here")

    @pytest.mark.parametrize("title, content", [
        ("Hey", "Long enough content"),
        ("x" * 101, "Long enough content"),
        ("Valid title", "   "),
        ("Valid title", "x" * 2001),
        (12345, "Long enough content"),
        ("Valid title", 12345),
    ])
    def test_length_limits(self, alumni_ctx, title, content):
        """Test title and content limits, including non-text values"""
        with pytest.raises(ValidationError):
            discussion_service.create_thread(alumni_ctx, title, content)
        assert DiscussionThreadModel.objects.count() == 0


class TestComments:
    """Test commenting on threads"""

    def test_comment_bumps_count_and_activity(self, thread, student_ctx):
        """Test that a comment bumps the count and last activity"""
        DiscussionThreadModel.objects(id=thread.id).update_one(
            set__last_activity_at=datetime(2020, 1, 1)
        )
        comment = discussion_service.add_comment(student_ctx, str(thread.id), "I did a bootcamp.")
        stored = DiscussionThreadModel.objects.get(id=thread.id)
        assert stored.comments_count == 1
        assert stored.last_activity_at == ThreadCommentModel.objects.get(id=comment.id).created_at
        assert comment.author_role == "student"

    @pytest.mark.parametrize("content", ["", "  ", "x" * 1001, 7])
    def test_invalid_comment(self, thread, student_ctx, content):
        """Test that blank, oversized or non-text comments are rejected"""
        with pytest.raises(ValidationError):
            discussion_service.add_comment(student_ctx, str(thread.id), content)

    def test_comment_on_unknown_thread(self, student_ctx):
        """Test commenting on a thread that does not exist"""
        with pytest.raises(NotFoundError):
            discussion_service.add_comment(student_ctx, "64b000000000000000000000", "Hello")

    def test_list_comments_newest_first(self, thread, student_ctx, alumni_ctx):
        """Test that thread comments are listed newest first"""
        first = discussion_service.add_comment(student_ctx, str(thread.id), "First")
        second = discussion_service.add_comment(alumni_ctx, str(thread.id), "Second")
        ThreadCommentModel.objects(id=first.id).update_one(set__created_at=datetime(2020, 1, 1))
        assert [c.id for c in discussion_service.list_comments(str(thread.id))] == [second.id, first.id]
        assert discussion_service.list_comments("") == []

    def test_list_comments_unknown_thread(self):
        """Test that an unknown thread has no comments"""
        assert discussion_service.list_comments("64b000000000000000000000") == []


class TestListing:
    """Test listing threads"""

    def test_ordered_by_last_activity(self, alumni_ctx, student_ctx):
        """Test that threads are ordered by last activity"""
        older = discussion_service.create_thread(alumni_ctx, "Older thread title", "Older thread content")
        newer = discussion_service.create_thread(alumni_ctx, "Newer thread title", "Newer thread content")
        DiscussionThreadModel.objects(id=older.id).update_one(set__last_activity_at=datetime(2020, 1, 1))
        DiscussionThreadModel.objects(id=newer.id).update_one(set__last_activity_at=datetime(2021, 1, 1))

        assert [t.id for t in discussion_service.list_threads()] == [newer.id, older.id]

        # A comment moves the older thread back to the top
        discussion_service.add_comment(student_ctx, str(older.id), "Reviving this")
        assert [t.id for t in discussion_service.list_threads()] == [older.id, newer.id]
        assert [t.id for t in discussion_service.list_threads(limit=1)] == [older.id]

    def test_recently_commented_thread_listed_first(self, alumni_ctx, student_ctx):
        """Test that a fresh comment moves its thread to the top"""
        other = discussion_service.create_thread(alumni_ctx, "Another topic", "Something else")
        DiscussionThreadModel.objects(id=other.id).update_one(set__last_activity_at=datetime(2020, 1, 1))
        thread = discussion_service.create_thread(alumni_ctx, "Say hello", "Hello")
        DiscussionThreadModel.objects(id=thread.id).update_one(set__last_activity_at=datetime(2019, 1, 1))
        before = DiscussionThreadModel.objects.get(id=thread.id).last_activity_at

        discussion_service.add_comment(student_ctx, str(thread.id), "Nice!")

        threads = discussion_service.list_threads()
        assert threads[0].id == thread.id
        assert threads[0].comments_count == 1
        assert threads[0].last_activity_at >= before

    def test_thread_titles(self, alumni_ctx):
        """Test the recent thread titles used by MentorBot"""
        for i in range(7):
            thread = discussion_service.create_thread(alumni_ctx, f"Thread number {i}", "Some thread content")
            DiscussionThreadModel.objects(id=thread.id).update_one(
                set__last_activity_at=datetime(2024, 1, 1, 0, 0, i)
            )
        titles = discussion_service.get_thread_titles()
        assert titles == [f"Thread number {i}" for i in (6, 5, 4, 3, 2)]

    def test_thread_titles_swallow_errors(self, monkeypatch):
        """Test that thread titles fall back to empty on store errors"""
        def broken(limit=None):
            raise RuntimeError("store unavailable")
        monkeypatch.setattr(discussion_service, "list_threads", broken)
        assert discussion_service.get_thread_titles() == []


class TestDeleteThread:
    """Test deleting threads"""

    def test_creator_deletes_with_comments(self, thread, alumni_ctx, student_ctx):
        """Test that the creator deletes a thread with its comments"""
        discussion_service.add_comment(student_ctx, str(thread.id), "Nice topic")
        discussion_service.delete_thread(alumni_ctx, str(thread.id))
        assert DiscussionThreadModel.objects.count() == 0
        assert ThreadCommentModel.objects.count() == 0

    def test_only_creator_deletes(self, thread, student_ctx):
        """Test that only the creator can delete a thread"""
        with pytest.raises(PermissionDeniedError):
            discussion_service.delete_thread(student_ctx, str(thread.id))
