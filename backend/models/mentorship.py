"""
Mentorship request model.
"""

from mongoengine import Document, StringField, DateTimeField
from datetime import datetime, timezone

REQUEST_STATUSES = ("pending", "accepted", "rejected", "messaged")


class MentorshipRequestModel(Document):
    """A student's request for mentorship from an alumni member."""

    student_id = StringField(required=True, db_field="studentId")
    student_name = StringField(db_field="studentName")
    student_avatar = StringField(db_field="studentAvatar")
    student_goals = StringField(db_field="studentGoals")

    alumni_id = StringField(required=True, db_field="alumniId")
    alumni_name = StringField(db_field="alumniName")
    alumni_avatar = StringField(db_field="alumniAvatar")

    message = StringField(required=True, db_field="message")
    status = StringField(choices=REQUEST_STATUSES, default="pending", db_field="status")
    requested_at = DateTimeField(default=lambda: datetime.now(timezone.utc), db_field="requestedAt")
    responded_at = DateTimeField(db_field="respondedAt")

    alumni_message = StringField(db_field="alumniMessage")
    chat_id = StringField(db_field="chatId")

    meta = {
        "db_alias": "MentorConnectDB",
        "collection": "mentorshipRequests",
        "indexes": [
            ("student_id", "-requested_at"),
            ("alumni_id", "-requested_at"),
        ]
    }

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "studentId": self.student_id,
            "studentName": self.student_name,
            "studentAvatar": self.student_avatar,
            "studentGoals": self.student_goals,
            "alumniId": self.alumni_id,
            "alumniName": self.alumni_name,
            "alumniAvatar": self.alumni_avatar,
            "message": self.message,
            "status": self.status,
            "requestedAt": self.requested_at.isoformat() if self.requested_at else None,
            "respondedAt": self.responded_at.isoformat() if self.responded_at else None,
            "alumniMessage": self.alumni_message,
            "chatId": self.chat_id,
        }
