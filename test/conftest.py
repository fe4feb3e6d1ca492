"""
Shared fixtures: in-memory MongoDB, profiles, and a Flask app with a stub MentorBot.
"""

import sys
from pathlib import Path

import mongomock
import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage
from mongoengine import disconnect

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import TestConfig
from backend.models import (
    init_db, DB_ALIAS, UserModel, PostModel, PostCommentModel,
    DiscussionThreadModel, ThreadCommentModel, MentorshipRequestModel,
    ChatSessionModel, ChatMessageModel
)
from backend.services import profile_service
from backend.utils.notifications import reset_notification_centers
from backend.utils.session_context import SessionContext

ALL_MODELS = (
    UserModel, PostModel, PostCommentModel, DiscussionThreadModel,
    ThreadCommentModel, MentorshipRequestModel, ChatSessionModel, ChatMessageModel,
)


@pytest.fixture(scope="session", autouse=True)
def mongo_connection():
    init_db(
        TestConfig.MONGODB_URI,
        TestConfig.MONGODB_DBNAME,
        mongo_client_class=mongomock.MongoClient,
    )
    yield
    disconnect(alias=DB_ALIAS)


@pytest.fixture(autouse=True)
def clean_state():
    yield
    for model in ALL_MODELS:
        model.drop_collection()
    reset_notification_centers()


class StubAgent:
    """Stands in for the compiled LangChain agent: returns a canned final message."""

    def __init__(self, reply='{"answer": "Alumni can accept requests from the Mentorship page."}'):
        self.reply = reply
        self.calls = []

    def invoke(self, inputs, config=None):
        self.calls.append((inputs, config))
        if isinstance(self.reply, Exception):
            raise self.reply
        return {"messages": [inputs["messages"][0], AIMessage(content=self.reply)]}


@pytest.fixture
def stub_agent():
    return StubAgent()


@pytest.fixture
def fake_llm():
    return FakeListChatModel(responses=["Ada Lovelace, Grace Hopper"])


@pytest.fixture
def app(tmp_path, stub_agent, fake_llm):
    from app import create_app

    class AppTestConfig(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    return create_app(AppTestConfig, agent=stub_agent, llm=fake_llm)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email):
    response = client.post("/api/auth/signin", json={"email": email})
    assert response.status_code == 200
    return response.get_json()["user"]


def make_alumni(email="ada@example.com", name="Ada Lovelace", **details):
    alumni_profile = {
        "jobTitle": "Engineer",
        "company": "Analytical Engines",
        "skills": ["Python", "Mathematics"],
        "experienceYears": 10,
        "education": "University of London",
        "industry": "Technology",
    }
    alumni_profile.update(details)
    return profile_service.set_profile(None, {
        "email": email,
        "name": name,
        "role": "alumni",
        "alumniProfile": alumni_profile,
    })


def make_student(email="sam@example.com", name="Sam Student", **details):
    student_profile = {
        "college": "State College",
        "year": 2,
        "academicInterests": ["AI", "Robotics"],
        "goals": "Become a machine learning engineer",
    }
    student_profile.update(details)
    return profile_service.set_profile(None, {
        "email": email,
        "name": name,
        "role": "student",
        "studentProfile": student_profile,
    })


@pytest.fixture
def alumni():
    return make_alumni()


@pytest.fixture
def student():
    return make_student()


@pytest.fixture
def alumni_ctx(alumni):
    return SessionContext.from_profile(alumni)


@pytest.fixture
def student_ctx(student):
    return SessionContext.from_profile(student)
