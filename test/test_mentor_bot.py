"""
Tests for MentorBot: response parsing, failure messages, the FAQ agent wrapper,
the read-only tools and the recommendation chain.
"""

import json

import pytest
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, ToolMessage
from langchain_core.outputs import ChatGeneration, ChatResult
from langgraph.checkpoint.memory import InMemorySaver

from conftest import StubAgent, make_alumni
from backend.services import discussion_service, post_service
from backend.utils.errors import ValidationError
from mentor_bot.agents import faq_agent
from mentor_bot.agents.errors import (
    FORMAT_MESSAGE, GENERIC_MESSAGE, MAX_MESSAGE_LENGTH, MISCONFIGURED_MESSAGE,
    UNAVAILABLE_MESSAGE, classify_error, user_message_for
)
from mentor_bot.agents.recommendations import (
    RECOMMENDATION_ERROR, get_smart_alumni_recommendations, match_recommended_alumni,
    serialize_alumni_profiles
)
from mentor_bot.agents.response_parser import (
    FAQAnswer, ResponseFormatError, message_text, parse_faq_answer
)
from mentor_bot.agents.tools import (
    MENTOR_BOT_TOOLS, list_alumni_industries, list_post_categories,
    list_recent_discussion_titles
)


class IndustryLookupChatModel(BaseChatModel):
    """Asks for the alumni industries tool, then answers with what it returned."""

    @property
    def _llm_type(self) -> str:
        return "industry-lookup"

    def bind_tools(self, tools, **kwargs):
        return self

    def _generate(self, messages, stop=None, run_manager=None, **kwargs):
        last = messages[-1]
        if isinstance(last, ToolMessage):
            reply = AIMessage(content=json.dumps({"answer": f"Alumni work in {last.content}"}))
        else:
            reply = AIMessage(
                content="",
                tool_calls=[{"name": "list_alumni_industries", "args": {}, "id": "call_1"}],
            )
        return ChatResult(generations=[ChatGeneration(message=reply)])


class TestResponseParser:
    """Test parsing the agent's JSON answer"""

    def test_plain_json(self):
        """Test a plain JSON answer"""
        assert parse_faq_answer('{"answer": "Go to your profile."}') == FAQAnswer(answer="Go to your profile.")

    def test_code_fenced_json(self):
        """Test a JSON answer wrapped in a code fence"""
        raw = '```json\n{"answer": "Use the directory."}\n```'
        assert parse_faq_answer(raw).answer == "Use the directory."

    def test_double_encoded_json(self):
        """Test a JSON answer encoded twice"""
        raw = json.dumps(json.dumps({"answer": "Only alumni can post."}))
        assert parse_faq_answer(raw).answer == "Only alumni can post."

    @pytest.mark.parametrize("raw", [
        "",
        "Just some prose",
        '{"reply": "wrong key"}',
        '["answer"]',
        json.dumps("not json inside"),
        '{"answer": 42}',
    ])
    def test_unreadable_output(self, raw):
        """Test that unreadable output raises a format error"""
        with pytest.raises(ResponseFormatError):
            parse_faq_answer(raw)

    def test_message_text_flattens_blocks(self):
        """Test flattening content blocks into text"""
        content = [{"type": "text", "text": '{"answer": '}, {"type": "text", "text": '"hi"}'}]
        assert message_text(content) == '{"answer": "hi"}'


class TestErrorMessages:
    """Test user-safe failure messages"""

    @pytest.mark.parametrize("error, category, message", [
        (ResponseFormatError("bad"), "format", FORMAT_MESSAGE),
        (RuntimeError("503 The model is overloaded. Please try again later."), "unavailable", UNAVAILABLE_MESSAGE),
        (RuntimeError("429 Resource exhausted"), "unavailable", UNAVAILABLE_MESSAGE),
        (RuntimeError("400 API key not valid. Please pass a valid API key."), "misconfigured", MISCONFIGURED_MESSAGE),
        (RuntimeError("something odd"), "generic", GENERIC_MESSAGE),
    ])
    def test_classification(self, error, category, message):
        """Test mapping model failures to message categories"""
        assert classify_error(error) == category
        assert user_message_for(error) == message

    def test_messages_are_capped(self):
        """Test that every failure message stays short"""
        for message in (FORMAT_MESSAGE, UNAVAILABLE_MESSAGE, MISCONFIGURED_MESSAGE, GENERIC_MESSAGE):
            assert len(message) <= MAX_MESSAGE_LENGTH


class TestAnswerFaq:
    """Test the FAQ agent wrapper"""

    def test_returns_parsed_answer(self):
        """Test that the parsed answer and thread config are passed through"""
        agent = StubAgent('{"answer": "Open the Mentorship page."}')
        result = faq_agent.answer_faq(agent, "How do I accept a request?", thread_id="flask_u1")
        assert result.answer == "Open the Mentorship page."
        inputs, config = agent.calls[0]
        assert inputs["messages"] == [("user", "How do I accept a request?")]
        assert config == {"configurable": {"thread_id": "flask_u1"}}

    @pytest.mark.parametrize("question", ["   ", 42, None])
    def test_blank_or_non_text_question_rejected_before_model_call(self, question):
        """Test that blank or non-text questions never reach the agent"""
        agent = StubAgent()
        with pytest.raises(ValidationError):
            faq_agent.answer_faq(agent, question)
        assert agent.calls == []

    def test_malformed_output_becomes_safe_message(self):
        """Test that malformed output becomes the format message"""
        result = faq_agent.answer_faq(StubAgent("I am not JSON"), "Hello?")
        assert result.answer == FORMAT_MESSAGE

    def test_model_failure_becomes_safe_message(self):
        """Test that a model failure becomes the unavailable message"""
        agent = StubAgent(RuntimeError("503 Service Unavailable"))
        assert faq_agent.answer_faq(agent, "Hello?").answer == UNAVAILABLE_MESSAGE

    def test_create_faq_agent_wires_tools_and_prompt(self, monkeypatch):
        """Test that the agent is built with the tools, prompt and checkpointer"""
        captured = {}

        def fake_create_agent(**kwargs):
            captured.update(kwargs)
            return "agent"

        monkeypatch.setattr(faq_agent, "create_agent", fake_create_agent)
        model = FakeListChatModel(responses=["unused"])
        assert faq_agent.create_faq_agent(model=model, checkpointer="memory") == "agent"
        assert captured["model"] is model
        assert captured["tools"] == MENTOR_BOT_TOOLS
        assert "MentorBot" in captured["system_prompt"]
        assert captured["checkpointer"] == "memory"

    def test_agent_answers_from_live_tool_data(self):
        """Test that the agent graph runs a tool call and answers from its result"""
        make_alumni("ada@example.com", "Ada Lovelace", industry="Technology")
        make_alumni("fin@example.com", "Frank Finance", industry="Finance")

        agent = faq_agent.create_faq_agent(model=IndustryLookupChatModel(), checkpointer=InMemorySaver())
        result = faq_agent.answer_faq(agent, "What industries are alumni in?", thread_id="flask_test")

        assert "Technology" in result.answer
        assert "Finance" in result.answer


class TestTools:
    """Test the read-only MentorBot tools"""

    def test_empty_store(self):
        """Test the tools against an empty store"""
        assert list_alumni_industries.invoke({}) == []
        assert list_post_categories.invoke({}) == []
        assert list_recent_discussion_titles.invoke({}) == []

    def test_live_data(self, alumni, alumni_ctx):
        """Test the tools against stored alumni, posts and threads"""
        make_alumni("grace@example.com", "Grace Hopper", industry="Defense")
        post_service.create_post(alumni_ctx, {
            "title": "Mentoring tips post",
            "content": "Some guidance for new graduates.",
            "category": "Guidance",
        })
        discussion_service.create_thread(alumni_ctx, "Remote work tips", "How do you stay focused at home?")

        assert list_alumni_industries.invoke({}) == ["Defense", "Technology"]
        assert list_post_categories.invoke({}) == ["Guidance"]
        assert list_recent_discussion_titles.invoke({}) == ["Remote work tips"]

    def test_tools_never_raise(self, monkeypatch):
        """Test that a store failure gives an empty tool result"""
        class UnavailableStore:
            @staticmethod
            def distinct(field):
                raise RuntimeError("store unavailable")

        class BrokenPostModel:
            objects = UnavailableStore()

        monkeypatch.setattr(post_service, "PostModel", BrokenPostModel)
        assert list_post_categories.invoke({}) == []


class TestRecommendations:
    """Test the alumni recommendation chain"""

    def test_passes_model_output_through(self):
        """Test that the model's names are returned trimmed"""
        llm = FakeListChatModel(responses=["  Ada Lovelace, Grace Hopper \n"])
        result = get_smart_alumni_recommendations(
            llm, "AI", "Become an engineer", "College: X, Year: 2", "Name: Ada Lovelace"
        )
        assert result == {"recommendedAlumni": "Ada Lovelace, Grace Hopper"}

    def test_empty_output(self):
        """Test an empty recommendation"""
        llm = FakeListChatModel(responses=["   "])
        result = get_smart_alumni_recommendations(llm, "AI", "", "", "")
        assert result == {"recommendedAlumni": ""}

    def test_failure_returns_error_string(self):
        """Test that a model failure returns the error string"""
        class BrokenModel(FakeListChatModel):
            def _call(self, *args, **kwargs):
                raise RuntimeError("503 overloaded")

        result = get_smart_alumni_recommendations(BrokenModel(responses=["x"]), "AI", "", "", "")
        assert result == {"recommendedAlumni": RECOMMENDATION_ERROR}

    def test_serialize_profiles(self, alumni):
        """Test serializing alumni profiles for the prompt"""
        text = serialize_alumni_profiles([alumni, make_alumni("x@example.com", None, skills=[], industry="")])
        assert text == (
            "Name: Ada Lovelace, Industry: Technology, Skills: Python, Mathematics; "
            "Name: N/A, Industry: N/A, Skills: N/A"
        )

    def test_match_recommended(self, alumni):
        """Test matching recommended names back to profiles"""
        grace = make_alumni("grace@example.com", "Grace Hopper")
        alan = make_alumni("alan@example.com", "Alan Turing")
        matched = match_recommended_alumni("grace hopper, ADA LOVELACE, Nobody", [alumni, grace, alan])
        assert [p.name for p in matched] == ["Ada Lovelace", "Grace Hopper"]
        assert match_recommended_alumni("", [alumni]) == []
