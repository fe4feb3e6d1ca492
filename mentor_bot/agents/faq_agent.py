"""
MentorBot FAQ agent.
"""

import logging
import os
from typing import Optional

from langchain.agents import create_agent
from langchain_google_genai import ChatGoogleGenerativeAI

from backend.utils.errors import ValidationError
from mentor_bot.agents.errors import user_message_for
from mentor_bot.agents.prompts import FAQ_SYSTEM_PROMPT
from mentor_bot.agents.response_parser import FAQAnswer, message_text, parse_faq_answer
from mentor_bot.agents.tools import MENTOR_BOT_TOOLS

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-lite"


def build_chat_model(
    api_key: Optional[str] = None,
    model_name: str = DEFAULT_MODEL,
    temperature: float = 0.7,
) -> ChatGoogleGenerativeAI:
    """
    Create the Gemini chat model used by MentorBot and the recommendation chain.

    Args:
        api_key: Gemini API key (defaults to GEMINI_API_KEY from the environment)
        model_name: Gemini model name
        temperature: Sampling temperature
    """
    return ChatGoogleGenerativeAI(
        model=model_name,
        google_api_key=api_key or os.getenv("GEMINI_API_KEY"),
        temperature=temperature,
    )


def create_faq_agent(model=None, checkpointer=None):
    """
    Create the MentorBot agent with optional checkpointer for memory.

    Args:
        model: Chat model; a Gemini model built from the environment when omitted
        checkpointer: Optional LangGraph checkpointer for conversation memory

    Returns:
        CompiledStateGraph: The compiled agent graph
    """
    return create_agent(
        model=model or build_chat_model(),
        tools=MENTOR_BOT_TOOLS,
        system_prompt=FAQ_SYSTEM_PROMPT,
        checkpointer=checkpointer,
    )


def answer_faq(agent, question: str, thread_id: Optional[str] = None) -> FAQAnswer:
    """
    Answer a question about the platform.

    Args:
        agent: Agent from create_faq_agent
        question: The user's question
        thread_id: Conversation id, used when the agent has a checkpointer

    Returns:
        FAQAnswer. Model and parsing failures are turned into an answer
        carrying a user-safe message.

    Raises:
        ValidationError: if the question is blank
    """
    if not isinstance(question, str) or not question.strip():
        raise ValidationError("Question is required")

    inputs = {"messages": [("user", question.strip())]}
    config = {"configurable": {"thread_id": thread_id}} if thread_id else None

    try:
        logger.info(f"Processing FAQ question (thread_id: {thread_id})")
        result = agent.invoke(inputs, config)
        last_message = result["messages"][-1]
        raw = message_text(
            last_message.content if hasattr(last_message, "content") else last_message
        )
        return parse_faq_answer(raw)
    except Exception as e:
        return FAQAnswer(answer=user_message_for(e))
