from .faq_agent import build_chat_model, create_faq_agent, answer_faq
from .recommendations import (
    get_smart_alumni_recommendations, serialize_alumni_profiles, match_recommended_alumni
)
from .response_parser import FAQAnswer, ResponseFormatError, parse_faq_answer

__all__ = [
    'build_chat_model', 'create_faq_agent', 'answer_faq',
    'get_smart_alumni_recommendations', 'serialize_alumni_profiles', 'match_recommended_alumni',
    'FAQAnswer', 'ResponseFormatError', 'parse_faq_answer',
]
