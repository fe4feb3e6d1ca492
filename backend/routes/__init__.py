"""Routes package initialization.
Exports the authentication, profile, mentorship, posts, discussion, chat,
notification, chatbot and upload blueprints.
"""

from .authentication import auth_bp
from .profiles import profiles_bp
from .mentorship import mentorship_bp
from .posts import posts_bp
from .discussions import discussions_bp
from .chats import chats_bp
from .notifications import notifications_bp
from .chatbot import chatbot_bp, init_chatbot
from .upload import upload_bp

__all__ = [
    'auth_bp', 'profiles_bp', 'mentorship_bp', 'posts_bp', 'discussions_bp',
    'chats_bp', 'notifications_bp', 'chatbot_bp', 'init_chatbot', 'upload_bp'
]
