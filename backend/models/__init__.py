"""
Models package initialization.
Exports all database models and the MongoDB connection helper.
"""

from mongoengine import connect, disconnect

from .user import UserModel, StudentDetails, AlumniDetails, ROLES
from .post import PostModel, PostCommentModel
from .discussion import DiscussionThreadModel, ThreadCommentModel
from .mentorship import MentorshipRequestModel, REQUEST_STATUSES
from .chat import ChatSessionModel, ChatMessageModel, make_pair_key

DB_ALIAS = "MentorConnectDB"


def init_db(host: str, db_name: str, **kwargs):
    """
    Connect MongoEngine to the application database.

    Args:
        host: MongoDB connection URI
        db_name: Database name
        **kwargs: Extra options forwarded to mongoengine.connect
                  (e.g. mongo_client_class for tests)
    """
    disconnect(alias=DB_ALIAS)
    return connect(db=db_name, alias=DB_ALIAS, host=host, **kwargs)


__all__ = [
    'init_db',
    'DB_ALIAS',
    'UserModel',
    'StudentDetails',
    'AlumniDetails',
    'ROLES',
    'PostModel',
    'PostCommentModel',
    'DiscussionThreadModel',
    'ThreadCommentModel',
    'MentorshipRequestModel',
    'REQUEST_STATUSES',
    'ChatSessionModel',
    'ChatMessageModel',
    'make_pair_key',
]
