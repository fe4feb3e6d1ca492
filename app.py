from flask import Flask, jsonify, send_from_directory
from flask_session import Session
from flask_cors import CORS
from pymongo import MongoClient
from werkzeug.exceptions import HTTPException
from config import Config
from backend.models import init_db
from backend.routes import (
    auth_bp, profiles_bp, mentorship_bp, posts_bp, discussions_bp,
    chats_bp, notifications_bp, chatbot_bp, upload_bp, init_chatbot
)
from backend.utils.errors import ServiceError
import logging
import os

logger = logging.getLogger(__name__)


def configure_logging(config_class):
    logging.basicConfig(
        level=getattr(logging, str(config_class.LOG_LEVEL).upper(), logging.INFO),
        format=config_class.LOG_FORMAT,
    )


def connect_database(app):
    if not app.config.get("MONGODB_CONNECT_ON_START", True):
        return
    init_db(app.config["MONGODB_URI"], app.config["MONGODB_DBNAME"])
    logger.info(f"Connected to MongoDB database {app.config['MONGODB_DBNAME']}")


def configure_sessions(app):
    """Server-side sessions in MongoDB; signed cookie sessions when SESSION_TYPE is unset."""
    if not app.config.get("SESSION_TYPE"):
        return
    if app.config["SESSION_TYPE"] == "mongodb":
        app.config["SESSION_MONGODB"] = MongoClient(app.config["MONGODB_URI"])
    Session(app)


def initialize_chatbot(app, agent=None, llm=None):
    """
    Build MentorBot and hand it to the chatbot routes.

    Args:
        agent: Prebuilt FAQ agent (tests); created from llm when omitted
        llm: Chat model; a Gemini model from the app config when omitted
    """
    from langgraph.checkpoint.memory import InMemorySaver
    from mentor_bot.agents import build_chat_model, create_faq_agent

    logger.info("Initializing MentorBot...")
    if llm is None:
        llm = build_chat_model(
            api_key=app.config["GEMINI_API_KEY"],
            model_name=app.config["GEMINI_MODEL"],
            temperature=app.config["LLM_TEMPERATURE"],
        )
    if agent is None:
        # Conversation memory per user thread, kept for the lifetime of the process
        agent = create_faq_agent(model=llm, checkpointer=InMemorySaver())

    init_chatbot(agent, llm)
    logger.info("MentorBot initialized successfully")


def register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            return jsonify({"message": error.description}), error.code
        logger.exception(f"Unhandled error: {str(error)}")
        return jsonify({"message": "Internal Server Error"}), 500


def create_app(config_class=Config, agent=None, llm=None):
    """
    Application factory.

    Args:
        config_class: Config (production) or TestConfig
        agent: Optional prebuilt FAQ agent
        llm: Optional chat model for the chatbot and recommendations

    Raises:
        ConfigurationError: if a required setting is missing
    """
    configure_logging(config_class)
    if not config_class.TESTING:
        config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)

    connect_database(app)
    configure_sessions(app)
    CORS(
        app,
        origins=[origin.strip() for origin in app.config["ALLOWED_ORIGINS"]],
        supports_credentials=True,
    )

    # Register blueprints
    for blueprint in (
        auth_bp, profiles_bp, mentorship_bp, posts_bp, discussions_bp,
        chats_bp, notifications_bp, chatbot_bp, upload_bp,
    ):
        app.register_blueprint(blueprint)

    register_error_handlers(app)
    initialize_chatbot(app, agent=agent, llm=llm)

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    @app.route('/uploads/<filename>')
    def serve_upload(filename):
        return send_from_directory(app.config["UPLOAD_FOLDER"], filename)

    @app.route('/')
    def home():
        return jsonify({"message": "MentorConnect Server is Running"}), 200

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(
        host="0.0.0.0",
        port=Config.PORT,
        debug=Config.DEBUG
    )
