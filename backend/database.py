import logging
import psycopg2
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text

db = SQLAlchemy()
logger = logging.getLogger(__name__)


def init_db(app):
    """Bind SQLAlchemy to the Flask app and create all tables."""
    db.init_app(app)
    with app.app_context():
        # Enable pgvector extension before creating tables
        _enable_pgvector(app)
        db.create_all()
        logger.info("[DB] All tables created successfully.")


def _enable_pgvector(app):
    """Create the pgvector extension if it does not already exist."""
    with app.app_context():
        try:
            db.session.execute(text("CREATE EXTENSION IF NOT EXISTS vector;"))
            db.session.commit()
            logger.info("[DB] pgvector extension enabled.")
        except Exception as e:
            db.session.rollback()
            logger.warning(f"[DB] Could not enable pgvector extension: {e}")


def get_raw_connection(database_url):
    """
    Return a raw psycopg2 connection for operations that need
    cursor-level control (DDL, column patches, index creation).
    """
    return psycopg2.connect(database_url)
