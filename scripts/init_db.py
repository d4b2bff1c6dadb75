"""
init_db.py — One-time database initialization script.

Run this once to:
  1. Create the pgvector extension
  2. Create the embeddings table via SQLAlchemy
  3. Patch the embeddings.embedding column to the vector type
  4. Create the HNSW index for fast cosine similarity search

Then populate demo data with GET /api/seed (or scripts/search_cli.py --seed).

Usage:
    python scripts/init_db.py
"""

import sys
import os
import logging

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from flask import Flask
from config import get_config
from database import init_db, get_raw_connection
import models  # noqa: F401  — registers the embeddings table with SQLAlchemy


def create_app():
    app = Flask(__name__)
    app.config.from_object(get_config())
    return app


def patch_vector_column(conn, dimensions):
    """
    SQLAlchemy declares embedding as Text.
    After create_all(), we ALTER the column to use the pgvector vector type.
    This is idempotent — it checks before altering.
    """
    cur = conn.cursor()
    cur.execute("""
        SELECT data_type
        FROM information_schema.columns
        WHERE table_name = 'embeddings'
          AND column_name = 'embedding';
    """)
    row = cur.fetchone()
    if row and row[0] != "USER-DEFINED":
        print(f"[DB] Patching embedding column (currently '{row[0]}') to vector({dimensions})...")
        cur.execute(f"""
            ALTER TABLE embeddings
            ALTER COLUMN embedding TYPE vector({int(dimensions)})
            USING embedding::vector;
        """)
        conn.commit()
        print("[DB] embedding column patched to vector type.")
    elif row and row[0] == "USER-DEFINED":
        print("[DB] embedding is already a vector column — skipping patch.")
    else:
        print("[DB] Warning: embedding column not found.")
    cur.close()


def create_vector_index(conn):
    """
    Create an HNSW index on embedding for approximate nearest-neighbour
    cosine search. Idempotent — skips if index already exists.
    """
    cur = conn.cursor()
    cur.execute("""
        SELECT 1 FROM pg_indexes
        WHERE tablename = 'embeddings'
          AND indexname = 'ix_embeddings_embedding_hnsw';
    """)
    if cur.fetchone():
        print("[DB] HNSW index already exists — skipping.")
    else:
        print("[DB] Creating HNSW vector index on embeddings.embedding...")
        cur.execute("""
            CREATE INDEX ix_embeddings_embedding_hnsw
            ON embeddings
            USING hnsw (embedding vector_cosine_ops)
            WITH (m = 16, ef_construction = 64);
        """)
        conn.commit()
        print("[DB] HNSW index created.")
    cur.close()


def main():
    print("=" * 60)
    print(" Semantic Search — Database Initialisation")
    print("=" * 60)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    app = create_app()

    # Step 1 + 2: Enable pgvector extension, create all tables
    print("[DB] Creating all tables...")
    init_db(app)
    print("[DB] Tables created.")

    # Step 3: Patch vector column and create index (needs raw psycopg2)
    conn = get_raw_connection(app.config["SQLALCHEMY_DATABASE_URI"])
    try:
        patch_vector_column(conn, app.config["EMBEDDING_DIMENSIONS"])
        create_vector_index(conn)
    except Exception as e:
        conn.rollback()
        print(f"[DB] Vector setup failed (is pgvector installed?): {e}")
        sys.exit(1)
    finally:
        conn.close()

    print("=" * 60)
    print(" Database initialisation complete.")
    print("=" * 60)


if __name__ == "__main__":
    main()
