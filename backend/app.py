"""
app.py — Flask application factory for the semantic search demo.
"""

import os
import logging
from datetime import datetime, timezone
from flask import Flask, jsonify, request, g
from sqlalchemy import text
from config import get_config
from database import db


def create_app(config_object=None):
    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(__file__), "..", "frontend"),
        static_folder=os.path.join(os.path.dirname(__file__), "..", "frontend", "static"),
    )
    app.config.from_object(config_object or get_config())
    app.json.sort_keys = False

    _configure_logging(app)
    _init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_hooks(app)
    _register_health_check(app)

    return app


# ─── Logging ──────────────────────────────────────────────────────────────────

def _configure_logging(app):
    level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    app.logger.setLevel(level)


# ─── Extensions ───────────────────────────────────────────────────────────────

def _init_extensions(app):
    db.init_app(app)


# ─── Blueprints ───────────────────────────────────────────────────────────────

def _register_blueprints(app):
    from routes.page   import page_bp
    from routes.search import search_bp
    from routes.seed   import seed_bp

    app.register_blueprint(page_bp)
    app.register_blueprint(search_bp, url_prefix="/api")
    app.register_blueprint(seed_bp,   url_prefix="/api")


# ─── Error handlers ───────────────────────────────────────────────────────────

def _register_error_handlers(app):

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "Bad request.", "details": str(e)}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": f"Route not found: {request.path}"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed."}), 405

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Unhandled server error")
        return jsonify({"error": "Internal server error."}), 500


# ─── Request / response hooks ─────────────────────────────────────────────────

def _register_hooks(app):

    @app.before_request
    def log_request():
        g.request_start = datetime.now(timezone.utc)
        app.logger.debug(f"--> {request.method} {request.full_path}")

    @app.after_request
    def add_headers(response):
        # Security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        # CORS — allow all in dev so the page can be served from elsewhere
        if app.config.get("DEBUG"):
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"

        # Log response time
        if hasattr(g, "request_start"):
            elapsed = (datetime.now(timezone.utc) - g.request_start).total_seconds() * 1000
            app.logger.debug(f"<-- {response.status_code}  ({elapsed:.1f}ms)")

        return response


# ─── Health check ─────────────────────────────────────────────────────────────

def _register_health_check(app):

    @app.route("/health")
    def health():
        """
        GET /health
        Returns service status. Checks DB connectivity.
        """
        try:
            db.session.execute(text("SELECT 1"))
            db_status = "ok"
        except Exception as e:
            db_status = f"error: {e}"

        return jsonify({
            "status": "ok" if db_status == "ok" else "degraded",
            "database": db_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": "0.1.0",
        }), 200 if db_status == "ok" else 503


# ─── Entry point ──────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app = create_app()
    app.run(debug=app.config.get("DEBUG", False), port=5000, host="0.0.0.0")
