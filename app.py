import logging

import click
from flask import Flask
from flask_migrate import Migrate

from config import Config
from models import db
from routes import health_bp, court_bp, schedule_bp, booking_bp
from routes.errors import register_error_handlers
from utils.seed import seed_courts, seed_schedules


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(court_bp)
    app.register_blueprint(schedule_bp)
    app.register_blueprint(booking_bp)
    register_error_handlers(app)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    # Optional demo data at startup (idempotent)
    if app.config.get("SEED_ON_STARTUP"):
        with app.app_context():
            seed_courts()
            seed_schedules()

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        return resp

    register_cli(app)

    return app

#-------------------------

def register_cli(app):
    @app.cli.command("seed")
    @click.option("--days", type=int, default=None, help="Days of schedules to generate (default SEED_DAYS_AHEAD).")
    def seed(days):
        """Create the default courts and their recurring daily schedules."""
        courts = seed_courts()
        schedules = seed_schedules(days_ahead=days)
        click.echo(f"Seeded {courts} court(s) and {schedules} schedule(s)")

#-------------------------


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
