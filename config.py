import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # SQLite database file stored next to the app as courtslot.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "courtslot.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Booking policy
    BOOKING_REJECT_PAST_SLOTS = os.getenv("BOOKING_REJECT_PAST_SLOTS", "true").lower() == "true"
    BOOKING_LIST_LIMIT = int(os.getenv("BOOKING_LIST_LIMIT", "200"))

    # Seed data (flask seed)
    SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "false").lower() == "true"
    SEED_DAYS_AHEAD = int(os.getenv("SEED_DAYS_AHEAD", "7"))
    SEED_DAILY_SLOTS = [("08:00", "10:00"), ("10:00", "12:00"), ("14:00", "16:00"), ("16:00", "18:00")]

    # Basic app settings
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    # in-memory; Flask-SQLAlchemy shares one connection across the app
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SEED_ON_STARTUP = False
