from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import event

from app import create_app
from config import TestingConfig
from models import db
from models.court import Court
from models.schedule import Schedule


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture()
def make_court(app):
    def _make(name="Court A", price="50000", status="active"):
        court = Court(name=name, price_per_hour=Decimal(price), status=status)
        db.session.add(court)
        db.session.commit()
        return court
    return _make


@pytest.fixture()
def make_schedule(app, make_court, tomorrow):
    def _make(court=None, start="09:00", end="11:00", day=None, status="available"):
        court = court or make_court()
        schedule = Schedule(
            court_id=court.id,
            date=day or tomorrow,
            start_time=start,
            end_time=end,
            status=status,
        )
        db.session.add(schedule)
        db.session.commit()
        return schedule
    return _make


@pytest.fixture()
def customer():
    return {
        "customer_name": "Budi Santoso",
        "customer_phone": "081234567890",
        "customer_email": "budi@gmail.com",
        "notes": "Doubles match",
    }


def _serialize_sqlite_writers(engine):
    # pysqlite defers BEGIN; take the write lock up front so concurrent
    # sessions queue on the busy timeout instead of failing to upgrade locks
    @event.listens_for(engine, "connect")
    def _no_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


@pytest.fixture()
def file_app(tmp_path):
    """Builds an app on a SQLite file so separate connections really are separate."""
    built = []

    def _build(serialize_writers=False):
        class FileConfig(TestingConfig):
            SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'courtslot.db'}"
            SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"timeout": 30}}

        app = create_app(FileConfig)
        with app.app_context():
            if serialize_writers:
                _serialize_sqlite_writers(db.engine)
            db.create_all()
        built.append(app)
        return app

    yield _build

    for app in built:
        with app.app_context():
            db.engine.dispose()
