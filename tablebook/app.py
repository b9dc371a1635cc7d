import logging
import random
from datetime import datetime, timedelta, timezone
import click
from flask import Flask, jsonify
from flask.logging import default_handler
from flask.cli import with_appcontext
from flask_cors import CORS
from .extensions import db, migrate, get_catalog, get_store
from .catalog import build_catalog
from .config import Config, engine_options
from .blueprints.reservations import bp as reservations_bp
from .domain import CustomerInfo, MealPeriod
from .errors import AllocationError, ReservationError
from .http import reservation_error
from .store.factory import build_store

def create_app(overrides: dict | None = None):
    logger = logging.getLogger("tablebook")
    if default_handler not in logger.handlers:
        logger.addHandler(default_handler)

    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        engine_options(app.config["SQLALCHEMY_DATABASE_URI"], app.config["STORE_TIMEOUT"]),
    )

    logger.setLevel(app.config["LOG_LEVEL"])

    CORS(app)

    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        from . import models

    catalog = build_catalog(app.config)
    store = build_store(app.config, catalog)
    app.extensions["tablebook.catalog"] = catalog
    app.extensions["tablebook.store"] = store
    app.logger.info(
        "Using %s with %d tables", type(store).__name__, len(catalog.tables)
    )

    app.register_blueprint(reservations_bp, url_prefix="/api")
    app.register_error_handler(ReservationError, reservation_error)

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @click.command("seed")
    @click.option("--count", default=35, show_default=True, help="Reservations to attempt.")
    @with_appcontext
    def seed_command(count):
        """Replaces stored reservations with sample data."""
        store = get_store()
        catalog = get_catalog()
        if hasattr(store, "clear"):
            print(f"Cleared {store.clear()} existing reservations.")

        today = datetime.now(timezone.utc).date()
        created = 0
        for i in range(count):
            meal = random.choice(list(MealPeriod))
            slot_key = catalog.slot_key(
                today + timedelta(days=random.randint(0, 2)),
                meal,
                random.choice(catalog.slots.time_identifiers(meal)),
            )
            customer = CustomerInfo(
                name=f"Customer {i+1}",
                email=f"customer{i+1}@example.com",
                phone=f"123-555-{i:04d}",
            )
            try:
                store.create_reservation(slot_key, random.randint(1, 6), customer)
            except AllocationError as e:
                print(f"Skipped {slot_key.date} {meal.value} {slot_key.time_identifier}: {e}")
                continue
            created += 1

        print(f"Created {created} reservations.")
        print("Database seeded!")

    app.cli.add_command(seed_command)

    return app
