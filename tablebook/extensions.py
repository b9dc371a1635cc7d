from flask import current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()


def get_catalog():
    return current_app.extensions["tablebook.catalog"]


def get_store():
    return current_app.extensions["tablebook.store"]
