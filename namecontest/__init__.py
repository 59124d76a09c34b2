from flask import Flask

from namecontest.config import Config
from namecontest.extensions import db, login_manager, migrate
from namecontest.models import User
from namecontest.routes import register_routes


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = "login"

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    register_routes(app)
    return app


__all__ = ["db", "migrate", "create_app"]
