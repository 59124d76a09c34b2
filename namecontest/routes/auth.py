from flask import current_app, request
from flask_login import login_required, login_user, logout_user
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from namecontest.extensions import db
from namecontest.models import User
from namecontest.routes.responses import payload_text, request_payload


def register_auth_routes(app):
    @app.route("/signup", methods=["POST"])
    def signup():
        data = request_payload()
        try:
            username = payload_text(data, "username")
            email = payload_text(data, "email").lower()
        except ValueError as exc:
            return {"ok": False, "error": str(exc)}, 400
        password = data.get("password") or ""
        if not isinstance(password, str):
            return {"ok": False, "error": "'password' must be text."}, 400

        if not username or not email or len(password) < 8:
            return {
                "ok": False,
                "error": "Username, email and a password of at least 8 characters are required.",
            }, 400

        new_user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password, method="pbkdf2:sha256"),
        )

        try:
            db.session.add(new_user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            return {"ok": False, "error": "That username or email is already registered."}, 400

        current_app.logger.info("Administrator account created for %s", username)
        return {"ok": True, "username": new_user.username}, 201

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if request.method == "GET":
            return {"ok": False, "error": "Please log in."}, 401

        data = request_payload()
        try:
            username = payload_text(data, "username")
        except ValueError as exc:
            return {"ok": False, "error": str(exc)}, 400
        password = data.get("password") or ""
        if not isinstance(password, str):
            return {"ok": False, "error": "'password' must be text."}, 400
        remember = bool(data.get("remember"))

        user = User.query.filter_by(username=username).first()
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.warning("Failed login attempt for %s", username)
            return {"ok": False, "error": "Invalid username or password."}, 401

        login_user(user, remember=remember)
        return {"ok": True, "username": user.username}

    @app.route("/logout", methods=["POST"])
    @login_required
    def logout():
        logout_user()
        return {"ok": True}
