from datetime import datetime, timezone

from flask import current_app, jsonify, request
from flask_login import login_required

from namecontest.extensions import db
from namecontest.models import ContestSettings, Participant, Winner
from namecontest.routes.responses import payload_text, rejection, request_payload
from namecontest.services.contest import (
    build_contest_config,
    compute_reveal,
    draw_winners,
    format_star_budgets,
    parse_star_budgets,
)
from namecontest.services.contest.results import normalize_identity
from namecontest.services.store import (
    load_contest_config,
    load_roster,
    load_suggestions,
    load_votes,
)

SETTINGS_FIELDS = (
    "phase",
    "parent_weight",
    "max_suggestions_per_person",
    "max_girl_suggestions",
    "max_boy_suggestions",
    "actual_gender",
    "normalization",
    "ranking_score",
)


def _as_optional_int(value):
    if value is None or value == "":
        return None
    return int(value)


def _as_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _default_settings():
    config = current_app.config
    return ContestSettings(
        phase="Nominations",
        star_budgets=config["CONTEST_STAR_BUDGETS"],
        parent_weight=config["CONTEST_PARENT_WEIGHT"],
        max_suggestions_per_person=config["CONTEST_MAX_SUGGESTIONS"],
        max_girl_suggestions=config["CONTEST_MAX_GIRL_SUGGESTIONS"],
        max_boy_suggestions=config["CONTEST_MAX_BOY_SUGGESTIONS"],
        actual_gender="Unknown",
        normalization=False,
        ranking_score="bayesian",
    )


def register_admin_routes(app):
    @app.route("/admin/settings", methods=["GET", "POST"])
    @login_required
    def contest_settings():
        if request.method == "GET":
            config_result = load_contest_config()
            if not config_result["ok"]:
                return rejection(config_result)
            return {"ok": True, "contest": config_result["config"].to_dict()}

        settings = ContestSettings.query.first()
        created = settings is None
        if created:
            settings = _default_settings()
            db.session.add(settings)

        data = request_payload()
        try:
            if data.get("star_budgets") is not None:
                settings.star_budgets = format_star_budgets(
                    parse_star_budgets(data["star_budgets"])
                )
            if data.get("parent_weight") not in (None, ""):
                settings.parent_weight = float(data["parent_weight"])
            if data.get("max_suggestions_per_person") not in (None, ""):
                settings.max_suggestions_per_person = int(data["max_suggestions_per_person"])
            for field in ("max_girl_suggestions", "max_boy_suggestions"):
                if field in data:
                    setattr(settings, field, _as_optional_int(data[field]))
            for field in ("phase", "actual_gender", "ranking_score"):
                value = payload_text(data, field)
                if value:
                    setattr(settings, field, value)
        except (TypeError, ValueError) as exc:
            db.session.rollback()
            return {"ok": False, "error": str(exc), "kind": "validation"}, 400

        if "normalization" in data:
            settings.normalization = _as_bool(data["normalization"])

        config_result = build_contest_config(settings)
        if not config_result["ok"]:
            db.session.rollback()
            return {**config_result, "kind": "validation"}, 400

        db.session.commit()
        current_app.logger.info(
            "Contest settings %s: %s",
            "created" if created else "updated",
            {field: getattr(settings, field) for field in SETTINGS_FIELDS},
        )
        return {"ok": True, "contest": config_result["config"].to_dict()}

    @app.route("/admin/roster", methods=["GET", "POST"])
    @login_required
    def roster():
        if request.method == "POST":
            data = request_payload()
            try:
                identity = payload_text(data, "identity")
                role = payload_text(data, "role") or "Voter"
                relation = payload_text(data, "relation") or None
            except ValueError as exc:
                return {"ok": False, "error": str(exc)}, 400
            if not identity:
                return {"ok": False, "error": "Identity is required."}, 400

            key = normalize_identity(identity)
            participant = Participant.query.filter_by(identity_key=key).first()
            if participant is None:
                participant = Participant(identity=identity)
                db.session.add(participant)
            participant.identity = identity
            participant.role = role
            participant.relation = relation
            db.session.commit()

        participants = Participant.query.order_by(Participant.identity).all()
        return {
            "ok": True,
            "participants": [
                {
                    "id": p.id,
                    "identity": p.identity,
                    "role": p.role,
                    "relation": p.relation,
                }
                for p in participants
            ],
        }

    @app.route("/admin/roster/<int:participant_id>/delete", methods=["POST"])
    @login_required
    def delete_participant(participant_id):
        participant = Participant.query.get_or_404(participant_id)

        try:
            db.session.delete(participant)
            db.session.commit()
            return jsonify({"ok": True}), 200
        except Exception:
            db.session.rollback()
            return jsonify({"ok": False, "error": "Database error: Could not delete participant"}), 500

    @app.route("/admin/results")
    @login_required
    def preview_results():
        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)

        return compute_reveal(
            load_suggestions(), load_votes(), load_roster(), config_result["config"]
        )

    @app.route("/admin/winners/draw", methods=["POST"])
    @login_required
    def draw_contest_winners():
        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)
        config = config_result["config"]

        result = draw_winners(
            load_suggestions(), config.actual_gender, request_payload().get("count", 1)
        )
        if not result["ok"]:
            current_app.logger.warning("Winner draw rejected: %s", result["error"])
            return rejection(result)

        Winner.query.delete(synchronize_session=False)
        drawn_at = datetime.now(timezone.utc)
        for identity in result["winners"]:
            db.session.add(
                Winner(identity=identity, actual_gender=config.actual_gender, drawn_at=drawn_at)
            )
        db.session.commit()

        current_app.logger.info(
            "Drew %d winner(s) from %d eligible guessers",
            len(result["winners"]),
            result["eligible_count"],
        )
        return result
