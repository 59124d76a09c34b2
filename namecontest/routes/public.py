from flask import current_app, session
from sqlalchemy.exc import IntegrityError

from namecontest.extensions import db
from namecontest.models import NameVote, Suggestion, Winner
from namecontest.routes.responses import payload_text, rejection, request_payload
from namecontest.services.contest import (
    aggregate_suggestions,
    compute_quota_usage,
    compute_reveal,
    delete_suggestion,
    edit_suggestion,
    lookup_member,
    over_budget_stars,
    serialize_candidate,
    validate_and_record_suggestion,
    validate_and_record_vote,
    votes_for_voter,
)
from namecontest.services.contest.results import (
    QUOTA,
    normalize_identity,
    rejected,
)
from namecontest.services.store import (
    load_contest_config,
    load_roster,
    load_suggestions,
    load_votes,
)

REVEALED_PHASES = ("Reveal", "Closed")


def _not_joined():
    return {"ok": False, "error": "Please join the contest first."}, 401


def register_public_routes(app):
    @app.route("/join", methods=["POST"])
    def join_contest():
        try:
            identity = payload_text(request_payload(), "identity")
        except ValueError as exc:
            return {"ok": False, "error": str(exc)}, 400
        if not identity:
            return {"ok": False, "error": "Please enter your name."}, 400

        member = lookup_member(load_roster(), identity)
        session["identity"] = member["identity"]
        session["role"] = member["role"]
        return {
            "ok": True,
            "identity": member["identity"],
            "role": member["role"],
            "relation": member["relation"],
        }

    @app.route("/leave", methods=["POST"])
    def leave_contest():
        session.pop("identity", None)
        session.pop("role", None)
        return {"ok": True}

    @app.route("/contest")
    def contest_overview():
        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)
        return {"ok": True, "contest": config_result["config"].to_dict()}

    @app.route("/suggestions/mine")
    def my_suggestions():
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        key = normalize_identity(identity)
        mine = [s for s in load_suggestions() if normalize_identity(s.suggester) == key]
        return {"ok": True, "suggestions": [s.to_dict() for s in mine]}

    @app.route("/suggestions", methods=["POST"])
    def suggest_name():
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)

        data = request_payload()
        member = lookup_member(load_roster(), identity)
        record = {
            "name": data.get("name"),
            "gender": data.get("gender"),
            "suggester": identity,
            "guess": data.get("guess"),
            "relation": data.get("relation") or member["relation"],
            "meaning": data.get("meaning"),
        }
        result = validate_and_record_suggestion(
            record, load_suggestions(), config_result["config"]
        )
        if not result["ok"]:
            current_app.logger.warning(
                "Suggestion from %s rejected: %s", identity, result["error"]
            )
            return rejection(result)

        suggestion = Suggestion(**result["fields"])
        db.session.add(suggestion)
        db.session.commit()
        current_app.logger.info(
            "%s suggested %s (%s)", identity, suggestion.name, suggestion.gender
        )
        return {"ok": True, "suggestion": suggestion.to_dict()}, 201

    @app.route("/suggestions/<public_id>/update", methods=["POST"])
    def update_suggestion(public_id):
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        suggestion = Suggestion.query.filter_by(public_id=public_id).first_or_404()
        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)

        result = edit_suggestion(
            suggestion,
            request_payload(),
            identity,
            config_result["config"],
            existing_suggestions=load_suggestions(),
        )
        if not result["ok"]:
            current_app.logger.warning(
                "Edit of suggestion %s by %s rejected: %s",
                public_id,
                identity,
                result["error"],
            )
            return rejection(result)

        db.session.commit()
        return {"ok": True, "suggestion": suggestion.to_dict()}

    @app.route("/suggestions/<public_id>/delete", methods=["POST"])
    def remove_suggestion(public_id):
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        suggestion = Suggestion.query.filter_by(public_id=public_id).first_or_404()
        result = delete_suggestion(suggestion, identity)
        if not result["ok"]:
            current_app.logger.warning(
                "Delete of suggestion %s by %s rejected", public_id, identity
            )
            return rejection(result)

        db.session.delete(suggestion)
        db.session.commit()
        current_app.logger.info("%s deleted suggestion %s", identity, public_id)
        return {"ok": True}

    @app.route("/candidates")
    def list_candidates():
        candidates = aggregate_suggestions(load_suggestions())
        identity = session.get("identity")
        my_votes = votes_for_voter(load_votes(), identity) if identity else []
        return {
            "ok": True,
            "candidates": [serialize_candidate(c) for c in candidates.values()],
            "my_votes": [vote.to_dict() for vote in my_votes],
        }

    @app.route("/votes", methods=["POST"])
    def cast_vote():
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)
        config = config_result["config"]

        data = request_payload()
        intent = {
            "voter": identity,
            "name": data.get("name"),
            "gender": data.get("gender"),
            "score": data.get("score"),
        }
        candidate_keys = set(aggregate_suggestions(load_suggestions()))
        result = validate_and_record_vote(intent, load_votes(), config, candidate_keys)
        if not result["ok"]:
            current_app.logger.warning(
                "Vote from %s rejected: %s", identity, result["error"]
            )
            return rejection(result)

        if result["created"]:
            vote = NameVote(**result["fields"])
            db.session.add(vote)
        else:
            vote = result["vote"]

        try:
            db.session.flush()
        except IntegrityError:
            db.session.rollback()
            current_app.logger.warning("Concurrent vote write for %s", identity)
            return rejection(
                rejected("Your vote was changed elsewhere at the same time. Please try again.")
            )

        persisted = NameVote.query.filter_by(voter_key=normalize_identity(identity)).all()
        score = vote.score
        if score in over_budget_stars(persisted, config.star_budgets):
            db.session.rollback()
            current_app.logger.warning(
                "Vote from %s exceeded the %s-star budget after re-check", identity, score
            )
            return rejection(
                rejected(
                    f"You have already used all your {score}-star votes.",
                    kind=QUOTA,
                    budget_exceeded=True,
                )
            )

        db.session.commit()
        current_app.logger.info(
            "%s gave %s (%s) %s stars", identity, vote.name, vote.gender, vote.score
        )
        return {
            "ok": True,
            "created": result["created"],
            "vote": vote.to_dict(),
            "quota": _quota_payload(persisted, config.star_budgets),
        }

    @app.route("/votes/quota")
    def vote_quota():
        identity = session.get("identity")
        if not identity:
            return _not_joined()

        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)

        mine = votes_for_voter(load_votes(), identity)
        return {"ok": True, **_quota_payload(mine, config_result["config"].star_budgets)}

    @app.route("/results")
    def contest_results():
        config_result = load_contest_config()
        if not config_result["ok"]:
            return rejection(config_result)
        config = config_result["config"]

        if config.phase not in REVEALED_PHASES:
            return rejection(rejected("Results have not been revealed yet."))

        return compute_reveal(load_suggestions(), load_votes(), load_roster(), config)

    @app.route("/winners")
    def list_winners():
        winners = Winner.query.order_by(Winner.id).all()
        return {
            "ok": True,
            "winners": [
                {"identity": winner.identity, "actual_gender": winner.actual_gender}
                for winner in winners
            ],
        }


def _quota_payload(voter_votes, budgets):
    usage = compute_quota_usage(voter_votes, budgets)
    return {
        "usage": {str(star): count for star, count in usage.items()},
        "budgets": {str(star): limit for star, limit in budgets.items()},
        "remaining": {
            str(star): max(limit - usage.get(star, 0), 0) for star, limit in budgets.items()
        },
    }
