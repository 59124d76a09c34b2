from flask import current_app

from namecontest.models import ContestSettings, NameVote, Participant, Suggestion
from namecontest.services.contest import build_contest_config, build_roster


def load_contest_config():
    result = build_contest_config(ContestSettings.query.first())
    if not result["ok"]:
        current_app.logger.error("Contest configuration unavailable: %s", result["error"])
    return result


def load_roster():
    return build_roster(Participant.query.all())


def load_suggestions():
    return Suggestion.query.order_by(Suggestion.submitted_at, Suggestion.id).all()


def load_votes():
    return NameVote.query.order_by(NameVote.id).all()
