from sqlalchemy import event

from namecontest.extensions import db
from namecontest.services.contest.results import normalize_identity


class Participant(db.Model):
    __tablename__ = "participants"

    id = db.Column(db.Integer, primary_key=True)
    identity = db.Column(db.String(200), nullable=False)
    identity_key = db.Column(db.String(200), unique=True, nullable=False)
    role = db.Column(db.String(50), nullable=False, default="Voter")
    relation = db.Column(db.String(100), nullable=True)


@event.listens_for(Participant, "before_insert")
@event.listens_for(Participant, "before_update")
def _fill_identity_key(mapper, connection, participant):
    participant.identity_key = normalize_identity(participant.identity)
