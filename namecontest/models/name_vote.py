from datetime import datetime, timezone

from sqlalchemy import event

from namecontest.extensions import db
from namecontest.services.contest.results import normalize_identity


class NameVote(db.Model):
    __tablename__ = "name_votes"
    __table_args__ = (
        db.UniqueConstraint(
            "voter_key", "name_key", "gender_key", name="uq_name_votes_voter_candidate"
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    gender = db.Column(db.String(10), nullable=False)
    voter = db.Column(db.String(200), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    submitted_at = db.Column(
        db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    voter_key = db.Column(db.String(200), nullable=False)
    name_key = db.Column(db.String(100), nullable=False)
    gender_key = db.Column(db.String(10), nullable=False)

    def to_dict(self):
        return {
            "name": self.name,
            "gender": self.gender,
            "score": self.score,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }


@event.listens_for(NameVote, "before_insert")
def _fill_vote_keys(mapper, connection, vote):
    vote.voter_key = normalize_identity(vote.voter)
    vote.name_key = normalize_identity(vote.name)
    vote.gender_key = normalize_identity(vote.gender)
