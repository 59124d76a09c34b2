from datetime import datetime, timezone

from namecontest.extensions import db
from namecontest.services.identifiers import generate_public_id


class Suggestion(db.Model):
    __tablename__ = "suggestions"

    id = db.Column(db.Integer, primary_key=True)
    public_id = db.Column(
        db.String(32), unique=True, nullable=False, default=generate_public_id
    )
    name = db.Column(db.String(100), nullable=False)
    gender = db.Column(db.String(10), nullable=False)
    suggester = db.Column(db.String(200), nullable=False)
    guess = db.Column(db.String(10), nullable=False)
    relation = db.Column(db.String(100), nullable=False)
    meaning = db.Column(db.Text, nullable=True)
    submitted_at = db.Column(
        db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self):
        return {
            "id": self.public_id,
            "name": self.name,
            "gender": self.gender,
            "suggester": self.suggester,
            "guess": self.guess,
            "relation": self.relation,
            "meaning": self.meaning,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }
