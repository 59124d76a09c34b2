from datetime import datetime, timezone

from namecontest.extensions import db


class Winner(db.Model):
    __tablename__ = "winners"

    id = db.Column(db.Integer, primary_key=True)
    identity = db.Column(db.String(200), nullable=False)
    actual_gender = db.Column(db.String(10), nullable=False)
    drawn_at = db.Column(
        db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
