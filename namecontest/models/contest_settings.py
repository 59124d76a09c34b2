from namecontest.extensions import db


class ContestSettings(db.Model):
    __tablename__ = "contest_settings"

    id = db.Column(db.Integer, primary_key=True)
    phase = db.Column(db.String(20), nullable=False, default="Nominations")
    star_budgets = db.Column(db.String(100), nullable=False, default="")
    parent_weight = db.Column(db.Float, nullable=False, default=1.0)
    max_suggestions_per_person = db.Column(db.Integer, nullable=False, default=3)
    max_girl_suggestions = db.Column(db.Integer, nullable=True)
    max_boy_suggestions = db.Column(db.Integer, nullable=True)
    actual_gender = db.Column(db.String(10), nullable=False, default="Unknown")
    normalization = db.Column(db.Boolean, nullable=False, default=False)
    ranking_score = db.Column(db.String(20), nullable=False, default="bayesian")
