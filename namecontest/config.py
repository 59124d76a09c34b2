import os

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name):
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///namecontest.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # Used once, when an administrator first saves the contest settings.
    CONTEST_STAR_BUDGETS = os.getenv("CONTEST_STAR_BUDGETS", "5:3,4:5")
    CONTEST_PARENT_WEIGHT = float(os.getenv("CONTEST_PARENT_WEIGHT", "1"))
    CONTEST_MAX_SUGGESTIONS = int(os.getenv("CONTEST_MAX_SUGGESTIONS", "3"))
    CONTEST_MAX_GIRL_SUGGESTIONS = _optional_int("CONTEST_MAX_GIRL_SUGGESTIONS")
    CONTEST_MAX_BOY_SUGGESTIONS = _optional_int("CONTEST_MAX_BOY_SUGGESTIONS")
