from namecontest.models.contest_settings import ContestSettings
from namecontest.models.name_vote import NameVote
from namecontest.models.participant import Participant
from namecontest.models.suggestion import Suggestion
from namecontest.models.user import User
from namecontest.models.winner import Winner

__all__ = [
    "User",
    "ContestSettings",
    "Participant",
    "Suggestion",
    "NameVote",
    "Winner",
]
