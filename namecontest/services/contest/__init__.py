from namecontest.services.contest.config import (
    ContestConfig,
    build_contest_config,
    format_star_budgets,
    parse_star_budgets,
)
from namecontest.services.contest.draw import draw_winners, eligible_guessers
from namecontest.services.contest.ledger import (
    compute_quota_usage,
    over_budget_stars,
    validate_and_record_vote,
    votes_for_voter,
)
from namecontest.services.contest.scoring import compute_reveal, rank_candidates, score_candidates
from namecontest.services.contest.suggestions import (
    aggregate_suggestions,
    delete_suggestion,
    edit_suggestion,
    serialize_candidate,
    validate_and_record_suggestion,
)
from namecontest.services.contest.votes import aggregate_votes, build_roster, lookup_member

__all__ = [
    "ContestConfig",
    "aggregate_suggestions",
    "aggregate_votes",
    "build_contest_config",
    "build_roster",
    "compute_quota_usage",
    "compute_reveal",
    "delete_suggestion",
    "draw_winners",
    "edit_suggestion",
    "eligible_guessers",
    "format_star_budgets",
    "lookup_member",
    "over_budget_stars",
    "parse_star_budgets",
    "rank_candidates",
    "score_candidates",
    "serialize_candidate",
    "validate_and_record_suggestion",
    "validate_and_record_vote",
    "votes_for_voter",
]
