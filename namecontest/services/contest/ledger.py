from datetime import datetime, timezone

from namecontest.services.contest.config import GENDERS, STAR_VALUES
from namecontest.services.contest.results import (
    QUOTA,
    accepted,
    candidate_key,
    normalize_identity,
    normalize_text,
    rejected,
)


def votes_for_voter(votes, voter):
    voter_key = normalize_identity(voter)
    return [vote for vote in votes if normalize_identity(vote.voter) == voter_key]


def tally_star_usage(voter_votes, budgets):
    usage = {star: 0 for star in budgets}
    for vote in voter_votes:
        try:
            score = int(vote.score)
        except (TypeError, ValueError):
            continue
        usage[score] = usage.get(score, 0) + 1
    return usage


def compute_quota_usage(voter_votes, budgets):
    usage = tally_star_usage(voter_votes, budgets)
    return {star: usage.get(star, 0) for star in sorted(set(usage) | set(budgets), reverse=True)}


def over_budget_stars(voter_votes, budgets):
    usage = tally_star_usage(voter_votes, budgets)
    return [star for star, limit in budgets.items() if usage.get(star, 0) > limit]


def _parse_score(raw):
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def validate_and_record_vote(intent, existing_votes, config, candidate_keys=None, now=None):
    if config.phase != "Voting":
        return rejected("Voting is not open right now.")

    voter = normalize_text(intent.get("voter"))
    name = normalize_text(intent.get("name"))
    gender = normalize_identity(intent.get("gender"))
    score = _parse_score(intent.get("score"))

    if not voter:
        return rejected("Please join the contest before voting.")
    if not name or not gender or not score:
        return rejected("Name, gender and a star rating are required.")
    if gender not in GENDERS:
        return rejected("Gender must be 'girl' or 'boy'.")
    if score not in STAR_VALUES:
        return rejected("Star rating must be between 1 and 5.")

    key = candidate_key(name, gender)
    if candidate_keys is not None and key not in candidate_keys:
        return rejected(f"'{name}' ({gender}) has not been suggested.")

    voter_votes = votes_for_voter(existing_votes, voter)
    existing = next(
        (vote for vote in voter_votes if candidate_key(vote.name, vote.gender) == key),
        None,
    )

    usage = tally_star_usage(voter_votes, config.star_budgets)
    if existing is not None:
        old_score = _parse_score(existing.score)
        if old_score is not None:
            usage[old_score] = usage.get(old_score, 0) - 1

    new_count = usage.get(score, 0) + 1
    budget = config.star_budgets.get(score)
    if budget is not None and new_count > budget:
        return rejected(
            f"You have already used all {budget} of your {score}-star votes.",
            kind=QUOTA,
            budget_exceeded=True,
        )

    submitted_at = now or datetime.now(timezone.utc)
    if existing is not None:
        existing.score = score
        existing.submitted_at = submitted_at
        return accepted(created=False, vote=existing)

    return accepted(
        created=True,
        fields={
            "name": name,
            "gender": gender,
            "voter": voter,
            "score": score,
            "submitted_at": submitted_at,
        },
    )
