"""Weighted and Bayesian-smoothed candidate scores with a tie-broken ranking.

The Bayesian score pulls candidates with few votes toward a neutral prior::

    (total_weighted_score + PRIOR_SCORE * PRIOR_WEIGHT) / (total_weight + PRIOR_WEIGHT)

Ranking sorts by the chosen score, then by 5-star count, then by total
weight, all descending. Candidates equal on every key keep the order of the
input mapping.
"""

from namecontest.services.contest.config import GENDERS, STAR_VALUES
from namecontest.services.contest.results import accepted, normalize_identity
from namecontest.services.contest.suggestions import (
    aggregate_suggestions,
    guessers_of,
    serialize_candidate,
    suggester_relations,
)
from namecontest.services.contest.votes import aggregate_votes

PRIOR_SCORE = 3
PRIOR_WEIGHT = 5
TOP_CHART_SIZE = 10


def bayesian_score(total_weighted_score, total_weight):
    return (total_weighted_score + PRIOR_SCORE * PRIOR_WEIGHT) / (total_weight + PRIOR_WEIGHT)


def score_candidate(candidate, ballot):
    total_weighted_score = 0.0
    total_weight = 0.0
    star_counts = {star: 0 for star in STAR_VALUES}

    for entry in ballot:
        total_weighted_score += entry["score"] * entry["weight"]
        total_weight += entry["weight"]
        if entry["score"] in star_counts:
            star_counts[entry["score"]] += 1

    average_score = total_weighted_score / total_weight if total_weight > 0 else 0

    return {
        **serialize_candidate(candidate),
        "star_counts": star_counts,
        "vote_count": len(ballot),
        "total_weighted_score": total_weighted_score,
        "total_weight": total_weight,
        "average_score": average_score,
        "bayesian_score": bayesian_score(total_weighted_score, total_weight),
    }


def score_candidates(candidates, ballots):
    return [score_candidate(candidate, ballots.get(key, [])) for key, candidate in candidates.items()]


def ranking_key(row, by="bayesian"):
    primary = row["average_score"] if by == "average" else row["bayesian_score"]
    return (-primary, -row["star_counts"][5], -row["total_weight"])


def rank_candidates(scored, by="bayesian"):
    ranked = sorted(scored, key=lambda row: ranking_key(row, by))
    for position, row in enumerate(ranked, start=1):
        row["rank"] = position
    return ranked


def top_by_gender(ranked, size=TOP_CHART_SIZE):
    return {
        gender: [
            {
                "name": row["name"],
                "bayesian_score": row["bayesian_score"],
                "average_score": row["average_score"],
                "vote_count": row["vote_count"],
            }
            for row in ranked
            if row["gender"] == gender
        ][:size]
        for gender in GENDERS
    }


def guess_summary(suggestions, actual_gender):
    counts = {gender: 0 for gender in GENDERS}
    for suggestion in suggestions:
        guess = normalize_identity(suggestion.guess)
        if guess in counts:
            counts[guess] += 1

    actual = normalize_identity(actual_gender)
    correct = guessers_of(suggestions, actual) if actual in GENDERS else []
    return {"counts": counts, "correct_guessers": correct}


def relation_breakdown(suggestions):
    counts = {}
    for relation in suggester_relations(suggestions).values():
        relation = relation or "Unknown"
        counts[relation] = counts.get(relation, 0) + 1

    rows = [{"relation": relation, "count": count} for relation, count in counts.items()]
    rows.sort(key=lambda row: -row["count"])
    return rows


def compute_reveal(suggestions, votes, roster, config):
    suggestions = list(suggestions)
    candidates = aggregate_suggestions(suggestions)
    ballots = aggregate_votes(votes, roster, config.parent_weight)
    ranked = rank_candidates(score_candidates(candidates, ballots), by=config.ranking_score)

    return accepted(
        ranked_candidates=ranked,
        chart_data={
            "top_names": top_by_gender(ranked),
            "guesses": guess_summary(suggestions, config.actual_gender),
            "relations": relation_breakdown(suggestions),
        },
    )
