from namecontest.services.contest.results import (
    candidate_key,
    normalize_identity,
    normalize_text,
)

GUEST_ROLE = "Voter"
PARENT_ROLE = "Parent"


def build_roster(participants):
    roster = {}
    for participant in participants:
        identity = normalize_text(participant.identity)
        if not identity:
            continue
        roster[normalize_identity(identity)] = {
            "identity": identity,
            "role": normalize_text(participant.role) or GUEST_ROLE,
            "relation": normalize_text(participant.relation) or None,
        }
    return roster


def lookup_member(roster, identity):
    member = roster.get(normalize_identity(identity))
    if member is None:
        return {"identity": normalize_text(identity), "role": GUEST_ROLE, "relation": None}
    return member


def voter_weight(roster, identity, parent_weight):
    if lookup_member(roster, identity)["role"].lower() == PARENT_ROLE.lower():
        return parent_weight
    return 1


def aggregate_votes(votes, roster, parent_weight=1):
    ballots = {}
    for vote in votes:
        name = normalize_text(vote.name)
        gender = normalize_identity(vote.gender)
        voter = normalize_text(vote.voter)
        if not name or not gender or not voter:
            continue
        try:
            score = int(vote.score)
        except (TypeError, ValueError):
            continue

        ballots.setdefault(candidate_key(name, gender), []).append(
            {"score": score, "weight": voter_weight(roster, voter, parent_weight)}
        )
    return ballots
