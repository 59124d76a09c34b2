from types import SimpleNamespace

from tests.conftest import make_vote

from namecontest.services.contest import aggregate_votes, build_roster, lookup_member
from namecontest.services.contest.votes import voter_weight


def roster_of(*entries):
    return build_roster(
        SimpleNamespace(identity=identity, role=role, relation=relation)
        for identity, role, relation in entries
    )


class TestRoster:
    def test_lookup_is_case_insensitive(self):
        roster = roster_of(("Mom", "Parent", "Mother"))
        member = lookup_member(roster, "  mom ")
        assert member["identity"] == "Mom"
        assert member["role"] == "Parent"
        assert member["relation"] == "Mother"

    def test_unknown_identity_is_a_guest_voter(self):
        member = lookup_member(roster_of(), "Stranger")
        assert member == {"identity": "Stranger", "role": "Voter", "relation": None}

    def test_only_parents_get_parent_weight(self):
        roster = roster_of(("Mom", "Parent", None), ("Alice", "Voter", "Friend"))
        assert voter_weight(roster, "MOM", 3) == 3
        assert voter_weight(roster, "Alice", 3) == 1
        assert voter_weight(roster, "Guest", 3) == 1


class TestAggregateVotes:
    def test_groups_by_candidate_with_weights(self):
        roster = roster_of(("Mom", "Parent", None))
        votes = [
            make_vote("Luna", "girl", "Mom", 5),
            make_vote("luna", "Girl", "Alice", 3),
            make_vote("Leo", "boy", "Alice", 4),
        ]
        ballots = aggregate_votes(votes, roster, parent_weight=2)
        assert ballots[("luna", "girl")] == [
            {"score": 5, "weight": 2},
            {"score": 3, "weight": 1},
        ]
        assert ballots[("leo", "boy")] == [{"score": 4, "weight": 1}]

    def test_default_parent_weight_has_no_effect(self):
        roster = roster_of(("Mom", "Parent", None))
        ballots = aggregate_votes([make_vote("Luna", "girl", "Mom", 5)], roster)
        assert ballots[("luna", "girl")] == [{"score": 5, "weight": 1}]

    def test_skips_incomplete_rows(self):
        votes = [
            make_vote("", "girl", "Alice", 5),
            make_vote("Luna", "", "Alice", 5),
            make_vote("Luna", "girl", "", 5),
            make_vote("Luna", "girl", "Bob", 4),
        ]
        assert aggregate_votes(votes, {}) == {("luna", "girl"): [{"score": 4, "weight": 1}]}
