from tests.conftest import join

from namecontest.models import Participant, Suggestion


def suggest(client, name, gender, guess="girl", relation="Friend", **extra):
    return client.post(
        "/suggestions",
        json={"name": name, "gender": gender, "guess": guess, "relation": relation, **extra},
    )


def vote(client, name, gender, score):
    return client.post("/votes", json={"name": name, "gender": gender, "score": score})


def test_contest_without_settings_is_a_configuration_error(client):
    response = client.get("/contest")
    assert response.status_code == 409
    assert response.get_json()["kind"] == "configuration"


def test_join_as_guest_and_roster_member(client, db_session):
    db_session.add(Participant(identity="Mom", role="Parent", relation="Mother"))
    db_session.commit()

    assert join(client, "Stranger")["role"] == "Voter"

    member = join(client, "  mom ")
    assert member["identity"] == "Mom"
    assert member["role"] == "Parent"
    assert member["relation"] == "Mother"


def test_join_requires_identity(client):
    response = client.post("/join", json={"identity": "  "})
    assert response.status_code == 400


def test_suggest_requires_joining(client, contest_settings):
    response = suggest(client, "Aria", "girl")
    assert response.status_code == 401


def test_suggest_and_reject_case_variant_duplicate(client, contest_settings):
    join(client, "Alice")

    created = suggest(client, "Aria", "girl", meaning="Air")
    assert created.status_code == 201
    body = created.get_json()
    assert body["suggestion"]["name"] == "Aria"
    assert body["suggestion"]["id"]

    duplicate = suggest(client, "aria", "Girl")
    assert duplicate.status_code == 400
    assert "already suggested" in duplicate.get_json()["error"]

    mine = client.get("/suggestions/mine").get_json()["suggestions"]
    assert [s["name"] for s in mine] == ["Aria"]


def test_suggestion_relation_defaults_to_roster(client, db_session, contest_settings):
    db_session.add(Participant(identity="Gran", role="Voter", relation="Grandmother"))
    db_session.commit()
    join(client, "Gran")

    response = suggest(client, "Iris", "girl", relation="")
    assert response.status_code == 201
    assert response.get_json()["suggestion"]["relation"] == "Grandmother"


def test_only_owner_can_edit_or_delete(app, client, contest_settings):
    join(client, "Alice")
    public_id = suggest(client, "Aria", "girl").get_json()["suggestion"]["id"]

    other = app.test_client()
    join(other, "Bob")
    assert other.post(f"/suggestions/{public_id}/update", json={"name": "X"}).status_code == 400
    assert other.post(f"/suggestions/{public_id}/delete").status_code == 400

    edited = client.post(f"/suggestions/{public_id}/update", json={"name": "Ariana"})
    assert edited.status_code == 200
    assert edited.get_json()["suggestion"]["name"] == "Ariana"
    assert edited.get_json()["suggestion"]["id"] == public_id

    assert client.post(f"/suggestions/{public_id}/delete").status_code == 200
    assert Suggestion.query.count() == 0


def test_unknown_suggestion_id_is_not_found(client, contest_settings):
    join(client, "Alice")
    assert client.post("/suggestions/missing/update", json={"name": "X"}).status_code == 404
    assert client.post("/suggestions/missing/delete").status_code == 404


def test_edit_is_closed_after_nominations_but_delete_is_not(client, set_phase):
    join(client, "Alice")
    public_id = suggest(client, "Aria", "girl").get_json()["suggestion"]["id"]
    set_phase("Voting")

    assert client.post(f"/suggestions/{public_id}/update", json={"name": "X"}).status_code == 400
    assert client.post(f"/suggestions/{public_id}/delete").status_code == 200


def test_vote_budget_flow(client, set_phase):
    join(client, "Alice")
    for name in ("Luna", "Aria", "Maya"):
        assert suggest(client, name, "girl").status_code == 201
    set_phase("Voting")

    assert vote(client, "Luna", "girl", 5).status_code == 200
    assert vote(client, "Aria", "girl", 5).status_code == 200

    blocked = vote(client, "Maya", "girl", 5)
    assert blocked.status_code == 400
    assert blocked.get_json()["budget_exceeded"] is True

    changed = vote(client, "luna", "GIRL", 4)
    assert changed.status_code == 200
    assert changed.get_json()["created"] is False

    accepted = vote(client, "Maya", "girl", 5)
    assert accepted.status_code == 200
    assert accepted.get_json()["quota"]["usage"] == {"5": 2, "4": 1}

    quota = client.get("/votes/quota").get_json()
    assert quota["usage"] == {"5": 2, "4": 1}
    assert quota["remaining"] == {"5": 0, "4": 2}

    ballot = client.get("/candidates").get_json()
    assert len(ballot["candidates"]) == 3
    assert len(ballot["my_votes"]) == 3


def test_lowered_budget_only_blocks_that_star(client, set_phase):
    join(client, "Bob")
    assert suggest(client, "Nova", "girl").status_code == 201
    join(client, "Alice")
    for name in ("Luna", "Aria", "Maya"):
        assert suggest(client, name, "girl").status_code == 201
    set_phase("Voting")

    assert vote(client, "Luna", "girl", 5).status_code == 200
    assert vote(client, "Aria", "girl", 5).status_code == 200

    set_phase("Voting", star_budgets="5:1,4:3")

    other_star = vote(client, "Nova", "girl", 3)
    assert other_star.status_code == 200
    assert other_star.get_json()["quota"]["usage"]["5"] == 2

    assert vote(client, "Maya", "girl", 4).status_code == 200

    blocked = vote(client, "Maya", "girl", 5)
    assert blocked.status_code == 400
    assert blocked.get_json()["budget_exceeded"] is True
    assert "5-star" in blocked.get_json()["error"]


def test_non_text_fields_are_rejected_not_crashing(client, contest_settings):
    assert client.post("/join", json={"identity": {"name": "Alice"}}).status_code == 400
    assert client.post("/join", json=["Alice"]).status_code == 400

    join(client, "Alice")
    response = suggest(client, 7, "girl", guess=["girl"])
    assert response.status_code == 400


def test_vote_for_unsuggested_name_is_rejected(client, set_phase):
    set_phase("Voting")
    join(client, "Alice")
    response = vote(client, "Nova", "girl", 3)
    assert response.status_code == 400
    assert response.get_json()["budget_exceeded"] is False


def test_vote_outside_voting_phase_is_rejected(client, contest_settings):
    join(client, "Alice")
    suggest(client, "Luna", "girl")
    assert vote(client, "Luna", "girl", 3).status_code == 400


def test_results_hidden_until_reveal(client, set_phase):
    join(client, "Alice")
    suggest(client, "Luna", "girl")
    suggest(client, "Leo", "boy")
    set_phase("Voting")
    vote(client, "Luna", "girl", 5)

    assert client.get("/results").status_code == 400

    set_phase("Reveal", actual_gender="Girl")
    body = client.get("/results").get_json()
    assert body["ok"] is True
    assert [row["name"] for row in body["ranked_candidates"]] == ["Luna", "Leo"]
    assert body["chart_data"]["guesses"]["correct_guessers"] == ["Alice"]
    assert body["chart_data"]["relations"] == [{"relation": "Friend", "count": 1}]
