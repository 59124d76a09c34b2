from datetime import datetime, timezone

from namecontest.services.contest.config import GENDERS
from namecontest.services.contest.results import (
    QUOTA,
    accepted,
    candidate_key,
    normalize_identity,
    normalize_text,
    rejected,
)


def aggregate_suggestions(suggestions):
    """Fold suggestion rows into one entry per (name, gender), keyed case-insensitively.

    Suggesters, guesses and meanings are kept in insertion order with
    duplicates collapsed. Rows without a name or gender are skipped.
    """
    candidates = {}
    for suggestion in suggestions:
        name = normalize_text(suggestion.name)
        gender = normalize_identity(suggestion.gender)
        if not name or not gender:
            continue

        key = candidate_key(name, gender)
        candidate = candidates.get(key)
        if candidate is None:
            candidate = {
                "name": name,
                "gender": gender,
                "suggesters": {},
                "guesses": {},
                "meanings": {},
            }
            candidates[key] = candidate

        suggester = normalize_text(suggestion.suggester)
        if suggester:
            candidate["suggesters"].setdefault(normalize_identity(suggester), suggester)

        guess = normalize_identity(suggestion.guess)
        if guess:
            candidate["guesses"].setdefault(guess, guess)

        meaning = normalize_text(getattr(suggestion, "meaning", None))
        if meaning:
            candidate["meanings"].setdefault(meaning, meaning)

    return candidates


def serialize_candidate(candidate):
    return {
        "name": candidate["name"],
        "gender": candidate["gender"],
        "suggesters": list(candidate["suggesters"].values()),
        "guesses": list(candidate["guesses"].values()),
        "meanings": list(candidate["meanings"].values()),
    }


def suggestions_by(suggestions, suggester):
    suggester_key = normalize_identity(suggester)
    return [s for s in suggestions if normalize_identity(s.suggester) == suggester_key]


def is_owner(suggestion, identity):
    identity_key = normalize_identity(identity)
    return bool(identity_key) and normalize_identity(suggestion.suggester) == identity_key


def validate_and_record_suggestion(record, existing_suggestions, config, now=None):
    if config.phase != "Nominations":
        return rejected("Name suggestions are closed.")

    name = normalize_text(record.get("name"))
    gender = normalize_identity(record.get("gender"))
    suggester = normalize_text(record.get("suggester"))
    guess = normalize_identity(record.get("guess"))
    relation = normalize_text(record.get("relation"))
    meaning = normalize_text(record.get("meaning")) or None

    if not name or not gender or not suggester or not guess or not relation:
        return rejected("Name, gender, your name, your guess and relation are required.")
    if gender not in GENDERS or guess not in GENDERS:
        return rejected("Gender and guess must be 'girl' or 'boy'.")

    mine = suggestions_by(existing_suggestions, suggester)
    key = candidate_key(name, gender)
    if any(candidate_key(s.name, s.gender) == key for s in mine):
        return rejected(f"You already suggested '{name}' as a {gender} name.")

    cap = config.suggestion_cap(gender)
    used = sum(1 for s in mine if normalize_identity(s.gender) == gender)
    if cap is not None and used >= cap:
        return rejected(
            f"You can suggest at most {cap} {gender} names.",
            kind=QUOTA,
        )

    return accepted(
        fields={
            "name": name,
            "gender": gender,
            "suggester": suggester,
            "guess": guess,
            "relation": relation,
            "meaning": meaning,
            "submitted_at": now or datetime.now(timezone.utc),
        }
    )


def edit_suggestion(suggestion, changes, editor, config, existing_suggestions=(), now=None):
    if not is_owner(suggestion, editor):
        return rejected("Only the person who suggested this name can edit it.")
    if config.phase != "Nominations":
        return rejected("Suggestions can only be edited during nominations.")

    def merged(field):
        value = changes.get(field)
        if value is None:
            return getattr(suggestion, field)
        return value

    name = normalize_text(merged("name"))
    gender = normalize_identity(merged("gender"))
    guess = normalize_identity(merged("guess"))
    relation = normalize_text(merged("relation"))
    meaning = normalize_text(merged("meaning")) or None

    if not name or not gender:
        return rejected("Name and gender cannot be empty.")
    if not guess or not relation:
        return rejected("Your guess and relation cannot be empty.")
    if gender not in GENDERS or guess not in GENDERS:
        return rejected("Gender and guess must be 'girl' or 'boy'.")

    key = candidate_key(name, gender)
    others = [
        other
        for other in suggestions_by(existing_suggestions, suggestion.suggester)
        if other is not suggestion
    ]
    if any(candidate_key(other.name, other.gender) == key for other in others):
        return rejected(f"You already suggested '{name}' as a {gender} name.")

    if gender != normalize_identity(suggestion.gender):
        cap = config.suggestion_cap(gender)
        used = sum(1 for other in others if normalize_identity(other.gender) == gender)
        if cap is not None and used >= cap:
            return rejected(
                f"You can suggest at most {cap} {gender} names.",
                kind=QUOTA,
            )

    suggestion.name = name
    suggestion.gender = gender
    suggestion.guess = guess
    suggestion.relation = relation
    suggestion.meaning = meaning
    suggestion.submitted_at = now or datetime.now(timezone.utc)
    return accepted(suggestion=suggestion)


def delete_suggestion(suggestion, requester):
    if not is_owner(suggestion, requester):
        return rejected("Only the person who suggested this name can delete it.")
    return accepted(suggestion=suggestion)


def guessers_of(suggestions, gender):
    """Distinct suggesters with at least one row guessing ``gender``, in first-match order."""
    target = normalize_identity(gender)
    found = {}
    for suggestion in suggestions:
        suggester = normalize_text(suggestion.suggester)
        if suggester and normalize_identity(suggestion.guess) == target:
            found.setdefault(normalize_identity(suggester), suggester)
    return list(found.values())


def suggester_relations(suggestions):
    """Map each distinct suggester to the relation on their last row that has one."""
    relations = {}
    for suggestion in suggestions:
        suggester = normalize_text(suggestion.suggester)
        if not suggester:
            continue
        key = normalize_identity(suggester)
        relations.setdefault(key, None)
        relation = normalize_text(suggestion.relation)
        if relation:
            relations[key] = relation
    return relations
