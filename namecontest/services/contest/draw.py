import logging
import random

from namecontest.services.contest.config import GENDERS
from namecontest.services.contest.results import (
    CONFIGURATION,
    accepted,
    normalize_identity,
    rejected,
)
from namecontest.services.contest.suggestions import guessers_of

logger = logging.getLogger(__name__)


def eligible_guessers(suggestions, actual_gender):
    return guessers_of(suggestions, actual_gender)


def shuffle_fairly(items, rng):
    pool = list(items)
    for i in range(len(pool) - 1, 0, -1):
        j = rng.randint(0, i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool


def draw_winners(suggestions, actual_gender, count, rng=None):
    actual = normalize_identity(actual_gender)
    if actual not in GENDERS:
        return rejected(
            "Set the baby's actual gender before drawing winners.",
            kind=CONFIGURATION,
        )

    try:
        count = int(count)
    except (TypeError, ValueError):
        return rejected("Number of winners must be a whole number.")
    if count < 1:
        return rejected("Number of winners must be at least 1.")

    eligible = eligible_guessers(suggestions, actual)
    if not eligible:
        return accepted(winners=[], eligible_count=0, notice="No one guessed the right gender.")

    shuffled = shuffle_fairly(eligible, rng or random.SystemRandom())
    winners = shuffled[: min(count, len(shuffled))]
    logger.debug("Drew %d of %d eligible guessers", len(winners), len(eligible))
    return accepted(winners=winners, eligible_count=len(eligible), notice=None)
