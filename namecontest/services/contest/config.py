"""Immutable contest configuration snapshot handed to the scoring core."""

from dataclasses import dataclass, field

from namecontest.services.contest.results import CONFIGURATION, accepted, rejected

PHASES = ("Nominations", "Voting", "Reveal", "Closed")
GENDERS = ("girl", "boy")
ACTUAL_GENDERS = ("Girl", "Boy", "Unknown")
RANKING_SCORES = ("bayesian", "average")
STAR_VALUES = (5, 4, 3, 2, 1)


@dataclass(frozen=True)
class ContestConfig:
    phase: str = "Nominations"
    star_budgets: dict[int, int] = field(default_factory=dict)
    parent_weight: float = 1.0
    max_suggestions_per_person: int = 3
    max_girl_suggestions: int | None = None
    max_boy_suggestions: int | None = None
    actual_gender: str = "Unknown"
    normalization: bool = False
    ranking_score: str = "bayesian"

    def suggestion_cap(self, gender):
        if gender == "girl" and self.max_girl_suggestions is not None:
            return self.max_girl_suggestions
        if gender == "boy" and self.max_boy_suggestions is not None:
            return self.max_boy_suggestions
        return self.max_suggestions_per_person

    def to_dict(self):
        return {
            "phase": self.phase,
            "star_budgets": {str(star): count for star, count in self.star_budgets.items()},
            "parent_weight": self.parent_weight,
            "max_suggestions_per_person": self.max_suggestions_per_person,
            "max_girl_suggestions": self.suggestion_cap("girl"),
            "max_boy_suggestions": self.suggestion_cap("boy"),
            "actual_gender": self.actual_gender,
            "normalization": self.normalization,
            "ranking_score": self.ranking_score,
        }


def parse_star_budgets(raw):
    """Parse a compact budget list such as ``"5:2, 4:3"`` into ``{5: 2, 4: 3}``.

    A mapping such as ``{"5": 2, "4": 3}`` is accepted too. Raises ValueError
    on malformed pairs, stars outside 1..5 or negative counts.
    """
    if isinstance(raw, dict):
        raw = ",".join(f"{star}:{count}" for star, count in raw.items())
    elif raw is not None and not isinstance(raw, str):
        raise ValueError("Star budgets must look like '5:2,4:3'.")

    budgets = {}
    for entry in (raw or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        star_raw, sep, count_raw = entry.partition(":")
        if not sep:
            raise ValueError(f"Star budget entry '{entry}' must look like 'star:count'.")
        try:
            star = int(star_raw.strip())
            count = int(count_raw.strip())
        except ValueError:
            raise ValueError(f"Star budget entry '{entry}' must use whole numbers.") from None
        if star not in STAR_VALUES:
            raise ValueError(f"Star value {star} is outside 1-5.")
        if count < 0:
            raise ValueError(f"Star budget for {star} stars cannot be negative.")
        budgets[star] = count
    return budgets


def format_star_budgets(budgets):
    return ",".join(f"{star}:{count}" for star, count in sorted(budgets.items(), reverse=True))


def build_contest_config(settings):
    """Build a ContestConfig from a settings row (or any object with the same attributes)."""
    if settings is None:
        return rejected("Contest has not been configured.", kind=CONFIGURATION)

    if settings.phase not in PHASES:
        return rejected(f"Unknown contest phase '{settings.phase}'.", kind=CONFIGURATION)

    actual_gender = settings.actual_gender or "Unknown"
    if actual_gender not in ACTUAL_GENDERS:
        return rejected(f"Unknown actual gender '{actual_gender}'.", kind=CONFIGURATION)

    ranking_score = settings.ranking_score or "bayesian"
    if ranking_score not in RANKING_SCORES:
        return rejected(f"Unknown ranking score '{ranking_score}'.", kind=CONFIGURATION)

    try:
        star_budgets = parse_star_budgets(settings.star_budgets)
    except ValueError as exc:
        return rejected(str(exc), kind=CONFIGURATION)

    config = ContestConfig(
        phase=settings.phase,
        star_budgets=star_budgets,
        parent_weight=float(settings.parent_weight if settings.parent_weight is not None else 1),
        max_suggestions_per_person=settings.max_suggestions_per_person,
        max_girl_suggestions=settings.max_girl_suggestions,
        max_boy_suggestions=settings.max_boy_suggestions,
        actual_gender=actual_gender,
        normalization=bool(settings.normalization),
        ranking_score=ranking_score,
    )
    return accepted(config=config)
