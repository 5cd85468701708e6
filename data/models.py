from dataclasses import dataclass
from typing import Optional, Tuple

from game.errors import InvalidProfileError


# Категория стимула: на GO надо нажать, на NOGO надо удержаться
CATEGORY_GO = "GO"
CATEGORY_NOGO = "NOGO"

# Чем закончился trial
ACTION_PRESS = "PRESS"
ACTION_TIMEOUT = "TIMEOUT"

SEX_MALE = "male"
SEX_FEMALE = "female"
SEXES = (SEX_MALE, SEX_FEMALE)

MIN_AGE = 0
MAX_AGE = 120


@dataclass(frozen=True)
class SessionProfile:
    """
    Данные испытуемого (возраст и пол), задаются один раз до старта сессии.
    """
    age: int
    sex: str


@dataclass(frozen=True)
class TrialResult:
    """
    Результат одного trial-а. Одна запись на каждый завершённый раунд.
    """
    round_index: int                  # 0-based
    category: str                     # "GO" / "NOGO"
    action: str                       # "PRESS" / "TIMEOUT"
    reaction_time_ms: Optional[float]  # None при TIMEOUT
    correct: bool

    def to_record(self) -> dict:
        return {
            "round_index": self.round_index,
            "category": self.category,
            "action": self.action,
            "reaction_time_ms": self.reaction_time_ms,
            "correct": int(self.correct),
        }


@dataclass(frozen=True)
class EvaluationSummary:
    filtered_median_ms: float
    q1_ms: float
    q3_ms: float
    iqr_ms: float
    rating: str
    z_score: float
    group_mean_ms: float
    group_sd_ms: float
    diff_ms: float
    age_bracket: str
    reaction_times_ms: Tuple[float, ...]  # final filtered set, sorted
    accuracy: float
    inhibition_rate: Optional[float]

    sufficient = True


@dataclass(frozen=True)
class InsufficientData:
    """No reaction time survived filtering, so there is nothing to rate."""
    reason: str
    accuracy: float
    inhibition_rate: Optional[float]

    sufficient = False


def is_correct(category: str, action: str) -> bool:
    if category == CATEGORY_GO:
        return action == ACTION_PRESS
    if category == CATEGORY_NOGO:
        return action == ACTION_TIMEOUT
    raise ValueError(f"Unknown category: {category}")


def build_trial_result(
    round_index: int,
    category: str,
    action: str,
    reaction_time_ms: Optional[float],
) -> TrialResult:
    if action == ACTION_PRESS:
        if reaction_time_ms is None or reaction_time_ms < 0:
            raise ValueError(f"PRESS needs a non-negative reaction time, got {reaction_time_ms}")
    elif action == ACTION_TIMEOUT:
        reaction_time_ms = None
    else:
        raise ValueError(f"Unknown action: {action}")
    return TrialResult(
        round_index=round_index,
        category=category,
        action=action,
        reaction_time_ms=reaction_time_ms,
        correct=is_correct(category, action),
    )


def validate_profile(profile: SessionProfile) -> SessionProfile:
    age = profile.age
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidProfileError("age", age, "must be an integer")
    if not MIN_AGE <= age <= MAX_AGE:
        raise InvalidProfileError("age", age, f"must be in [{MIN_AGE}, {MAX_AGE}]")
    if not profile.sex:
        raise InvalidProfileError("sex", profile.sex, "is required")
    if profile.sex not in SEXES:
        raise InvalidProfileError("sex", profile.sex, f"must be one of {', '.join(SEXES)}")
    return profile


def parse_profile(age_text, sex_text) -> SessionProfile:
    """Builds a validated profile from raw form/CLI values."""
    try:
        age = int(str(age_text).strip())
    except (TypeError, ValueError):
        raise InvalidProfileError("age", age_text, "must be an integer") from None
    sex = (sex_text or "").strip().lower()
    return validate_profile(SessionProfile(age=age, sex=sex))
