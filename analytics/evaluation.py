"""Post-session scoring: RT filtering, quartiles and the demographic rating.

Everything here is a pure function of (results, profile, config); nothing is
cached or mutated, so the same inputs always give the same summary.
"""

import math
import statistics
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from analytics.norms import NORMS, reference_for
from config.settings import EvaluationConfig
from data.models import (
    ACTION_PRESS,
    ACTION_TIMEOUT,
    CATEGORY_GO,
    CATEGORY_NOGO,
    EvaluationSummary,
    InsufficientData,
    SessionProfile,
    TrialResult,
    validate_profile,
)


RATING_EXCELLENT = "Excellent"
RATING_GOOD = "Good"
RATING_AVERAGE = "Average"
RATING_BELOW_AVERAGE = "Below Average"
RATING_NEEDS_IMPROVEMENT = "Needs Improvement"

REASON_NO_ELIGIBLE = "no_eligible_trials"
REASON_ALL_FILTERED = "all_trials_filtered"
REASON_ALL_OUTLIERS = "all_trials_outliers"


def compute_accuracy(results: Sequence[TrialResult]) -> float:
    if not results:
        return 0.0
    return sum(1 for r in results if r.correct) / len(results)


def compute_inhibition_rate(results: Sequence[TrialResult]) -> Optional[float]:
    nogo = [r for r in results if r.category == CATEGORY_NOGO]
    if not nogo:
        return None
    return sum(1 for r in nogo if r.action == ACTION_TIMEOUT) / len(nogo)


def select_eligible(results: Iterable[TrialResult]) -> List[float]:
    return [
        float(r.reaction_time_ms)
        for r in results
        if r.category == CATEGORY_GO and r.action == ACTION_PRESS and r.reaction_time_ms is not None
    ]


def drop_anticipatory(rts: Iterable[float], threshold_ms: float) -> List[float]:
    return [rt for rt in rts if rt >= threshold_ms]


def age_cutoff_ms(age: int, cfg: EvaluationConfig) -> float:
    for max_age, cutoff in cfg.rt_cutoffs:
        if age <= max_age:
            return float(cutoff)
    return float(cfg.rt_cutoffs[-1][1])


def drop_above_cutoff(rts: Iterable[float], cutoff_ms: float) -> List[float]:
    return [rt for rt in rts if rt < cutoff_ms]


def quartiles(rts: Sequence[float]) -> Tuple[float, float, float]:
    """(q1, median, q3); q1/q3 are picked by index floor(n*0.25) / floor(n*0.75)."""
    ordered = sorted(rts)
    n = len(ordered)
    q1 = ordered[int(math.floor(n * 0.25))]
    q3 = ordered[min(n - 1, int(math.floor(n * 0.75)))]
    return q1, float(statistics.median(ordered)), q3


def drop_outliers(rts: Iterable[float], median: float, iqr: float, factor: float) -> List[float]:
    low = median - factor * iqr
    high = median + factor * iqr
    return [rt for rt in rts if low <= rt <= high]


def rate_z_score(z: float) -> str:
    # lower RT is better, so negative z means faster than the group
    if z < -1.5:
        return RATING_EXCELLENT
    if z < -0.5:
        return RATING_GOOD
    if z <= 0.5:
        return RATING_AVERAGE
    if z <= 1.5:
        return RATING_BELOW_AVERAGE
    return RATING_NEEDS_IMPROVEMENT


def box_plot_values(
    rts: Sequence[float], min_samples: int = 5
) -> Optional[Tuple[float, float, float, float, float]]:
    if len(rts) < max(1, min_samples):
        return None
    q1, median, q3 = quartiles(rts)
    return min(rts), q1, median, q3, max(rts)


def evaluate(
    results: Sequence[TrialResult],
    profile: SessionProfile,
    cfg: EvaluationConfig = EvaluationConfig(),
    norms=NORMS,
) -> Union[EvaluationSummary, InsufficientData]:
    # профиль мог прийти из JSONL без проверки
    validate_profile(profile)

    accuracy = compute_accuracy(results)
    inhibition_rate = compute_inhibition_rate(results)

    def insufficient(reason: str) -> InsufficientData:
        return InsufficientData(reason=reason, accuracy=accuracy, inhibition_rate=inhibition_rate)

    # 1) только нажатия на GO
    rts = select_eligible(results)
    if not rts:
        return insufficient(REASON_NO_ELIGIBLE)

    # 2) слишком быстрые нажатия, 3) слишком медленные для возраста
    rts = drop_anticipatory(rts, cfg.anticipatory_threshold_ms)
    rts = drop_above_cutoff(rts, age_cutoff_ms(profile.age, cfg))
    if not rts:
        return insufficient(REASON_ALL_FILTERED)

    # 4) квартили, 5) выбросы за median +- k*IQR, потом считаем заново
    q1, median, q3 = quartiles(rts)
    rts = drop_outliers(rts, median, q3 - q1, cfg.outlier_iqr_factor)
    if not rts:
        return insufficient(REASON_ALL_OUTLIERS)
    q1, median, q3 = quartiles(rts)

    bracket, mean, sd = reference_for(profile.age, profile.sex, norms)
    z = (median - mean) / sd

    return EvaluationSummary(
        filtered_median_ms=median,
        q1_ms=q1,
        q3_ms=q3,
        iqr_ms=q3 - q1,
        rating=rate_z_score(z),
        z_score=z,
        group_mean_ms=mean,
        group_sd_ms=sd,
        diff_ms=median - mean,
        age_bracket=bracket,
        reaction_times_ms=tuple(sorted(rts)),
        accuracy=accuracy,
        inhibition_rate=inhibition_rate,
    )
