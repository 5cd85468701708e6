import math
import random
from typing import List

from data.models import CATEGORY_GO, CATEGORY_NOGO
from game.errors import InvalidConfigError


def go_count(total_rounds: int, go_probability: float) -> int:
    # округление "половина вверх": 2.5 -> 3
    return int(math.floor(total_rounds * go_probability + 0.5))


def generate_sequence(total_rounds: int, go_probability: float, rng: random.Random) -> List[str]:
    """
    Генерирует порядок стимулов на всю сессию.

    - ровно go_count(...) стимулов GO, остальные NOGO
    - порядок перемешан rng.shuffle (равновероятны все перестановки)
    - вызывается ОДИН раз на сессию, дальше последовательность не меняется
    """
    if total_rounds < 1:
        raise InvalidConfigError(f"total_rounds must be >= 1, got {total_rounds}")
    if not 0.0 <= go_probability <= 1.0:
        raise InvalidConfigError(f"go_probability must be in [0, 1], got {go_probability}")

    n_go = go_count(total_rounds, go_probability)
    sequence = [CATEGORY_GO] * n_go + [CATEGORY_NOGO] * (total_rounds - n_go)
    rng.shuffle(sequence)
    return sequence


def draw_pre_stimulus_delay(rng: random.Random, min_ms: float, max_ms: float) -> float:
    """Пауза перед стимулом, равномерно из [min_ms, max_ms)."""
    return min_ms + rng.random() * (max_ms - min_ms)
