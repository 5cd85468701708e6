from typing import Dict, Tuple


# Reference median RT (ms) on a Go/No-Go task by sex and age bracket.
NORMS: Dict[str, Dict[str, Dict[str, float]]] = {
    "male": {
        "20s": {"mean": 320.0, "sd": 45.0},
        "30s": {"mean": 335.0, "sd": 48.0},
        "40s": {"mean": 350.0, "sd": 52.0},
        "50s": {"mean": 370.0, "sd": 58.0},
        "60+": {"mean": 395.0, "sd": 65.0},
    },
    "female": {
        "20s": {"mean": 330.0, "sd": 45.0},
        "30s": {"mean": 345.0, "sd": 48.0},
        "40s": {"mean": 360.0, "sd": 52.0},
        "50s": {"mean": 380.0, "sd": 58.0},
        "60+": {"mean": 405.0, "sd": 65.0},
    },
}

AGE_BRACKETS = ((30, "20s"), (40, "30s"), (50, "40s"), (60, "50s"))
OLDEST_BRACKET = "60+"


def age_bracket(age: int) -> str:
    for upper_exclusive, label in AGE_BRACKETS:
        if age < upper_exclusive:
            return label
    return OLDEST_BRACKET


def reference_for(age: int, sex: str, norms=NORMS) -> Tuple[str, float, float]:
    bracket = age_bracket(age)
    group = norms[sex][bracket]
    return bracket, float(group["mean"]), float(group["sd"])
