from dataclasses import dataclass

from game.errors import InvalidConfigError


@dataclass(frozen=True)
class WindowConfig:
    width: int = 1280
    height: int = 720
    fps: int = 60
    title: str = "Go / No-Go"


@dataclass(frozen=True)
class TaskConfig:
    total_rounds: int = 20
    go_probability: float = 0.7  # 70% GO, 30% NOGO
    min_interval_ms: int = 1500
    max_interval_ms: int = 3000
    response_window_ms: int = 1500
    lead_in_ms: int = 1000  # extra pause before round 0


@dataclass(frozen=True)
class EvaluationConfig:
    anticipatory_threshold_ms: float = 120.0
    # (max_age_inclusive, cutoff_ms), checked in order
    rt_cutoffs: tuple = ((49, 1200.0), (69, 1500.0), (120, 1800.0))
    outlier_iqr_factor: float = 3.0
    box_plot_min_samples: int = 5


def validate_task_config(cfg: TaskConfig) -> TaskConfig:
    if cfg.total_rounds < 1:
        raise InvalidConfigError(f"total_rounds must be >= 1, got {cfg.total_rounds}")
    if not 0.0 <= cfg.go_probability <= 1.0:
        raise InvalidConfigError(f"go_probability must be in [0, 1], got {cfg.go_probability}")
    if cfg.min_interval_ms < 0 or cfg.max_interval_ms < cfg.min_interval_ms:
        raise InvalidConfigError(
            f"invalid pre-stimulus interval [{cfg.min_interval_ms}, {cfg.max_interval_ms})"
        )
    if cfg.response_window_ms <= 0:
        raise InvalidConfigError(f"response_window_ms must be > 0, got {cfg.response_window_ms}")
    if cfg.lead_in_ms < 0:
        raise InvalidConfigError(f"lead_in_ms must be >= 0, got {cfg.lead_in_ms}")
    return cfg
