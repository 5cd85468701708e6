from __future__ import annotations

import logging
import random
import uuid
from functools import partial
from typing import Callable, List, Optional, Tuple

from config.settings import TaskConfig, validate_task_config
from data.models import (
    ACTION_PRESS,
    ACTION_TIMEOUT,
    SessionProfile,
    TrialResult,
    build_trial_result,
    validate_profile,
)
from game.clock import TAG_PRE_STIMULUS, TAG_RESPONSE_WINDOW, TimerHandle, TrialClock
from game.errors import SessionLifecycleError
from game.trial_generator import draw_pre_stimulus_delay, generate_sequence


logger = logging.getLogger(__name__)


# Фазы храним строками, как и раньше (так проще логировать и рисовать)
PHASE_IDLE = "IDLE"
PHASE_WAITING = "WAITING"        # пауза перед стимулом
PHASE_PRESENTING = "PRESENTING"  # стимул нарисован, ждём подтверждения, что он на экране
PHASE_ARMED = "ARMED"            # стимул виден, ждём нажатие
PHASE_RESOLVED = "RESOLVED"      # trial закрыт (переходное состояние)
PHASE_FINISHED = "FINISHED"


class Session:
    """
    Одна сессия: последовательность стимулов, номер раунда, результаты, профиль.

    Принадлежит TrialEngine. Наружу отдаётся как handle только для чтения.
    """

    def __init__(self, profile: SessionProfile, sequence: List[str]) -> None:
        self.session_id = f"s{uuid.uuid4().hex[:12]}"
        self.profile = profile
        self.sequence: Tuple[str, ...] = tuple(sequence)
        self.total_rounds = len(self.sequence)

        # сколько стимулов уже показано (растёт при переходе в ARMED/PRESENTING)
        self.round_index: int = 0

        self.phase: str = PHASE_IDLE
        self.category: Optional[str] = None
        self.onset_ms: Optional[float] = None

        # единственный активный таймер текущей фазы
        self.timer: Optional[TimerHandle] = None

        self.disposed: bool = False
        self._results: List[TrialResult] = []

    @property
    def results(self) -> Tuple[TrialResult, ...]:
        return tuple(self._results)

    @property
    def is_finished(self) -> bool:
        return self.phase == PHASE_FINISHED

    @property
    def stimulus_visible(self) -> bool:
        return self.phase in (PHASE_PRESENTING, PHASE_ARMED)


class TrialEngine:
    """
    Машина состояний, которая ведёт сессию trial за trial-ом.

    IDLE -> WAITING -> PRESENTING -> ARMED -> RESOLVED -> WAITING ... -> FINISHED

    - таймеры ставятся через TrialClock, движок их не ждёт, update() вызывается каждый кадр
    - каждый переход идёт через _transition(): он снимает таймер старой фазы
    - trial закрывается ровно один раз: первым успевает либо нажатие, либо таймаут
    """

    def __init__(
        self,
        config: TaskConfig = TaskConfig(),
        clock: Optional[TrialClock] = None,
        rng: Optional[random.Random] = None,
        on_trial_result: Optional[Callable[[TrialResult], None]] = None,
        on_finished: Optional[Callable[[List[TrialResult]], None]] = None,
        auto_acknowledge_onset: bool = False,
    ) -> None:
        self.config = validate_task_config(config)
        self.clock = clock or TrialClock()
        self.rng = rng or random.Random()
        self.on_trial_result = on_trial_result
        self.on_finished = on_finished
        self.auto_acknowledge_onset = auto_acknowledge_onset
        self.session: Optional[Session] = None

    @property
    def phase(self) -> str:
        if self.session is None:
            return PHASE_IDLE
        return self.session.phase

    # --------------------------
    # Внешний интерфейс
    # --------------------------

    def start_session(self, profile: SessionProfile) -> Session:
        validate_profile(profile)

        # перезапуск: старую сессию закрываем вместе с её таймерами
        if self.session is not None:
            self.teardown()

        sequence = generate_sequence(self.config.total_rounds, self.config.go_probability, self.rng)
        session = Session(profile, sequence)
        self.session = session
        logger.info(
            "session %s started: %d rounds, age=%d sex=%s",
            session.session_id,
            session.total_rounds,
            profile.age,
            profile.sex,
        )
        self._begin_waiting(session, extra_ms=self.config.lead_in_ms)
        return session

    def update(self) -> int:
        """Вызывается каждый кадр: срабатывают таймеры, у которых вышло время."""
        return self.clock.poll()

    def acknowledge_onset(self) -> None:
        """
        Слой отрисовки сообщает: стимул реально на экране (после flip).
        Отсюда считаем время реакции и запускаем окно ответа.
        """
        session = self.session
        if session is None or session.phase != PHASE_PRESENTING:
            return
        session.onset_ms = self.clock.now_ms()
        self._transition(
            session,
            PHASE_ARMED,
            TAG_RESPONSE_WINDOW,
            self.config.response_window_ms,
            self._on_response_window_elapsed,
        )

    def submit_response(self) -> None:
        """Нажатие. Вне фазы ARMED ничего не делает."""
        session = self.session
        if session is None or session.phase != PHASE_ARMED:
            logger.debug("response ignored in phase %s", self.phase)
            return
        reaction_time_ms = max(0.0, self.clock.now_ms() - session.onset_ms)
        self._resolve(session, ACTION_PRESS, reaction_time_ms)

    def teardown(self) -> None:
        """Сессия брошена: снимаем все таймеры, дальше она не меняется."""
        session = self.session
        if session is None:
            return
        # всё, что висит на часах движка, принадлежит этой сессии
        self.clock.cancel_all()
        session.timer = None
        session.disposed = True
        self.session = None
        logger.info(
            "session %s torn down in phase %s after %d results",
            session.session_id,
            session.phase,
            len(session._results),
        )

    # --------------------------
    # Переходы
    # --------------------------

    def _transition(
        self,
        session: Session,
        phase: str,
        timer_tag: Optional[str] = None,
        delay_ms: float = 0.0,
        callback: Optional[Callable[[Session], None]] = None,
    ) -> None:
        # Единственное место, где меняется фаза: сначала снимаем таймер старой фазы
        self.clock.cancel(session.timer)
        session.timer = None
        session.phase = phase
        if timer_tag is not None:
            session.timer = self.clock.schedule(timer_tag, delay_ms, partial(callback, session))

    def _begin_waiting(self, session: Session, extra_ms: float = 0.0) -> None:
        delay = draw_pre_stimulus_delay(
            self.rng, self.config.min_interval_ms, self.config.max_interval_ms
        )
        session.category = None
        session.onset_ms = None
        self._transition(
            session,
            PHASE_WAITING,
            TAG_PRE_STIMULUS,
            delay + extra_ms,
            self._on_pre_stimulus_elapsed,
        )

    def _on_pre_stimulus_elapsed(self, session: Session) -> None:
        self._check_live(session, PHASE_WAITING)
        session.timer = None
        session.category = session.sequence[session.round_index]
        session.round_index += 1
        self._transition(session, PHASE_PRESENTING)
        if self.auto_acknowledge_onset:
            self.acknowledge_onset()

    def _on_response_window_elapsed(self, session: Session) -> None:
        self._check_live(session, PHASE_ARMED)
        session.timer = None
        self._resolve(session, ACTION_TIMEOUT, None)

    def _resolve(self, session: Session, action: str, reaction_time_ms: Optional[float]) -> None:
        # RESOLVED снимает окно ответа раньше, чем что-либо ещё увидит состояние
        self._transition(session, PHASE_RESOLVED)
        result = build_trial_result(
            round_index=session.round_index - 1,
            category=session.category,
            action=action,
            reaction_time_ms=reaction_time_ms,
        )
        session._results.append(result)

        if self.on_trial_result is not None:
            self.on_trial_result(result)
            if session.disposed:
                return

        if session.round_index >= session.total_rounds:
            self._finish(session)
        else:
            self._begin_waiting(session)

    def _finish(self, session: Session) -> None:
        self._transition(session, PHASE_FINISHED)
        results = list(session._results)
        logger.info("session %s finished with %d results", session.session_id, len(results))
        if self.on_finished is not None:
            self.on_finished(results)

    def _check_live(self, session: Session, expected_phase: str) -> None:
        if session.disposed or session is not self.session:
            raise SessionLifecycleError(
                f"timer fired for disposed session {session.session_id}"
            )
        if session.phase != expected_phase:
            raise SessionLifecycleError(
                f"timer for {expected_phase} fired in phase {session.phase} "
                f"(session {session.session_id})"
            )
