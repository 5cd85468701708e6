import logging
import time
from typing import List, Optional, Union

import pygame

from analytics.evaluation import evaluate
from analytics.metrics import format_report
from config.settings import EvaluationConfig, TaskConfig, WindowConfig
from data.logger import JsonlLogger
from data.models import EvaluationSummary, InsufficientData, SessionProfile, TrialResult
from game.input import InputDispatcher
from game.renderer import Renderer
from game.runtime.paths import app_data_path
from game.state_machine import PHASE_PRESENTING, TrialEngine


logger = logging.getLogger(__name__)


class GoNoGoApp:
    def __init__(
        self,
        window: WindowConfig,
        task: TaskConfig,
        profile: SessionProfile,
        evaluation: EvaluationConfig = EvaluationConfig(),
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        self.clock = pygame.time.Clock()
        self.renderer = Renderer(self.screen)
        self.window = window
        self.task = task
        self.profile = profile
        self.evaluation_cfg = evaluation

        self.engine = TrialEngine(
            config=task,
            on_trial_result=self._handle_result,
            on_finished=self._handle_finished,
        )
        self.dispatcher = InputDispatcher(self.engine)

        self.events_logger = JsonlLogger(app_data_path("events.jsonl"))
        self.session_logger = JsonlLogger(app_data_path("sessions.jsonl"))
        self.evaluation: Optional[Union[EvaluationSummary, InsufficientData]] = None
        self.running = True

    def run(self) -> None:
        session = self.engine.start_session(self.profile)
        try:
            while self.running:
                self.clock.tick(self.window.fps)

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self.running = False
                    elif self.dispatcher.process_pygame_event(event):
                        continue
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_r and session.is_finished:
                        self.evaluation = None
                        session = self.engine.start_session(self.profile)

                # ввод обработан раньше таймеров: в одном кадре нажатие побеждает таймаут
                self.engine.update()
                self._render(session)
        finally:
            # сессию могли бросить посреди игры: таймеры и ввод отключаем
            self.dispatcher.detach()
            self.engine.teardown()
            pygame.quit()

    def _render(self, session) -> None:
        self.renderer.clear()

        if session.is_finished:
            lines = format_report(self.evaluation, self.profile, self.evaluation_cfg.box_plot_min_samples)
            self.renderer.draw_lines("Results", lines)
            self.renderer.draw_footer("R: try again | ESC: exit")
            self.renderer.present()
            return

        self.renderer.draw_round(session.round_index, session.total_rounds)
        if session.stimulus_visible:
            self.renderer.draw_stimulus(session.category)
        else:
            self.renderer.draw_wait()
        self.renderer.draw_footer("Press SPACE or click when the green circle appears")
        self.renderer.present()

        # стимул попал на экран только после flip, отсюда и считаем RT
        if session.phase == PHASE_PRESENTING:
            self.engine.acknowledge_onset()

    def _handle_result(self, result: TrialResult) -> None:
        session = self.engine.session
        record = {
            "timestamp": int(time.time()),
            "session_id": session.session_id,
            "age": self.profile.age,
            "sex": self.profile.sex,
        }
        record.update(result.to_record())
        self.events_logger.write(record)

    def _handle_finished(self, results: List[TrialResult]) -> None:
        self.evaluation = evaluate(results, self.profile, self.evaluation_cfg)
        record = {
            "timestamp": int(time.time()),
            "session_id": self.engine.session.session_id,
            "age": self.profile.age,
            "sex": self.profile.sex,
            "total_rounds": len(results),
            "accuracy": self.evaluation.accuracy,
            "inhibition_rate": self.evaluation.inhibition_rate,
            "sufficient": self.evaluation.sufficient,
        }
        if self.evaluation.sufficient:
            record.update(
                {
                    "median_rt_ms": self.evaluation.filtered_median_ms,
                    "q1_ms": self.evaluation.q1_ms,
                    "q3_ms": self.evaluation.q3_ms,
                    "rating": self.evaluation.rating,
                    "group_mean_ms": self.evaluation.group_mean_ms,
                    "diff_ms": self.evaluation.diff_ms,
                }
            )
        self.session_logger.write(record)
        logger.info("session %s evaluated: %s", record["session_id"], record.get("rating", "insufficient data"))
