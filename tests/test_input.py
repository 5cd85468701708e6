import pygame
import pytest

from game.input import InputDispatcher


class CountingEngine:
    def __init__(self):
        self.responses = 0

    def submit_response(self):
        self.responses += 1


@pytest.fixture
def engine():
    return CountingEngine()


@pytest.fixture
def dispatcher(engine):
    return InputDispatcher(engine)


@pytest.mark.parametrize(
    "event",
    [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE),
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10), touch=False),
        pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0),
    ],
)
def test_each_physical_signal_is_one_response(dispatcher, engine, event):
    assert dispatcher.process_pygame_event(event) is True
    assert engine.responses == 1


@pytest.mark.parametrize(
    "event",
    [
        pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a),
        pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE),
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(10, 10), touch=False),
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(10, 10)),
        pygame.event.Event(pygame.FINGERUP, x=0.5, y=0.5, finger_id=0),
    ],
)
def test_other_events_are_not_responses(dispatcher, engine, event):
    assert dispatcher.process_pygame_event(event) is False
    assert engine.responses == 0


def test_touch_does_not_double_count_synthetic_click(dispatcher, engine):
    dispatcher.process_pygame_event(pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0))
    dispatcher.process_pygame_event(
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10), touch=True)
    )
    assert engine.responses == 1


def test_every_occurrence_is_forwarded(dispatcher, engine):
    for _ in range(3):
        dispatcher.process_pygame_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
    assert engine.responses == 3


def test_custom_response_keys(engine):
    dispatcher = InputDispatcher(engine, response_keys=(pygame.K_RETURN,))
    dispatcher.process_pygame_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE))
    dispatcher.process_pygame_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))
    assert engine.responses == 1


def test_detached_dispatcher_forwards_nothing(dispatcher, engine):
    dispatcher.detach()
    assert dispatcher.process_pygame_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)) is True
    assert engine.responses == 0


def test_dispatcher_drives_engine_only_when_armed(make_engine, profile, fake_time):
    engine = make_engine()
    session = engine.start_session(profile)
    dispatcher = InputDispatcher(engine)
    space = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)

    dispatcher.process_pygame_event(space)
    assert session.results == ()

    fake_time.advance(2000)
    engine.update()
    fake_time.advance(180)
    dispatcher.process_pygame_event(space)
    assert len(session.results) == 1
    assert session.results[0].reaction_time_ms == pytest.approx(180)
