import pygame


class InputDispatcher:
    """
    InputDispatcher: прослойка между pygame и TrialEngine.

    Идея:
    - pygame шлёт события (event)
    - пробел, левая кнопка мыши и касание экрана значат одно и то же: "нажал"
    - каждое такое событие один раз передаётся в engine.submit_response()
    - сам диспетчер ничего не помнит: решает ли нажатие что-то, это дело движка
    """

    def __init__(self, engine, response_keys=(pygame.K_SPACE,)):
        # engine: всё, у чего есть submit_response()
        self._engine = engine
        self.response_keys = frozenset(response_keys)

    def is_response_signal(self, event) -> bool:
        if event.type == pygame.KEYDOWN:
            return event.key in self.response_keys
        if event.type == pygame.MOUSEBUTTONDOWN:
            # SDL дублирует касание синтетическим кликом мыши, его пропускаем,
            # иначе одно касание дало бы два нажатия
            if getattr(event, "touch", False):
                return False
            return getattr(event, "button", 1) == 1
        if event.type == pygame.FINGERDOWN:
            return True
        return False

    def process_pygame_event(self, event) -> bool:
        """
        Кормим сюда события pygame из app.

        Возвращает True, если событие было "нашим" и дальше его обрабатывать не надо.
        """
        if not self.is_response_signal(event):
            return False
        if self._engine is not None:
            self._engine.submit_response()
        return True

    def detach(self) -> None:
        """После этого события больше никуда не передаются."""
        self._engine = None
