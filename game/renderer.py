from typing import List

import pygame

from data.models import CATEGORY_GO


class Renderer:
    """
    Renderer отвечает ТОЛЬКО за рисование.
    Он не считает RT, не решает правильность, не управляет фазами.
    Ему дают данные, он их рисует.
    """

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.w, self.h = screen.get_size()

        # Шрифты (pygame.font должен быть инициализирован через pygame.init())
        self.font_big = pygame.font.SysFont(None, 72)
        self.font_mid = pygame.font.SysFont(None, 42)
        self.font_small = pygame.font.SysFont(None, 28)

        self.center = (self.w // 2, self.h // 2)
        self.shape_size = min(self.w, self.h) // 6

        self.bg_color = (15, 15, 20)
        self.ui_color = (230, 230, 230)
        self.dim_color = (140, 140, 150)

        # GO: зелёный круг, NOGO: красный квадрат
        self.go_color = (60, 200, 120)
        self.nogo_color = (220, 60, 60)

    # -----------------------
    # Базовые методы экрана
    # -----------------------

    def clear(self) -> None:
        self.screen.fill(self.bg_color)

    def present(self) -> None:
        """Показать кадр. После возврата стимул считается видимым."""
        pygame.display.flip()

    # -----------------------
    # Рисование элементов
    # -----------------------

    def draw_round(self, current: int, total: int) -> None:
        surf = self.font_mid.render(f"Round {current} / {total}", True, self.dim_color)
        rect = surf.get_rect(center=(self.center[0], 40))
        self.screen.blit(surf, rect)

    def draw_stimulus(self, category: str) -> None:
        if category == CATEGORY_GO:
            pygame.draw.circle(self.screen, self.go_color, self.center, self.shape_size)
        else:
            rect = pygame.Rect(0, 0, self.shape_size * 2, self.shape_size * 2)
            rect.center = self.center
            pygame.draw.rect(self.screen, self.nogo_color, rect, border_radius=self.shape_size // 5)

    def draw_wait(self) -> None:
        surf = self.font_mid.render("Wait...", True, self.dim_color)
        rect = surf.get_rect(center=(self.center[0], self.h * 0.7))
        self.screen.blit(surf, rect)

    def draw_footer(self, text: str) -> None:
        surf = self.font_small.render(text, True, self.dim_color)
        rect = surf.get_rect(center=(self.center[0], self.h - 30))
        self.screen.blit(surf, rect)

    def draw_lines(self, title: str, lines: List[str], top: float = 0.2) -> None:
        y = self.h * top
        surf = self.font_big.render(title, True, self.ui_color)
        self.screen.blit(surf, surf.get_rect(center=(self.center[0], y)))
        y += surf.get_height() + 20
        for line in lines:
            surf = self.font_small.render(line, True, self.ui_color)
            self.screen.blit(surf, surf.get_rect(center=(self.center[0], y)))
            y += surf.get_height() + 10

