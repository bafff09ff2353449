import pygame

from collapseblast.game.board import Cell
from collapseblast.game.game_config import DisplayTier
from collapseblast.game.game_params import COLORS, EMPTY_COLOR, TIER_MARKERS


class Tile:

    def __init__(self, x, y, size, cell: Cell, tier: DisplayTier, engine, row, col):
        self.rect = pygame.Rect(x, y, size, size)
        self.cell = cell
        self.tier = tier
        self.engine = engine
        self.row = row
        self.col = col

    def click(self, event):
        if self.rect.collidepoint(event.pos):
            if self.cell.is_empty:
                return False
            self.engine.select_cell(self.row, self.col)
            return True
        return False

    def draw(self, screen):
        color = EMPTY_COLOR if self.cell.is_empty else COLORS[self.cell.color % len(COLORS)]
        pygame.draw.rect(screen, color, self.rect.inflate(-2, -2))

        marker = TIER_MARKERS[self.tier]
        if marker:
            font = pygame.font.Font(None, 28)
            text = font.render(marker, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=self.rect.center))
