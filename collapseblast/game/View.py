import pygame

from collapseblast.game.Tile import Tile
from collapseblast.game.game_params import BACKGROUND_COLOR, GAP, TILE_SIZE


class View:

    def __init__(self, engine):
        self.engine = engine
        self.config = engine.config
        self.tiles = []

        # Calculate screen dimensions based on config
        self.screen_width = GAP + TILE_SIZE * self.config.num_cols + GAP
        self.screen_height = GAP + TILE_SIZE * self.config.num_rows + GAP

    def draw_board(self):
        self.tiles = []
        for row in range(self.config.num_rows):
            for col in range(self.config.num_cols):
                # row 0 is the bottom row of the board
                y = GAP + (self.config.num_rows - 1 - row) * TILE_SIZE
                self.tiles.append(
                    Tile(
                        col * TILE_SIZE + GAP,
                        y,
                        TILE_SIZE,
                        self.engine.cell_at(row, col),
                        self.engine.tier_at(row, col),
                        self.engine,
                        row,
                        col,
                    )
                )

    def click(self, event):
        for tile in self.tiles:
            if tile.click(event):
                return True
        return False

    def draw(self, screen):
        screen.fill(BACKGROUND_COLOR)
        self.draw_board()
        for tile in self.tiles:
            tile.draw(screen)
