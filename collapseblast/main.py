import logging
import sys

import pygame

from collapseblast.game.View import View
from collapseblast.game.engine import Engine
from collapseblast.game.game_config import GameConfig


def main():
    logging.basicConfig(level=logging.INFO)

    # initialize Pygame
    pygame.init()

    config = GameConfig.from_env()
    engine = Engine.new_game(config)
    view = View(engine)

    screen = pygame.display.set_mode((view.screen_width, view.screen_height))
    pygame.display.set_caption("Collapse Blast")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                view.click(event)
            if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                engine.restart()

        view.draw(screen)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
