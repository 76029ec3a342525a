import logging
import pygame
from typing import List
from cavegen.core.grid import Grid, CellState
from cavegen.core.config import ConfigError
from cavegen.core.analysis import MapAnalyzer
from cavegen.algo.base import Generator, GeneratorType, GenerationError
from cavegen.viz.panel import ConfigPanel
from cavegen.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (90, 80, 70)
    COLOR_FLOOR = (200, 190, 160)
    COLOR_HUD = (255, 255, 255)

    # Drunkard steps are tiny, batch them per frame
    AUTO_STEPS = {GeneratorType.DRUNKARD_WALK: 200}

    def __init__(self, grid: Grid, generators: List[Generator], width=1280, height=720, record=False):
        self.grid = grid
        self.generators = generators
        self.active = 0
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 8.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.panel = ConfigPanel()
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.auto_step = False
        self.clock = None
        self.surface = None
        self.stats = None

    @property
    def generator(self) -> Generator:
        return self.generators[self.active]

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / self.grid.width, available_h / self.grid.height)

        self.offset_x = (self.screen_width - self.grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - self.grid.height * self.cell_size) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Cave Generator - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()
        self.restart()

    def guarded(self, action, label: str):
        # Live edits can leave the config invalid; keep the window alive
        try:
            action(self.grid)
        except (ConfigError, GenerationError) as e:
            logger.warning(f"{label} failed: {e}")
            return
        self.stats = MapAnalyzer.calculate_stats(self.grid)

    def restart(self):
        self.guarded(self.generator.start, "start")

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if self.panel.handle_key(event):
                    continue
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.restart()
                elif event.key == pygame.K_g:
                    self.guarded(self.generator.generate, "generate")
                elif event.key == pygame.K_SPACE:
                    self.guarded(self.generator.step, "step")
                elif event.key == pygame.K_a:
                    self.auto_step = not self.auto_step
                elif event.key == pygame.K_f:
                    self.fit_to_screen()
                elif event.key == pygame.K_TAB:
                    self.active = (self.active + 1) % len(self.generators)
                    self.panel.selected = 0
                    logger.info(f"Switched to {self.generator.kind().name}")
                    self.restart()

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.5, min(100.0, self.cell_size))

                # Keep the mouse over the same cell
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)

        # Culling: only the visible cell range
        start_col = max(0, int(-self.offset_x / self.cell_size))
        start_row = max(0, int(-self.offset_y / self.cell_size))
        end_col = min(self.grid.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_row = min(self.grid.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        size = int(self.cell_size) + 1
        cells = self.grid.cells
        for row in range(start_row, end_row):
            py = int(row * self.cell_size + self.offset_y)
            base = row * self.grid.width
            for col in range(start_col, end_col):
                px = int(col * self.cell_size + self.offset_x)
                color = self.COLOR_WALL if cells[base + col] == CellState.WALL else self.COLOR_FLOOR
                pygame.draw.rect(self.surface, color, (px, py, size, size))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.width}x{self.grid.height}",
            f"Generator: {self.generator.kind().name} (TAB to switch)",
            f"Steps: {self.generator.step_count}" + (" [auto]" if self.auto_step else ""),
            "R restart  G generate  SPACE step  A auto  F fit",
            "REC" if self.recorder.active else "",
        ]
        if self.stats:
            info.insert(4, f"Floor: {self.stats['floor_ratio']:.1%}  Regions: {self.stats['regions']}")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_HUD)
            self.surface.blit(lbl, (10, 10 + i * 20))

        self.panel.draw(self.surface, self.font, self.screen_width - 430, 10)

    def advance(self, grid: Grid):
        steps = self.AUTO_STEPS.get(self.generator.kind(), 1)
        for _ in self.generator.run(grid, steps):
            pass

    def update_panel(self):
        self.panel.begin()
        self.generator.render_gui(self.panel)
        if self.panel.edited:
            logger.debug(f"Config edited: {self.generator.config}")

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.update_panel()

            if self.auto_step:
                self.guarded(self.advance, "step")

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(30 if self.auto_step else 60)

        self.recorder.stop()
        pygame.quit()
