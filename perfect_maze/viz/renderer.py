import logging
import pygame
from typing import Tuple
from perfect_maze.core.board import Board
from perfect_maze.core.geometry import NORTH, EAST, SOUTH, WEST

logger = logging.getLogger(__name__)

COLOR_BG = (10, 10, 10)
COLOR_WALL = (200, 200, 200)


def draw_board(surface: pygame.Surface, board: Board, cell_size: float,
               offset: Tuple[float, float] = (0, 0), color=COLOR_WALL, region=None):
    """
    Draws the walls of board onto surface.

    Moving left to right and top to bottom, only the southern and eastern
    edge of each cell is drawn; the northern and western edges are drawn
    for the first row and column to close the outer border.
    region: optional (start_x, start_y, end_x, end_y) cell range to draw.
    """
    width = board.width
    walls = board.walls
    ox, oy = offset
    if region is None:
        region = (0, 0, board.width, board.height)
    start_x, start_y, end_x, end_y = region

    for y in range(start_y, end_y):
        for x in range(start_x, end_x):
            cell = walls[y * width + x]

            px = int(x * cell_size + ox)
            py = int(y * cell_size + oy)
            nx = int((x + 1) * cell_size + ox)
            ny = int((y + 1) * cell_size + oy)

            if cell & SOUTH:
                pygame.draw.line(surface, color, (px, ny), (nx, ny), 1)
            if cell & EAST:
                pygame.draw.line(surface, color, (nx, py), (nx, ny), 1)

            if y == 0 and (cell & NORTH):
                pygame.draw.line(surface, color, (px, py), (nx, py), 1)
            if x == 0 and (cell & WEST):
                pygame.draw.line(surface, color, (px, py), (px, ny), 1)


def render_surface(board: Board, cell_size: int = 16, margin: int = 8,
                   background=COLOR_BG, color=COLOR_WALL) -> pygame.Surface:
    """Renders board onto a fresh off-screen surface. No display is needed."""
    size = (board.width * cell_size + margin * 2 + 1,
            board.height * cell_size + margin * 2 + 1)
    surface = pygame.Surface(size)
    surface.fill(background)
    draw_board(surface, board, cell_size, offset=(margin, margin), color=color)
    return surface


def save_image(board: Board, path: str, cell_size: int = 16):
    surface = render_surface(board, cell_size=cell_size)
    pygame.image.save(surface, path)
    logger.info(f"Saved {board.width}x{board.height} maze image to {path}")


class Renderer:
    COLOR_BG = COLOR_BG
    COLOR_WALL = COLOR_WALL
    COLOR_CURRENT = (255, 215, 0)# Gold

    # Generator steps consumed per frame
    STEPS_PER_FRAME = 10

    def __init__(self, board: Board, generator=None, width=1280, height=720, record=False):
        self.board = board
        self.generator = generator
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from perfect_maze.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.gen_finished = generator is None

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire board on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / self.board.width
        zoom_y = available_h / self.board.height
        self.cell_size = min(zoom_x, zoom_y)

        total_w = self.board.width * self.cell_size
        total_h = self.board.height * self.cell_size
        self.offset_x = (self.screen_width - total_w) / 2
        self.offset_y = (self.screen_height - total_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Perfect Maze - {self.board.width}x{self.board.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def world_to_screen(self, wx, wy):
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    def screen_to_world(self, sx, sy):
        wx = (sx - self.offset_x) / self.cell_size
        wy = (sy - self.offset_y) / self.cell_size
        return int(wx), int(wy)

    def visible_region(self):
        start_x = max(0, int((-self.offset_x) / self.cell_size))
        start_y = max(0, int((-self.offset_y) / self.cell_size))
        end_x = min(self.board.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(self.board.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)
        return start_x, start_y, end_x, end_y

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

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

                # Keep mouse at same world coord
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]: # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw(self):
        self.surface.fill(self.COLOR_BG)

        current = getattr(self.generator, "current", None)
        if current is not None:
            sx, sy = self.world_to_screen(*current)
            size = int(self.cell_size) + 1
            pygame.draw.rect(self.surface, self.COLOR_CURRENT, (sx, sy, size, size))

        # Lines collapse into noise below a few pixels per cell
        if self.cell_size > 2.0:
            draw_board(self.surface, self.board, self.cell_size,
                       offset=(self.offset_x, self.offset_y),
                       color=self.COLOR_WALL, region=self.visible_region())

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        cells = self.board.width * self.board.height
        carved = getattr(self.generator, "carved", 0)
        status = "Done" if self.gen_finished else "Carving"
        info = [
            f"FPS: {fps}",
            f"Size: {self.board.width}x{self.board.height} ({cells:,})",
            f"Passages: {carved:,}",
            f"Zoom: {self.cell_size:.2f}",
            f"Status: {status}",
            "REC" if self.recorder.active else ""
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        gen_iter = self.generator.run() if self.generator else None

        while self.running:
            self.handle_input()

            if gen_iter and not self.gen_finished:
                try:
                    for _ in range(self.STEPS_PER_FRAME):
                        next(gen_iter)
                except StopIteration:
                    self.gen_finished = True
                    logger.info("Generation finished")

            self.draw()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
