"""
Interactive Pygame Viewer for Texture Synthesis

Shows the sample on the left and the output growing on the right. The
synthesis runs on its background thread; the viewer pulls a snapshot
every frame and never writes to the engine except to cancel it.

Controls:
  S           Save screenshot of the current output
  H           Toggle HUD overlay
  Q / ESC     Quit (cancels synthesis)
"""

import os
import time
import numpy as np
import pygame

from .engine import TextureSynthesis, SynthesisStatus
from .image_io import save_image


BG_COLOR = (18, 18, 22)
LABEL_COLOR = (210, 215, 225)
MARGIN = 10
LABEL_HEIGHT = 20
HUD_HEIGHT = 24


def _to_surface(rgb):
    """(H, W, 3) uint8 array -> pygame Surface."""
    return pygame.surfarray.make_surface(np.ascontiguousarray(rgb.swapaxes(0, 1)))


class Viewer:
    def __init__(self, engine, scale=2):
        """
        Args:
            engine: TextureSynthesis to display
            scale: Integer zoom for both images
        """
        self.engine = engine
        self.scale = scale
        self.running = True
        self.show_hud = True
        self.fps_history = []

        sh, sw = engine.sample.shape[:2]
        self.sample_size = (sw * scale, sh * scale)
        self.output_size = (engine.state.width * scale, engine.state.height * scale)
        self.sample_pos = (MARGIN, MARGIN + LABEL_HEIGHT)
        self.output_pos = (2 * MARGIN + self.sample_size[0], MARGIN + LABEL_HEIGHT)
        self.window_w = 3 * MARGIN + self.sample_size[0] + self.output_size[0]
        self.window_h = (MARGIN + LABEL_HEIGHT + max(self.sample_size[1], self.output_size[1])
                         + MARGIN + HUD_HEIGHT)

    def _output_rgb(self):
        """Current canvas with pixels not grown yet painted in the background color."""
        rgba = self.engine.snapshot()
        rgb = rgba[:, :, :3].copy()
        rgb[rgba[:, :, 3] == 0] = BG_COLOR
        return rgb

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return

        stats = self.engine.stats
        line = (f"{stats['status'].upper()}  |  "
                f"{stats['total'] - stats['remaining']:,}/{stats['total']:,} px "
                f"({stats['progress_pct']:.1f}%)  |  "
                f"Kernel: {self.engine.kernel_size}x{self.engine.kernel_size}  |  "
                f"FPS: {fps:.0f}")

        y = self.window_h - HUD_HEIGHT
        bg_surface = pygame.Surface((self.window_w, HUD_HEIGHT), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 140))
        screen.blit(bg_surface, (0, y))
        screen.blit(self.font.render(line, True, LABEL_COLOR), (MARGIN, y + 5))

    def _save_screenshot(self):
        screenshots_dir = os.path.join(os.getcwd(), "screenshots")
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"synthesis_{timestamp}.png")
        frame = self.engine.snapshot()
        save_image(frame, path)
        save_image(frame, os.path.join(screenshots_dir, "latest.png"))
        print(f"Screenshot saved: {path}")

    def _handle_keydown(self, event):
        key = event.key
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif key == pygame.K_s:
            self._save_screenshot()
        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

    def run(self):
        """Main viewer loop. Starts synthesis and cancels it on exit."""
        pygame.init()

        screen = pygame.display.set_mode((self.window_w, self.window_h))
        pygame.display.set_caption("Texture Synthesis")
        clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("menlo", 13)

        sample_surface = pygame.transform.scale(
            _to_surface(self.engine.sample), self.sample_size)

        if self.engine.status == SynthesisStatus.idle:
            self.engine.synthesize_async()

        while self.running:
            frame_start = time.time()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)

            screen.fill(BG_COLOR)
            screen.blit(self.font.render("input", True, LABEL_COLOR),
                        (self.sample_pos[0], MARGIN))
            screen.blit(sample_surface, self.sample_pos)

            output_surface = pygame.transform.scale(
                _to_surface(self._output_rgb()), self.output_size)
            screen.blit(self.font.render("output", True, LABEL_COLOR),
                        (self.output_pos[0], MARGIN))
            screen.blit(output_surface, self.output_pos)

            frame_time = time.time() - frame_start
            self.fps_history.append(max(frame_time, 1.0 / 60))
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)
            self._draw_hud(screen, avg_fps)

            pygame.display.flip()
            clock.tick(60)

        self.engine.cancel()
        pygame.quit()


def run_viewer(sample, width, height, kernel_size, seed=None, scale=2):
    """Build an engine for the sample and open the viewer on it."""
    engine = TextureSynthesis(sample, width, height, kernel_size=kernel_size, seed=seed)
    Viewer(engine, scale=scale).run()
    return engine
