import os
import logging
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

class VideoRecorder:
    FPS = 30

    def __init__(self, active=False, output_file=None, fps=FPS):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"maze_gen_{ts}.mp4"
            if os.path.exists("recordings"):
                self.output_file = os.path.join("recordings", fname)
            else:
                self.output_file = fname

    @staticmethod
    def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
        """Converts a surface into an OpenCV (height, width, 3) BGR frame."""
        view = pygame.surfarray.array3d(surface)
        # surfarray is (width, height, 3) RGB
        frame = np.transpose(view, (1, 0, 2))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        # Writer is sized by the first frame
        if self.writer is None:
            self.frame_size = surface.get_size()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")

        frame = self.surface_to_frame(surface)
        if (frame.shape[1], frame.shape[0]) != self.frame_size:
            # Window was resized mid-recording
            frame = cv2.resize(frame, self.frame_size)
        self.writer.write(frame)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
