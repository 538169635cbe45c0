"""Time-offset animation driver."""

import dataclasses
import logging

from .renderer import render

logger = logging.getLogger(__name__)


class Animator:
    """Advances the noise time offset and re-renders each frame.

    The animator owns its own copy of the config; the caller's config
    is never touched. At speed 0 the field cannot change, so frames
    after the first reuse the last image instead of rendering again.
    """

    def __init__(self, config, speed=0.01, workers=None):
        self.config = dataclasses.replace(config)
        self.speed = speed
        self.workers = workers
        self._image = None
        self.renders = 0

    @property
    def time(self):
        return self.config.time

    def frame(self):
        """Advance one tick and return the current frame image."""
        if self._image is not None:
            self.config.time += self.speed
        if self._image is None or self.speed > 0:
            self._image = render(self.config, workers=self.workers)
            self.renders += 1
        else:
            logger.debug("Speed is zero, reusing previous frame")
        return self._image

    def frames(self, count):
        """Yield ``count`` successive frames."""
        for _ in range(count):
            yield self.frame()
