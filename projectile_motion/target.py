"""
Target scoring: landed projectiles report their x position here.
"""

from .config import TARGET_WIDTH, TARGET_X_RANGE, check_range
from .events import Emitter


class Target:
    """
    A target lying on the ground, centred on ``x``. Landings within the
    inner, middle or outer third of its half-width score 3, 2 or 1 stars.
    """

    def __init__(self, x: float, width: float = TARGET_WIDTH):
        self.initial_x = check_range('target x', x, TARGET_X_RANGE)
        self.x = x
        self.width = width
        self.scored_emitter = Emitter()   # emits the number of stars

    def set_x(self, x: float):
        self.x = check_range('target x', x, TARGET_X_RANGE)

    def reset(self):
        self.x = self.initial_x

    def stars_for(self, projectile_x: float) -> int:
        distance = abs(projectile_x - self.x)
        if distance <= self.width / 6:      # center circle
            return 3
        elif distance <= self.width / 3:    # middle circle
            return 2
        elif distance <= self.width / 2:    # just on the target
            return 1
        return 0

    def check_if_hit_target(self, projectile_x: float) -> bool:
        stars = self.stars_for(projectile_x)
        if stars:
            self.scored_emitter.emit(stars)
        return stars > 0
