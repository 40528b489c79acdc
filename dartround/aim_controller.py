import logging

import numpy as np

from dartround.models.board_models import AimSettings
from dartround.models.dc_models import HitSampleModel
from dartround.models.schema_models import AimState

# Angular frequencies and phases of the roaming path, two harmonics per axis.
ROAM_W1 = 0.85
ROAM_W2 = 1.33
ROAM_W3 = 0.73
ROAM_W4 = 1.91
ROAM_PHASE_X = 1.7
ROAM_PHASE_Y = 0.9


class AimController:
    """Hold-to-release reticle of one board.

    While roaming, the reticle center wanders over the board at max_radius.
    Holding freezes the center and shrinks the radius toward min_radius over
    shrink_time seconds; releasing samples one landing point uniformly from the
    current disk. Illegal calls are no-ops, callers check is_holding first.
    """

    def __init__(self, settings: AimSettings | None = None, rng: np.random.Generator | None = None):
        self.settings: AimSettings = settings or AimSettings()
        if self.settings.min_radius > self.settings.max_radius:
            raise ValueError("min_radius must not be larger than max_radius")
        if self.settings.shrink_time <= 0:
            raise ValueError("shrink_time must be positive")
        self.rng: np.random.Generator = rng or np.random.default_rng()
        self._state = AimState(radius=self.settings.max_radius)

    @property
    def state(self) -> AimState:
        """Copy of the current reticle state."""
        return self._state.model_copy()

    @property
    def is_holding(self) -> bool:
        return self._state.holding

    @property
    def is_enabled(self) -> bool:
        return self._state.enabled

    def _reset_to_roaming(self):
        self._state.holding = False
        self._state.hold_time = 0.0
        self._state.radius = self.settings.max_radius

    def clamp_center_for_radius(self, x: float, y: float, radius: float) -> tuple[float, float]:
        """Pull (x, y) toward the origin so a disk of radius stays on the board.

        Args:
            x (float): Candidate center x
            y (float): Candidate center y
            radius (float): Disk radius that must fit

        Returns:
            tuple[float, float]: Center satisfying |center| + radius <= board_radius - margin
        """
        limit = max(0.001, self.settings.board_radius - radius - self.settings.margin)
        length = float(np.hypot(x, y))
        if length > limit:
            scale = limit / length
            return x * scale, y * scale
        return x, y

    def set_enabled(self, enabled: bool):
        self._state.enabled = bool(enabled)
        if not self._state.enabled:
            self._reset_to_roaming()

    def begin_hold(self) -> bool:
        """Start shrinking the reticle. Returns False when ignored."""
        if not self._state.enabled or self._state.holding:
            return False
        self._state.holding = True
        self._state.hold_time = 0.0
        self._state.radius = self.settings.max_radius
        return True

    def cancel_hold(self):
        self._reset_to_roaming()

    def update(self, delta: float):
        """Advance the reticle by delta seconds."""
        if not self._state.enabled:
            return

        self._state.time += delta

        if not self._state.holding:
            self._state.radius = self.settings.max_radius
            t = self._state.time
            base = self.settings.board_radius * self.settings.roam_scale
            x = base * (0.65 * np.sin(t * ROAM_W1) + 0.35 * np.sin(t * ROAM_W2 + ROAM_PHASE_X))
            y = base * (0.65 * np.cos(t * ROAM_W3) + 0.35 * np.sin(t * ROAM_W4 + ROAM_PHASE_Y))
            x, y = self.clamp_center_for_radius(float(x), float(y), self.settings.max_radius)
            self._state.center_x = x
            self._state.center_y = y
        else:
            self._state.hold_time += delta
            progress = float(np.clip(self._state.hold_time / self.settings.shrink_time, 0.0, 1.0))
            self._state.radius = self.settings.max_radius + (
                self.settings.min_radius - self.settings.max_radius
            ) * progress

    def release_and_sample_hit(self) -> HitSampleModel | None:
        """Sample a landing point inside the current reticle and reset it.

        The radius is sqrt(u) * radius so that points are uniform over the
        disk area rather than bunched at the center.

        Returns:
            HitSampleModel | None: Final center, radius and landing point, or
                None when no hold is in progress.
        """
        if not self._state.holding:
            logging.debug("release_and_sample_hit called while not holding")
            return None

        final_radius = self._state.radius
        angle = self.rng.uniform(0.0, 2 * np.pi)
        r = np.sqrt(self.rng.uniform(0.0, 1.0)) * final_radius

        sample = HitSampleModel(
            center_x=self._state.center_x,
            center_y=self._state.center_y,
            radius=final_radius,
            hit_x=float(self._state.center_x + np.cos(angle) * r),
            hit_y=float(self._state.center_y + np.sin(angle) * r),
        )
        self._reset_to_roaming()
        return sample
