"""
Effect runner - the loop that pulls frames from an effect and shows them.

Effects never sleep and never see a driver. The runner does both:
advance once, show the frame, sleep for the step's duration, repeat.
Finite effects restart after a short dark pause, so every effect loops.
"""

import logging
import random
import time
from typing import Callable, Optional

from .config import EffectConfigStore, EngineSettings
from .driver import Driver
from .effects import Effect, EffectConfig, EffectState, Step, get_effect
from .errors import ConfigError
from .frame import OFF
from .gift_coords import CoordinateSpace, load_raw_coords

logger = logging.getLogger(__name__)

IDLE_SECONDS = 1.0


class EffectRunner:
    """Runs one selected effect at a time against a driver."""

    def __init__(
        self,
        driver: Driver,
        coords: CoordinateSpace,
        store: EffectConfigStore,
        settings: EngineSettings,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.driver = driver
        self.coords = coords
        self.store = store
        self.settings = settings
        self.rng = rng or random.Random()
        self._sleep = sleep

        self.effect: Optional[Effect] = None
        self.config: Optional[EffectConfig] = None
        self.state: Optional[EffectState] = None
        self.loops = 0

        if settings.effect is not None:
            self.select(settings.effect)

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        driver: Driver,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "EffectRunner":
        """Build a runner from settings: read the light positions and open the config store."""
        coords = CoordinateSpace.from_raw(load_raw_coords(settings.coords_file))
        if coords.count != driver.get_lights_count():
            logger.warning(
                "Coordinates file has %d lights but the driver has %d",
                coords.count, driver.get_lights_count(),
            )
        return cls(driver, coords, EffectConfigStore(settings.config_dir), settings, rng, sleep)

    def select(self, name: Optional[str]) -> None:
        """Switch to the named effect, or to nothing if name is None.

        Raises:
            UnknownEffectError: if no effect has this name
        """
        if name is None:
            self.effect = self.config = self.state = None
            self.settings.effect = None
            logger.info("No effect selected")
            return

        effect = get_effect(name)
        self.config = self.store.load(name)
        self.effect = effect
        self.state = effect.from_config(self.config, self.coords, self.rng)
        self.settings.effect = name
        self.loops = 0
        logger.info("Selected effect %s", name)

    def update_config(self, config: EffectConfig) -> None:
        """Swap in new tunables for the running effect without restarting it.

        Raises:
            TypeError: if the config belongs to a different effect
            ConfigError: if the config fails validation
        """
        if self.effect is None:
            raise RuntimeError("No effect selected")
        if not isinstance(config, self.effect.config_class):
            raise TypeError(
                f"{self.effect.name} needs a {self.effect.config_class.__name__}, "
                f"got {type(config).__name__}"
            )
        valid, error = config.validate()
        if not valid:
            raise ConfigError(f"Invalid config for {self.effect.name}: {error}")
        self.config = config

    def tick(self) -> Optional[Step]:
        """Advance the effect once and show the result.

        Returns:
            The step shown, or None if nothing was advanced (idle or restarting)
        """
        if self.effect is None:
            self.driver.display_frame(OFF, self.settings.max_brightness)
            self._sleep(IDLE_SECONDS)
            return None

        step = self.effect.advance(self.state, self.config)
        if step is None:
            self._restart()
            return None

        self.driver.display_frame(step.frame, self.settings.max_brightness)
        self._sleep(step.duration)
        return step

    def _restart(self) -> None:
        self.loops += 1
        logger.info("Effect %s finished, restarting (loop %d)", self.effect.name, self.loops)
        self.driver.clear()
        self.store.save(self.effect.name, self.config)
        self._sleep(self.settings.loop_pause_ms / 1000.0)
        self.state = self.effect.from_config(self.config, self.coords, self.rng)

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick until max_ticks is reached, or forever if it's None.

        Returns:
            Number of ticks run
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self.tick()
            ticks += 1
        return ticks
