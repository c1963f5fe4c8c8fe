"""
Detect a repeated button press (double-sneak by default) per player.

Each press is logged at the current tick and (re)arms a short timeout. When
the timeout fires, the log is checked against the trigger count and the input
window; either way the player then sits out a cooldown before their record is
dropped.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import DynamicValue, as_provider

logger = logging.getLogger("block_probe.input_pattern")


class InputButton(str, enum.Enum):
    JUMP = "Jump"
    SNEAK = "Sneak"


class ButtonState(str, enum.Enum):
    PRESSED = "Pressed"
    RELEASED = "Released"


@dataclass
class PressRecord:
    timer_handle: Optional[int] = None
    tick_log: List[int] = field(default_factory=list)
    on_cooldown: bool = False


class InputPatternDetector:
    """
    Parameters
    ----------
    system                : host tick system (``current_tick``, ``run_timeout``,
                            ``clear_run``, ``send_script_event``)
    event_id              : script event sent when the pattern completes
    input_window_ticks    : max ticks between first and last press
    trigger_count         : exact number of presses required
    cooldown_ticks        : ticks a player is ignored after each check
    logging_timeout_ticks : quiet ticks after the last press before checking
    button                : which button to watch

    Every threshold may be a number or a zero-argument callable read on use.
    """

    def __init__(
        self,
        system,
        *,
        event_id: str = "djc:sneak_input_triggered",
        input_window_ticks: DynamicValue = 5,
        trigger_count: DynamicValue = 2,
        cooldown_ticks: DynamicValue = 20,
        logging_timeout_ticks: DynamicValue = 5,
        button: InputButton = InputButton.SNEAK,
    ) -> None:
        self.system = system
        self.event_id = event_id
        self.button = button
        self.registry: Dict[str, PressRecord] = {}

        self._input_window_ticks = as_provider(input_window_ticks)
        self._trigger_count = as_provider(trigger_count)
        self._cooldown_ticks = as_provider(cooldown_ticks)
        self._logging_timeout_ticks = as_provider(logging_timeout_ticks)

    @property
    def input_window_ticks(self) -> int:
        return self._input_window_ticks()

    @property
    def trigger_count(self) -> int:
        return self._trigger_count()

    @property
    def cooldown_ticks(self) -> int:
        return self._cooldown_ticks()

    @property
    def logging_timeout_ticks(self) -> int:
        return self._logging_timeout_ticks()

    # --- event wiring ---

    def attach(self, signal) -> None:
        """Subscribe to a host button-input signal (anything with ``subscribe``)."""
        signal.subscribe(self.handle_button_input)
        logger.debug("input pattern detector attached for %s", getattr(self.button, "value", self.button))

    def handle_button_input(self, event: Any) -> None:
        """Host callback; only presses of the watched button count."""
        if event.button != self.button or event.new_button_state != ButtonState.PRESSED:
            return
        self.process_press(event.player)

    def process_press(self, player) -> None:
        record = self.registry.get(player.id)
        if record is None:
            record = self.registry[player.id] = PressRecord()

        if record.on_cooldown:
            return

        record.tick_log.append(self.system.current_tick)
        logger.debug("logged press for %s at tick %d", player.id, self.system.current_tick)

        if record.timer_handle is not None:
            self.system.clear_run(record.timer_handle)
        record.timer_handle = self.system.run_timeout(
            lambda: self._on_timeout(player), self.logging_timeout_ticks
        )

    # --- timers ---

    def _on_timeout(self, player) -> None:
        record = self.registry.get(player.id)
        if record is None:
            return
        record.timer_handle = None

        log = record.tick_log
        if len(log) == self.trigger_count and log[-1] - log[0] <= self.input_window_ticks:
            self.system.send_script_event(self.event_id, str(player.id))
            logger.debug("triggered %s for %s", self.event_id, player.id)

        record.on_cooldown = True
        self.system.run_timeout(lambda: self._on_cooldown_expire(player), self.cooldown_ticks)
        logger.debug("press window closed for %s", player.id)

    def _on_cooldown_expire(self, player) -> None:
        self.registry.pop(player.id, None)
        logger.debug("cooldown expired for %s", player.id)
