"""Confidence feedback prompt lifecycle.

Drives the "Would you upload this as-is?" prompt independently of rendering:

    hidden --open--> entering --entrance delay--> visible
    visible --auto-hide / dismiss()--> fading --teardown delay--> hidden [on_dismiss]
    visible --submit_rating(r)--> submitted [on_submit(r)]
        --ack delay--> fading --teardown delay--> hidden [on_dismiss]
    any --close / unmount--> hidden [no callback]

Each open starts a new lifecycle instance (generation). Timers remember the
generation that armed them and are dropped if it is no longer current, so a
superseded instance can never touch the state of a newer one.
"""

from collections.abc import Callable

import structlog

from app.config import FeedbackConfig, get_settings
from app.models.feedback import PromptPhase, PromptState, Rating
from app.services.timers import AsyncioScheduler, Scheduler, TimerHandle

logger = structlog.get_logger(__name__)

_ENTRANCE = "entrance"
_AUTO_HIDE = "auto_hide"
_ACK = "ack"
_TEARDOWN = "teardown"


class FeedbackPromptController:
    """Owns visibility and at-most-once rating capture for one prompt."""

    def __init__(
        self,
        on_submit: Callable[[Rating], None],
        on_dismiss: Callable[[], None],
        *,
        scheduler: Scheduler | None = None,
        config: FeedbackConfig | None = None,
        auto_hide_ms: int | None = None,
    ) -> None:
        self.config = config or get_settings().feedback
        if auto_hide_ms is not None and (
            isinstance(auto_hide_ms, bool) or not isinstance(auto_hide_ms, int) or auto_hide_ms <= 0
        ):
            raise ValueError(f"auto_hide_ms must be a positive integer, got {auto_hide_ms!r}")
        self.auto_hide_ms = auto_hide_ms if auto_hide_ms is not None else self.config.auto_hide_ms
        self.scheduler = scheduler or AsyncioScheduler()

        self._on_submit = on_submit
        self._on_dismiss = on_dismiss

        self._is_open = False
        self._phase = PromptPhase.HIDDEN
        self._is_submitted = False
        self._rating: Rating | None = None
        self._generation = 0
        self._timers: dict[str, TimerHandle] = {}

    def __enter__(self) -> "FeedbackPromptController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unmount()

    @property
    def state(self) -> PromptState:
        return PromptState(
            phase=self._phase,
            is_open=self._is_open,
            is_submitted=self._is_submitted,
            rating=self._rating,
            generation=self._generation,
        )

    @property
    def pending_timers(self) -> frozenset[str]:
        return frozenset(self._timers)

    # ------------------------------------------------------------------
    # Host signals
    # ------------------------------------------------------------------

    def set_open(self, signal: bool) -> None:
        """Apply the host's open signal; only transitions have an effect."""
        signal = bool(signal)
        if signal == self._is_open:
            return
        self._is_open = signal

        if signal:
            self._start_lifecycle()
        else:
            self._reset()
            logger.info("feedback_prompt_closed", generation=self._generation)

    def unmount(self) -> None:
        """Tear down without notifying the host."""
        self._is_open = False
        self._reset()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def submit_rating(self, rating: Rating | str) -> bool:
        """Record the user's rating. Returns False when the call is ignored."""
        try:
            rating = Rating(rating)
        except ValueError:
            logger.warning("feedback_prompt_rating_invalid", rating=rating)
            return False

        if self._phase != PromptPhase.VISIBLE or self._is_submitted:
            logger.debug(
                "feedback_prompt_rating_ignored",
                rating=rating.value,
                phase=self._phase.value,
                is_submitted=self._is_submitted,
            )
            return False

        generation = self._generation
        self._cancel(_AUTO_HIDE)
        self._is_submitted = True
        self._rating = rating
        logger.info("feedback_prompt_rated", rating=rating.value, generation=generation)

        try:
            self._on_submit(rating)
        finally:
            # The host may have closed or reopened the prompt from inside on_submit.
            if (
                generation == self._generation
                and self._phase == PromptPhase.VISIBLE
                and self._is_submitted
            ):
                self._arm(_ACK, self.config.ack_delay_ms, self._acknowledged)
        return True

    def dismiss(self) -> bool:
        """Manual close. Returns False when the call is ignored."""
        if self._phase != PromptPhase.VISIBLE or self._is_submitted:
            logger.debug(
                "feedback_prompt_dismiss_ignored",
                phase=self._phase.value,
                is_submitted=self._is_submitted,
            )
            return False
        self._begin_fade("manual")
        return True

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _start_lifecycle(self) -> None:
        self._clear_timers()
        self._generation += 1
        self._is_submitted = False
        self._rating = None

        if self.config.entrance_delay_ms > 0:
            self._phase = PromptPhase.ENTERING
            self._arm(_ENTRANCE, self.config.entrance_delay_ms, self._entered)
        else:
            self._phase = PromptPhase.VISIBLE

        self._arm(_AUTO_HIDE, self.auto_hide_ms, self._auto_hide)
        logger.info(
            "feedback_prompt_opened",
            generation=self._generation,
            auto_hide_ms=self.auto_hide_ms,
        )

    def _entered(self) -> None:
        if self._phase == PromptPhase.ENTERING:
            self._phase = PromptPhase.VISIBLE

    def _auto_hide(self) -> None:
        if self._is_submitted:
            return
        if self._phase in (PromptPhase.ENTERING, PromptPhase.VISIBLE):
            self._begin_fade("auto_hide")

    def _acknowledged(self) -> None:
        self._phase = PromptPhase.FADING
        self._arm(_TEARDOWN, self.config.teardown_delay_ms, lambda: self._torn_down("rated"))

    def _begin_fade(self, reason: str) -> None:
        self._cancel(_ENTRANCE)
        self._cancel(_AUTO_HIDE)
        self._phase = PromptPhase.FADING
        self._arm(_TEARDOWN, self.config.teardown_delay_ms, lambda: self._torn_down(reason))

    def _torn_down(self, reason: str) -> None:
        self._clear_timers()
        self._phase = PromptPhase.HIDDEN
        logger.info(
            "feedback_prompt_dismissed",
            reason=reason,
            generation=self._generation,
            rating=self._rating.value if self._rating else None,
        )
        self._on_dismiss()

    def _reset(self) -> None:
        self._clear_timers()
        self._phase = PromptPhase.HIDDEN
        self._is_submitted = False
        self._rating = None

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _arm(self, name: str, delay_ms: int, action: Callable[[], None]) -> None:
        self._cancel(name)
        generation = self._generation
        handle: TimerHandle | None = None

        def fire() -> None:
            if generation != self._generation or self._timers.get(name) is not handle:
                logger.debug(
                    "feedback_prompt_stale_timer_dropped",
                    timer=name,
                    generation=generation,
                    current_generation=self._generation,
                )
                return
            del self._timers[name]
            action()

        handle = self.scheduler.call_later(delay_ms, fire)
        self._timers[name] = handle

    def _cancel(self, name: str) -> None:
        handle = self._timers.pop(name, None)
        if handle is not None:
            handle.cancel()

    def _clear_timers(self) -> None:
        timers, self._timers = self._timers, {}
        for handle in timers.values():
            handle.cancel()
