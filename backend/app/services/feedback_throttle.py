"""Session throttle for the confidence feedback prompt."""

from datetime import UTC, datetime, timedelta

import structlog

from app.config import ThrottleConfig, get_settings

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ConfidencePromptThrottle:
    """Decides whether the host may open the prompt for a project.

    Rules, per session:
    - at most ``max_per_session`` prompts
    - at most one prompt per project
    - ``cooldown_seconds`` between prompts
    """

    def __init__(self, config: ThrottleConfig | None = None, now_provider=_utcnow) -> None:
        self.config = config or get_settings().throttle
        self.now_provider = now_provider
        self.count = 0
        self.last_shown_at: datetime | None = None
        self.project_ids: set[str] = set()

    def can_show(self, project_id: str) -> bool:
        if self.count >= self.config.max_per_session:
            return False

        if project_id in self.project_ids:
            return False

        if self.last_shown_at is not None:
            elapsed = self.now_provider() - self.last_shown_at
            if elapsed < timedelta(seconds=self.config.cooldown_seconds):
                return False

        return True

    def mark_shown(self, project_id: str) -> None:
        self.count += 1
        self.last_shown_at = self.now_provider()
        self.project_ids.add(project_id)
        logger.info(
            "confidence_prompt_marked_shown",
            project_id=project_id,
            session_count=self.count,
        )
