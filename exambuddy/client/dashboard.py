"""Dashboard read path: fetch stats, retry on failure, optimistic reset.

``StatsApiClient`` speaks HTTP to the stats routes; ``DashboardController``
holds the view state a UI renders from.
"""
import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from exambuddy.core.errors import AuthenticationError, ExamBuddyError, UpstreamError
from exambuddy.schemas.stats import DashboardOutSchema, StatsMapping, TopicStatsSchema
from exambuddy.services.scoring import build_dashboard

logger = logging.getLogger(__name__)

RESET_CONFIRMATION = "Are you sure you want to reset all your progress? This cannot be undone."
RESET_FAILED = "There was an error resetting your progress. Please try again later."
RECONCILE_FAILED = "Your progress was reset, but the latest stats could not be loaded. Please refresh."


class StatsApiClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        headers = {"Authorization": f"Bearer {self.token}"}
        try:
            resp = await self.http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamError("Could not reach the stats service.", details=str(exc)) from exc

        if resp.status_code in (401, 403):
            raise AuthenticationError(_error_message(resp, "Authentication required"), status_code=resp.status_code)
        if resp.is_error:
            raise UpstreamError(_error_message(resp, "Stats request failed."), details=resp.status_code)
        return resp.json()

    async def fetch_stats(self) -> StatsMapping:
        data = await self._request("GET", "/api/user-stats")
        return {topic: TopicStatsSchema.model_validate(stat) for topic, stat in data.items()}

    async def record_answer(self, topic: str, correct: bool) -> StatsMapping:
        data = await self._request("POST", "/api/user-stats", json={"topic": topic, "correct": correct})
        return {t: TopicStatsSchema.model_validate(stat) for t, stat in data.items()}

    async def reset_stats(self) -> None:
        await self._request("POST", "/api/user-stats/reset", json={})


def _error_message(resp: httpx.Response, default: str) -> str:
    try:
        return resp.json().get("error") or default
    except ValueError:
        return default


class DashboardStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ReconcilePolicy(str, enum.Enum):
    """What to show when the post-reset refetch fails."""

    KEEP_OPTIMISTIC = "keep_optimistic"
    ROLLBACK = "rollback"


@dataclass
class DashboardState:
    status: DashboardStatus = DashboardStatus.IDLE
    stats: StatsMapping | None = None
    error: str | None = None  # fetch failed; UI shows retry
    notice: str | None = None  # non-blocking message
    is_resetting: bool = False
    history: list[DashboardStatus] = field(default_factory=list)


class DashboardController:
    def __init__(
        self,
        api: StatsApiClient,
        subject: str,
        topics: list[str],
        *,
        confirm: Callable[[str], bool],
        reconcile_delay: float = 1.0,
        reconcile_policy: ReconcilePolicy = ReconcilePolicy.KEEP_OPTIMISTIC,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api = api
        self.subject = subject
        self.topics = list(topics)
        self.confirm = confirm
        self.reconcile_delay = reconcile_delay
        self.reconcile_policy = reconcile_policy
        self._sleep = sleep
        self.state = DashboardState()

    def _set_status(self, status: DashboardStatus) -> None:
        self.state.status = status
        self.state.history.append(status)

    async def load(self) -> None:
        self._set_status(DashboardStatus.LOADING)
        self.state.error = None
        try:
            self.state.stats = await self.api.fetch_stats()
        except ExamBuddyError as exc:
            logger.warning("Loading dashboard stats failed: %s", exc.message)
            self.state.error = exc.message
            self._set_status(DashboardStatus.ERROR)
            return
        self._set_status(DashboardStatus.READY)

    async def retry(self) -> None:
        await self.load()

    def view(self) -> DashboardOutSchema | None:
        if self.state.stats is None:
            return None
        return build_dashboard(self.subject, self.state.stats, self.topics)

    async def record_answer(self, topic: str, correct: bool) -> None:
        """Bump the local counters now, then adopt the server's mapping."""
        stats = dict(self.state.stats or {})
        current = stats.get(topic, TopicStatsSchema())
        stats[topic] = TopicStatsSchema(
            total=current.total + 1,
            correct=current.correct + (1 if correct else 0),
            incorrect=current.incorrect + (0 if correct else 1),
        )
        self.state.stats = stats
        try:
            self.state.stats = await self.api.record_answer(topic, correct)
        except ExamBuddyError as exc:
            logger.warning("Recording answer for %r failed: %s", topic, exc.message)
            self.state.notice = exc.message
            await self.load()

    async def reset(self) -> bool:
        """Clear progress after confirmation. Returns False when declined.

        The view is emptied before the server answers. After
        ``reconcile_delay`` the stats are fetched again and replace the
        optimistic view; if that fetch fails, ``reconcile_policy`` decides
        between keeping the empty view and restoring the previous one.
        """
        if not self.confirm(RESET_CONFIRMATION):
            return False

        previous = self.state.stats
        self.state.stats = {}
        self.state.notice = None
        self.state.is_resetting = True
        try:
            try:
                await self.api.reset_stats()
            except ExamBuddyError as exc:
                logger.warning("Reset request failed: %s", exc.message)
                self.state.notice = RESET_FAILED

            await self._sleep(self.reconcile_delay)
            try:
                self.state.stats = await self.api.fetch_stats()
                self.state.error = None
                self._set_status(DashboardStatus.READY)
            except ExamBuddyError as exc:
                logger.warning("Reconciling after reset failed: %s", exc.message)
                self.state.notice = self.state.notice or RECONCILE_FAILED
                if self.reconcile_policy is ReconcilePolicy.ROLLBACK:
                    self.state.stats = previous
        finally:
            self.state.is_resetting = False
        return True
