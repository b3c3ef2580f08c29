"""
namuh_access.access.watcher

Reactive re-evaluation of a guard's decision.

Responsibilities:
- Re-evaluate whenever the session or the requirement changes.
- Publish `pending` while a tier check is in flight.
- Discard results from superseded checks (monotonic sequence; latest write wins)
  and cancel the superseded task.
"""

from __future__ import annotations

import asyncio

from namuh_access.access.evaluator import AccessEvaluator, TierCheck
from namuh_access.access.models import AccessDecision, AccessRequirement
from namuh_access.auth.models import SessionState
from namuh_access.observability.logging import get_logger

log = get_logger(__name__)


class AccessWatcher:
    """
    One watcher per mounted guard. Must be driven from a running event loop.
    """

    def __init__(self, evaluator: AccessEvaluator) -> None:
        self._evaluator = evaluator
        self._seq = 0
        self._decision = AccessDecision.pending()
        self._task: asyncio.Task[None] | None = None
        self._task_key: tuple[str, str] | None = None

    @property
    def decision(self) -> AccessDecision:
        return self._decision

    @property
    def in_flight(self) -> tuple[str, str] | None:
        """(user_id, tier) of the running check, if any."""
        if self._task is None or self._task.done():
            return None
        return self._task_key

    def update(self, session: SessionState, requirement: AccessRequirement) -> AccessDecision:
        self._seq += 1
        seq = self._seq
        self._cancel()

        local = self._evaluator.precheck(session, requirement)
        if isinstance(local, AccessDecision):
            self._decision = local
            return local

        self._decision = AccessDecision.pending()
        self._task_key = local.key
        self._task = asyncio.create_task(self._run(seq, local))
        return self._decision

    async def settle(self) -> AccessDecision:
        # Newer updates may replace the task while we wait; follow until quiet.
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._decision

    def close(self) -> None:
        self._seq += 1
        self._cancel()

    async def _run(self, seq: int, check: TierCheck) -> None:
        decision = await self._evaluator.check_tier(check)
        if seq != self._seq:
            log.debug("access_result_discarded", seq=seq, latest=self._seq)
            return
        self._decision = decision

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._task_key = None


# --- Module Notes -----------------------------------------------------------
# The sequence check still matters when cancellation loses the race: a task that
# already finished its await publishes nothing unless it is the latest.
