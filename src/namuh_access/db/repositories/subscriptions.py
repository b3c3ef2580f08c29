from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from namuh_access.db.models import Subscription, SubscriptionStatus


class SubscriptionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> Subscription | None:
        return await self._session.get(Subscription, user_id)

    async def upsert(
        self,
        *,
        user_id: str,
        tier_name: str,
        status: SubscriptionStatus = SubscriptionStatus.active,
        token_balance: int = 0,
    ) -> Subscription:
        existing = await self._session.get(Subscription, user_id, with_for_update=True)
        if existing is not None:
            existing.tier_name = tier_name
            existing.status = status
            existing.token_balance = token_balance
            await self._session.flush()
            return existing

        sub = Subscription(
            user_id=user_id,
            tier_name=tier_name,
            status=status,
            token_balance=token_balance,
        )
        self._session.add(sub)
        await self._session.flush()
        return sub
