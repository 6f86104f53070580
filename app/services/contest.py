import logging
from typing import Any
from app.config import settings
from app.exceptions import NotFoundError, ValidationError
from app.models import utcnow
from app.models.contest import (
    CONTEST_PREFIX,
    CONTESTANTS_PREFIX,
    VOTES_PREFIX,
    Contest,
    ContestStatus,
)
from app.services import BaseService, RecordRequests
from app.utils.locks import contest_locks
from app.utils.slug import generate_slug

logger = logging.getLogger(__name__)


class ContestService(BaseService, RecordRequests[Contest]):
    model = Contest
    key_prefix = CONTEST_PREFIX

    async def _unique_slug(self, title: str) -> str:
        taken = {contest.url_slug for contest in await self.get_list()}
        for _ in range(max(settings.SLUG_MAX_ATTEMPTS, 1)):
            slug = generate_slug(title, settings.SLUG_SUFFIX_LENGTH)
            if slug not in taken:
                return slug
        logger.warning("Slug %s is already taken, keeping it anyway", slug)
        return slug

    async def create_contest(
        self,
        title: str,
        description: str = "",
        is_paid: bool = False,
        vote_price: float = 0,
        payment_link: str = "",
        customization: dict[str, Any] | None = None,
    ) -> Contest:
        if not title or not title.strip():
            raise ValidationError("Contest title is required")
        if vote_price and vote_price < 0:
            raise ValidationError("Vote price must not be negative")

        contest = Contest(
            title=title,
            description=description or "",
            url_slug=await self._unique_slug(title),
            status=ContestStatus.ACTIVE,
            is_paid=bool(is_paid),
            vote_price=vote_price or 0,
            payment_link=payment_link or "",
            customization=customization or {},
            total_votes=0,
            created_at=utcnow(),
        )
        await self.put(contest)
        logger.info("Created contest %s (%s)", contest.id, contest.url_slug)
        return contest

    async def list_contests(
        self,
        status: ContestStatus | None = None,
        is_paid: bool | None = None,
        search: str | None = None,
    ) -> list[Contest]:
        """
        List contests, newest first.

        Args:
            status (ContestStatus | None): Only return contests in this status.
            is_paid (bool | None): Only return paid (True) or free (False) contests.
            search (str | None): Case-insensitive substring of title or description.

        Returns:
            list[Contest]: Contests ordered by creation time descending; equal
            timestamps are ordered by id so the result is deterministic.
        """

        contests = await self.get_list()
        if status is not None:
            contests = [i for i in contests if i.status == status]
        if is_paid is not None:
            contests = [i for i in contests if i.is_paid == is_paid]
        if search:
            query = search.lower()
            contests = [
                i
                for i in contests
                if query in i.title.lower() or query in (i.description or "").lower()
            ]
        return sorted(contests, key=lambda i: (i.created_at, i.id), reverse=True)

    async def get_contest_by_id(self, id: str) -> Contest | None:
        return await self.get(id)

    async def get_contest_by_slug(self, slug: str) -> Contest | None:
        for contest in await self.list_contests():
            if contest.url_slug == slug:
                return contest
        return None

    async def get_contest(self, id_or_slug: str) -> Contest:
        contest = await self.get_contest_by_id(id_or_slug)
        if contest is None:
            contest = await self.get_contest_by_slug(id_or_slug)
        if contest is None:
            raise NotFoundError("Contest not found")
        return contest

    async def end_contest(self, id: str) -> Contest:
        async with contest_locks.hold(id):
            contest = await self.get_contest_by_id(id)
            if contest is None:
                raise NotFoundError("Contest not found")
            if contest.status == ContestStatus.ENDED:
                return contest
            contest.status = ContestStatus.ENDED
            await self.put(contest)
        logger.info("Ended contest %s with %s votes", contest.id, contest.total_votes)
        return contest

    async def delete_contest(self, id: str):
        async with contest_locks.hold(id):
            # three independent writes, no cross-key atomicity
            for prefix in (CONTEST_PREFIX, CONTESTANTS_PREFIX, VOTES_PREFIX):
                await self.store.delete(f"{prefix}:{id}")
        logger.info("Deleted contest %s", id)
        return True
