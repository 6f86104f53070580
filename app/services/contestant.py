import logging
from app.config import settings
from app.exceptions import NotFoundError, ValidationError
from app.models import utcnow
from app.models.contest import CONTESTANTS_PREFIX, Contestant
from app.services import BaseService, RecordListRequests
from app.services.contest import ContestService
from app.utils.locks import contest_locks

logger = logging.getLogger(__name__)


class ContestantService(BaseService, RecordListRequests[Contestant]):
    model = Contestant
    key_prefix = CONTESTANTS_PREFIX

    _contest_service: ContestService = None

    @property
    def contest_service(self):
        if self._contest_service is None:
            self._contest_service = ContestService(self.store)
        return self._contest_service

    async def add_contestant(
        self,
        contest_id: str,
        name: str,
        description: str = "",
        media_urls: list[str] | None = None,
    ) -> Contestant:
        async with contest_locks.hold(contest_id):
            contest = await self.contest_service.get_contest_by_id(contest_id)
            if contest is None:
                raise NotFoundError("Contest not found")

            name = (name or "").strip()
            if not name:
                raise ValidationError("Contestant name is required")

            contestants = await self.get_list(contest_id)
            if len(contestants) >= settings.MAX_CONTESTANTS:
                raise ValidationError(
                    f"Maximum {settings.MAX_CONTESTANTS} contestants allowed"
                )

            contestant = Contestant(
                name=name,
                description=description or "",
                media_urls=list(media_urls or []),
                votes=0,
                created_at=utcnow(),
            )
            contestants.append(contestant)
            await self.put_list(contest_id, contestants)

        logger.info("Added contestant %s to contest %s", contestant.id, contest_id)
        return contestant

    async def list_contestants(self, contest_id: str) -> list[Contestant]:
        return await self.get_list(contest_id)
