from app.exceptions import ContestClosedError, NotFoundError
from app.models import utcnow
from app.models.contest import VOTES_PREFIX, ContestStatus, VoteEvent
from app.services import BaseService, RecordListRequests
from app.services.contest import ContestService
from app.services.contestant import ContestantService
from app.utils.locks import contest_locks


class VoteService(BaseService, RecordListRequests[VoteEvent]):
    model = VoteEvent
    key_prefix = VOTES_PREFIX

    _contest_service: ContestService = None
    _contestant_service: ContestantService = None

    @property
    def contest_service(self):
        if self._contest_service is None:
            self._contest_service = ContestService(self.store)
        return self._contest_service

    @property
    def contestant_service(self):
        if self._contestant_service is None:
            self._contestant_service = ContestantService(self.store)
        return self._contestant_service

    async def cast_vote(self, contest_id: str, contestant_id: str) -> int:
        """
        Record one vote for a contestant.

        The contestant counter, the contest total and the vote log are three
        separate writes. A failure between them leaves ``totalVotes`` out of
        step with the contestant counters; nothing repairs it.

        Args:
            contest_id (str): The id of the contest.
            contestant_id (str): The id of the contestant voted for.

        Returns:
            int: The contestant's vote count after the increment.
        """

        async with contest_locks.hold(contest_id):
            contest = await self.contest_service.get_contest_by_id(contest_id)
            if contest is None:
                raise NotFoundError("Contest not found")
            if contest.status != ContestStatus.ACTIVE:
                raise ContestClosedError("Contest has ended")

            contestants = await self.contestant_service.list_contestants(contest_id)
            contestant = next((i for i in contestants if i.id == contestant_id), None)
            if contestant is None:
                raise NotFoundError("Contestant not found")

            contestant.votes += 1
            await self.contestant_service.put_list(contest_id, contestants)

            contest.total_votes += 1
            await self.contest_service.put(contest)

            await self.append(
                contest_id, VoteEvent(contestant_id=contestant_id, timestamp=utcnow())
            )
            return contestant.votes

    async def list_votes(self, contest_id: str) -> list[VoteEvent]:
        return await self.get_list(contest_id)
