import asyncio

import pytest
from fakeredis import FakeAsyncRedis

from app.config import settings
from app.exceptions import ContestClosedError, NotFoundError, StorageError
from app.services.contest import ContestService
from app.services.contestant import ContestantService
from app.services.vote import VoteService
from app.utils.redis import KVStore


@pytest.fixture()
def service(store: KVStore):
    return VoteService(store)


@pytest.fixture()
async def contest(store: KVStore):
    return await ContestService(store).create_contest(title="Best Cat Photo 2024")


@pytest.fixture()
async def contestants(store: KVStore, contest):
    service = ContestantService(store)
    return [
        await service.add_contestant(contest.id, name="Whiskers"),
        await service.add_contestant(contest.id, name="Tom"),
    ]


async def test_cast_vote_increments_counters(
    service: VoteService, store: KVStore, contest, contestants
):
    whiskers, tom = contestants

    assert await service.cast_vote(contest.id, whiskers.id) == 1

    updated = await ContestantService(store).list_contestants(contest.id)
    assert [i.votes for i in updated] == [1, 0]
    assert (await ContestService(store).get_contest_by_id(contest.id)).total_votes == 1

    votes = await service.list_votes(contest.id)
    assert len(votes) == 1
    assert votes[0].contestant_id == whiskers.id

    stored = await store.get(f"votes:{contest.id}")
    assert set(stored[0]) == {"contestantId", "timestamp"}


async def test_repeat_votes_accumulate(service: VoteService, contest, contestants):
    whiskers, _ = contestants
    counts = [await service.cast_vote(contest.id, whiskers.id) for _ in range(3)]
    assert counts == [1, 2, 3]
    assert len(await service.list_votes(contest.id)) == 3


async def test_cast_vote_missing_contest(service: VoteService, store: KVStore):
    with pytest.raises(NotFoundError):
        await service.cast_vote("missing", "anyone")
    assert await store.get("votes:missing") is None


async def test_cast_vote_missing_contestant_changes_nothing(
    service: VoteService, store: KVStore, contest, contestants
):
    with pytest.raises(NotFoundError):
        await service.cast_vote(contest.id, "missing")

    assert [i.votes for i in await ContestantService(store).list_contestants(contest.id)] == [0, 0]
    assert (await ContestService(store).get_contest_by_id(contest.id)).total_votes == 0
    assert await service.list_votes(contest.id) == []


async def test_cast_vote_on_ended_contest(
    service: VoteService, store: KVStore, contest, contestants
):
    await ContestService(store).end_contest(contest.id)

    with pytest.raises(ContestClosedError):
        await service.cast_vote(contest.id, contestants[0].id)
    assert await service.list_votes(contest.id) == []


async def test_best_cat_photo_scenario(service: VoteService, store: KVStore, contest, contestants):
    whiskers, tom = contestants
    for _ in range(3):
        await service.cast_vote(contest.id, whiskers.id)
    await service.cast_vote(contest.id, tom.id)

    found = await ContestService(store).get_contest_by_slug(contest.url_slug)
    assert found.total_votes == 4

    by_name = {
        i.name: i.votes for i in await ContestantService(store).list_contestants(found.id)
    }
    assert by_name == {"Whiskers": 3, "Tom": 1}


async def test_total_matches_contestant_sum(service: VoteService, store: KVStore, contest, contestants):
    for contestant in contestants * 3:
        await service.cast_vote(contest.id, contestant.id)

    total = (await ContestService(store).get_contest_by_id(contest.id)).total_votes
    listed = await ContestantService(store).list_contestants(contest.id)
    assert total == sum(i.votes for i in listed) == 6


async def test_serialized_writes_do_not_lose_votes(
    service: VoteService, store: KVStore, contest, contestants, monkeypatch
):
    monkeypatch.setattr(settings, "SERIALIZE_WRITES", True)
    whiskers, _ = contestants

    await asyncio.gather(*(service.cast_vote(contest.id, whiskers.id) for _ in range(10)))

    listed = await ContestantService(store).list_contestants(contest.id)
    assert listed[0].votes == 10
    assert (await ContestService(store).get_contest_by_id(contest.id)).total_votes == 10
    assert len(await service.list_votes(contest.id)) == 10


class PausingStore(KVStore):
    """Blocks the first write of a contestant list until `resume` is set."""

    def __init__(self, redis) -> None:
        super().__init__(redis)
        self.paused = asyncio.Event()
        self.resume = asyncio.Event()

    async def set(self, key, value):
        if key.startswith("contestants:") and not self.paused.is_set():
            self.paused.set()
            await self.resume.wait()
        await super().set(key, value)


async def test_serialized_delete_waits_for_vote_in_flight(
    store: KVStore, redis, contest, contestants, monkeypatch
):
    monkeypatch.setattr(settings, "SERIALIZE_WRITES", True)
    whiskers, _ = contestants
    pausing = PausingStore(redis)

    vote = asyncio.create_task(VoteService(pausing).cast_vote(contest.id, whiskers.id))
    await pausing.paused.wait()
    delete = asyncio.create_task(ContestService(store).delete_contest(contest.id))
    await asyncio.sleep(0.01)
    assert not delete.done()

    pausing.resume.set()
    assert await vote == 1
    assert await delete is True

    for prefix in ("contest", "contestants", "votes"):
        assert await store.get(f"{prefix}:{contest.id}") is None


async def test_unreachable_store_raises_storage_error(redis_server):
    redis = FakeAsyncRedis(server=redis_server, decode_responses=True)
    redis_server.connected = False
    service = VoteService(KVStore(redis))

    with pytest.raises(StorageError):
        await service.cast_vote("any", "one")
    await redis.aclose()


async def test_malformed_contestant_list_raises_storage_error(
    service: VoteService, store: KVStore, contest
):
    await store.set(f"contestants:{contest.id}", {"not": "a list"})
    with pytest.raises(StorageError):
        await service.cast_vote(contest.id, "anyone")
