from enum import Enum
from typing import Any
from pydantic import Field
from app.models import Record, counter, now_ts, uuid_pk


CONTEST_PREFIX = "contest"
CONTESTANTS_PREFIX = "contestants"
VOTES_PREFIX = "votes"


class ContestStatus(str, Enum):
    ACTIVE = "active"
    ENDED = "ended"


class Contest(Record):
    id: uuid_pk
    title: str
    description: str = ""
    url_slug: str
    status: ContestStatus = ContestStatus.ACTIVE
    is_paid: bool = False
    vote_price: float = Field(default=0, ge=0)
    payment_link: str = ""
    customization: dict[str, Any] = Field(default_factory=dict)
    total_votes: counter = 0
    created_at: now_ts


class Contestant(Record):
    id: uuid_pk
    name: str
    description: str = ""
    media_urls: list[str] = Field(default_factory=list)
    votes: counter = 0
    created_at: now_ts


class VoteEvent(Record):
    contestant_id: str
    timestamp: now_ts
