import uuid
from datetime import datetime, timezone
from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


uuid_pk = Annotated[str, Field(default_factory=new_id)]
now_ts = Annotated[datetime, Field(default_factory=utcnow)]
counter = Annotated[int, Field(ge=0)]


class Record(BaseModel):
    """Base for values persisted as JSON in the key-value store.

    Stored and transmitted field names are camelCase; unknown fields found in
    stored data are kept so that rewriting a record does not drop them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="allow",
    )

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
