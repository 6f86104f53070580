from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from app.schemas.common import SuccessResponseSchema


class VotePayloadSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contestant_id: str


class VoteResponseSchema(SuccessResponseSchema):
    votes: int
