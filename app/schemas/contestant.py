from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from app.models.contest import Contestant


class NewContestantSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: str = ""
    media_urls: list[str] = Field(default_factory=list)


class ContestantResponseSchema(BaseModel):
    contestant: Contestant
