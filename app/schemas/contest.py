from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from app.models.contest import Contest, Contestant


class NewContestSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str = ""
    is_paid: bool = False
    vote_price: float = Field(default=0, ge=0)
    payment_link: str = ""
    customization: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_payment_link(self):
        if self.is_paid and not self.payment_link.strip():
            raise ValueError("paymentLink is required for paid contests")
        return self


class ContestResponseSchema(BaseModel):
    contest: Contest


class ContestListResponseSchema(BaseModel):
    contests: list[Contest]


class ContestDetailResponseSchema(BaseModel):
    contest: Contest
    contestants: list[Contestant]
