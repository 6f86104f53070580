from typing import Annotated
from fastapi import Query
from app.models.contest import ContestStatus


OptionalStatusType = Annotated[ContestStatus | None, Query()]
OptionalPaidType = Annotated[bool | None, Query(alias="isPaid")]
OptionalSearchType = Annotated[str | None, Query(alias="q", max_length=200)]
