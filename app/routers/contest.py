from fastapi import APIRouter, Depends
from app.routers import OptionalPaidType, OptionalSearchType, OptionalStatusType
from app.schemas.common import SuccessResponseSchema
from app.schemas.contest import (
    ContestDetailResponseSchema,
    ContestListResponseSchema,
    ContestResponseSchema,
    NewContestSchema,
)
from app.schemas.contestant import ContestantResponseSchema, NewContestantSchema
from app.schemas.vote import VotePayloadSchema, VoteResponseSchema
from app.services.contest import ContestService
from app.services.contestant import ContestantService
from app.services.vote import VoteService

router = APIRouter(prefix="/contests", tags=["Contest"])


@router.get("", response_model=ContestListResponseSchema)
async def get_list(
    status: OptionalStatusType = None,
    is_paid: OptionalPaidType = None,
    q: OptionalSearchType = None,
    service: ContestService = Depends(ContestService.get_service),
):
    contests = await service.list_contests(status=status, is_paid=is_paid, search=q)
    return ContestListResponseSchema(contests=contests)


@router.post("", response_model=ContestResponseSchema)
async def post(
    payload: NewContestSchema,
    service: ContestService = Depends(ContestService.get_service),
):
    contest = await service.create_contest(**payload.model_dump())
    return ContestResponseSchema(contest=contest)


@router.get("/{id_or_slug}", response_model=ContestDetailResponseSchema)
async def get(
    id_or_slug: str,
    service: ContestService = Depends(ContestService.get_service),
    contestant_service: ContestantService = Depends(ContestantService.get_service),
):
    contest = await service.get_contest(id_or_slug)
    contestants = await contestant_service.list_contestants(contest.id)
    return ContestDetailResponseSchema(contest=contest, contestants=contestants)


@router.delete("/{contest_id}", response_model=SuccessResponseSchema)
async def delete(
    contest_id: str,
    service: ContestService = Depends(ContestService.get_service),
):
    await service.delete_contest(contest_id)
    return SuccessResponseSchema()


@router.post("/{contest_id}/end", response_model=ContestResponseSchema)
async def end(
    contest_id: str,
    service: ContestService = Depends(ContestService.get_service),
):
    return ContestResponseSchema(contest=await service.end_contest(contest_id))


@router.post("/{contest_id}/contestants", response_model=ContestantResponseSchema)
async def add_contestant(
    contest_id: str,
    payload: NewContestantSchema,
    service: ContestantService = Depends(ContestantService.get_service),
):
    contestant = await service.add_contestant(
        contest_id=contest_id, **payload.model_dump()
    )
    return ContestantResponseSchema(contestant=contestant)


@router.post("/{contest_id}/vote", response_model=VoteResponseSchema)
async def vote(
    contest_id: str,
    payload: VotePayloadSchema,
    service: VoteService = Depends(VoteService.get_service),
):
    votes = await service.cast_vote(contest_id, payload.contestant_id)
    return VoteResponseSchema(votes=votes)
