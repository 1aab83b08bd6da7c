"""Answer endpoints: voting, acceptance, editing and removal."""

from fastapi import APIRouter, BackgroundTasks, status

from askhub.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    DispatcherDep,
    SessionDep,
)
from askhub.schemas.answer import AcceptResponse, AnswerResponse, AnswerUpdate
from askhub.schemas.vote import VoteCreate, VoteResponse, VoteStatusResponse
from askhub.services.acceptance import accept_answer as accept_answer_service
from askhub.services.content import delete_answer as delete_answer_service
from askhub.services.content import update_answer as update_answer_service
from askhub.services.votes import cast_vote, get_vote_status

router = APIRouter(prefix="/answers", tags=["answers"])


@router.post("/{answer_id}/vote", response_model=VoteResponse)
def vote_on_answer(
    answer_id: int,
    vote_data: VoteCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
    dispatcher: DispatcherDep,
    background_tasks: BackgroundTasks,
) -> VoteResponse:
    """Upvote, downvote, flip or withdraw a vote on an answer."""
    outcome = cast_vote(db, answer_id, current_user.id, vote_data.value)
    if outcome.events:
        background_tasks.add_task(dispatcher.dispatch, outcome.events)
    return VoteResponse(action=outcome.action, value=outcome.value, votes=outcome.votes)


@router.get("/{answer_id}/vote", response_model=VoteStatusResponse)
def get_my_vote(
    answer_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteStatusResponse:
    """Get the current user's vote on an answer."""
    has_voted, value = get_vote_status(db, answer_id, current_user.id)
    return VoteStatusResponse(has_voted=has_voted, value=value)


@router.patch("/{answer_id}/accept", response_model=AcceptResponse)
def accept_answer(
    answer_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
    dispatcher: DispatcherDep,
    background_tasks: BackgroundTasks,
) -> AcceptResponse:
    """Accept an answer on a question the caller owns."""
    outcome = accept_answer_service(db, answer_id, current_user.id)
    if outcome.events:
        background_tasks.add_task(dispatcher.dispatch, outcome.events)
    return AcceptResponse(
        answer=AnswerResponse.model_validate(outcome.answer),
        changed=outcome.changed,
    )


@router.patch("/{answer_id}", response_model=AnswerResponse)
def update_answer(
    answer_id: int,
    answer_data: AnswerUpdate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> AnswerResponse:
    """Edit one of the caller's answers."""
    answer = update_answer_service(db, answer_id, current_user.id, answer_data.body)
    return AnswerResponse.model_validate(answer)


@router.delete("/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_answer(
    answer_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> None:
    """Delete one of the caller's answers."""
    delete_answer_service(db, answer_id, current_user.id)
