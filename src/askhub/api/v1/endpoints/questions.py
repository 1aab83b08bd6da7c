"""Question endpoints."""

from fastapi import APIRouter, BackgroundTasks, Query, status
from sqlalchemy import select

from askhub.api.v1.dependencies import ActiveUserDep, DispatcherDep, SessionDep
from askhub.models import Answer
from askhub.schemas.answer import AnswerCreate, AnswerResponse
from askhub.schemas.question import (
    QuestionCreate,
    QuestionDetailResponse,
    QuestionResponse,
    QuestionUpdate,
    TrendingQuestionResponse,
)
from askhub.services.content import (
    delete_question as delete_question_service,
    get_question as get_question_service,
    submit_answer,
    submit_question,
    update_question as update_question_service,
)
from askhub.services.stats import trending_questions

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
def create_question(
    question_data: QuestionCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Ask a new question."""
    question = submit_question(
        db,
        current_user.id,
        question_data.title,
        question_data.description,
        question_data.tags,
    )
    return QuestionResponse.model_validate(question)


@router.get("/trending", response_model=list[TrendingQuestionResponse])
def get_trending_questions(
    db: SessionDep,
    days: int | None = Query(None, ge=1, le=365),
    limit: int | None = Query(None, ge=1, le=50),
) -> list[TrendingQuestionResponse]:
    """Recent questions with the most answers."""
    return [
        TrendingQuestionResponse.model_validate(item)
        for item in trending_questions(db, days=days, limit=limit)
    ]


@router.get("/{question_id}", response_model=QuestionDetailResponse)
def get_question(question_id: int, db: SessionDep) -> QuestionDetailResponse:
    """Get a question with its answers, accepted answer first."""
    question = get_question_service(db, question_id)
    answers = db.scalars(
        select(Answer)
        .where(Answer.question_id == question_id)
        .order_by(Answer.is_accepted.desc(), Answer.votes.desc(), Answer.created_at, Answer.id)
    ).all()
    response = QuestionDetailResponse.model_validate(question)
    response.answers = [AnswerResponse.model_validate(answer) for answer in answers]
    return response


@router.patch("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: int,
    question_data: QuestionUpdate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> QuestionResponse:
    """Edit one of the caller's questions."""
    question = update_question_service(
        db,
        question_id,
        current_user.id,
        question_data.title,
        question_data.description,
        question_data.tags,
    )
    return QuestionResponse.model_validate(question)


@router.post(
    "/{question_id}/answers",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_answer(
    question_id: int,
    answer_data: AnswerCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
    dispatcher: DispatcherDep,
    background_tasks: BackgroundTasks,
) -> AnswerResponse:
    """Answer a question."""
    submission = submit_answer(db, question_id, current_user.id, answer_data.body)
    if submission.events:
        background_tasks.add_task(dispatcher.dispatch, submission.events)
    return AnswerResponse.model_validate(submission.answer)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    question_id: int,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> None:
    """Delete one of the caller's questions with all of its answers."""
    delete_question_service(db, question_id, current_user.id)
