import logging
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
from starlette import status

from database.session import get_db
from domain.plan import plan_crud, plan_schema
from exceptions import ForbiddenError, NotFoundError
from security import get_current_user
from services.notification_service import NotificationService, get_notification_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/plans",
    tags=["Plan"]
)

def _get_owned_plan(db: Session, plan_id: int, user_id: int, action: str):
    """플랜 조회 + 소유자 확인"""
    plan = plan_crud.get_plan_by_id(db, plan_id)
    if not plan:
        raise NotFoundError("Plan not found")
    if plan.user_id != user_id:
        logger.warning(f"Plan {action} denied: plan_id={plan_id} user_id={user_id}")
        raise ForbiddenError(f"Unauthorized: You can only {action} your own plans")
    return plan

@router.post("", response_model=plan_schema.PlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    plan: plan_schema.PlanCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
    notifier: NotificationService = Depends(get_notification_service),
):
    db_plan = plan_crud.create_plan(db, current_user.id, plan)

    # 알림은 응답 이후 백그라운드로 발송
    background_tasks.add_task(
        notifier.plan_created, current_user.email, current_user.name, current_user.phone, db_plan.plan_name
    )
    return {"message": "Plan created successfully", "plan": plan_schema.Plan.model_validate(db_plan)}

@router.get("", response_model=List[plan_schema.Plan])
def get_plans(
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    """로그인한 사용자의 플랜 목록 (최신순)"""
    return plan_crud.get_plans_by_user(db, current_user.id)

@router.get("/stats", response_model=plan_schema.PlanStats)
def get_plan_stats(
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    return plan_crud.get_plan_stats(db, current_user.id)

@router.patch("/{plan_id}/complete", response_model=plan_schema.PlanResponse)
def mark_plan_completed(
    plan_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
    notifier: NotificationService = Depends(get_notification_service),
):
    plan = _get_owned_plan(db, plan_id, current_user.id, "modify")
    plan = plan_crud.mark_completed(db, plan)

    background_tasks.add_task(notifier.plan_completed, current_user.email, current_user.name, plan.plan_name)
    return {"message": "Plan marked as completed", "plan": plan_schema.Plan.model_validate(plan)}

@router.delete("/{plan_id}")
def delete_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    current_user = Depends(get_current_user),
):
    plan = _get_owned_plan(db, plan_id, current_user.id, "delete")
    plan_crud.delete_plan(db, plan)
    return {"message": "Plan deleted successfully"}
