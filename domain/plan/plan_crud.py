from sqlalchemy.orm import Session

from domain.plan import plan_model, plan_schema


def create_plan(db: Session, user_id: int, plan: plan_schema.PlanCreate):
    db_plan = plan_model.YogaPlan(
        user_id=user_id,
        plan_name=plan.plan_name,
        yoga_type=plan.yoga_type,
        meditation_time=plan.meditation_time,
        duration_weeks=plan.duration_weeks,
        daily_schedule=plan.daily_schedule,
        notes=plan.notes,
    )
    db.add(db_plan)
    db.commit()
    db.refresh(db_plan)
    return db_plan

def get_plans_by_user(db: Session, user_id: int):
    """최신순 정렬"""
    return db.query(plan_model.YogaPlan).filter(
        plan_model.YogaPlan.user_id == user_id
    ).order_by(
        plan_model.YogaPlan.created_at.desc(),
        plan_model.YogaPlan.id.desc(),
    ).all()

def get_plan_by_id(db: Session, plan_id: int):
    return db.query(plan_model.YogaPlan).filter(plan_model.YogaPlan.id == plan_id).first()

def mark_completed(db: Session, db_plan: plan_model.YogaPlan):
    db_plan.completed = True
    db.commit()
    db.refresh(db_plan)
    return db_plan

def delete_plan(db: Session, db_plan: plan_model.YogaPlan):
    db.delete(db_plan)
    db.commit()

def get_plan_stats(db: Session, user_id: int) -> dict:
    base = db.query(plan_model.YogaPlan).filter(plan_model.YogaPlan.user_id == user_id)
    total_plans = base.count()
    completed_plans = base.filter(plan_model.YogaPlan.completed.is_(True)).count()
    completion_rate = (completed_plans / total_plans) * 100 if total_plans > 0 else 0
    return {
        "total_plans": total_plans,
        "completed_plans": completed_plans,
        "pending_plans": total_plans - completed_plans,
        "completion_rate": round(completion_rate, 2),
    }
