from typing import List

from fastapi import APIRouter

from domain.yoga import yoga_catalog
from exceptions import NotFoundError

router = APIRouter(
    prefix="/yoga-types",
    tags=["Yoga"]
)

@router.get("", response_model=List[yoga_catalog.YogaType])
def list_yoga_types():
    """요가 스타일 목록"""
    return yoga_catalog.YOGA_TYPES

@router.get("/{yoga_type_id}", response_model=yoga_catalog.YogaType)
def get_yoga_type(yoga_type_id: int):
    yoga_type = yoga_catalog.get_yoga_type(yoga_type_id)
    if yoga_type is None:
        raise NotFoundError("Yoga type not found")
    return yoga_type
