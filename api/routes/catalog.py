"""Moment and tag catalog routes"""

from typing import List

from fastapi import APIRouter, Depends
from api.dependencies import get_planner_service
from domain.schemas.plan_schemas import MomentResponse, TagResponse
from services.planner_service import PlannerService

router = APIRouter(tags=["Catalog"])


@router.get("/moments", response_model=List[MomentResponse])
def list_moments(service: PlannerService = Depends(get_planner_service)):
    """Meal moments in their order within a day"""
    return [MomentResponse.model_validate(m) for m in service.list_moments()]


@router.get("/tags", response_model=List[TagResponse])
def list_tags(service: PlannerService = Depends(get_planner_service)):
    return [TagResponse.model_validate(t) for t in service.list_tags()]
