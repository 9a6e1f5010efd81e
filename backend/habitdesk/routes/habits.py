"""
Habit Routes - API endpoints for habit management
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from habitdesk.core.constants import DETAIL_COMPLETION_WINDOW_DAYS
from habitdesk.core.dependencies import get_habit_service
from habitdesk.core.exceptions import HabitNotFoundError, InvalidHabitDataError
from habitdesk.models.habit import (
    DailySummary,
    Habit,
    HabitCreate,
    HabitListItem,
    HabitStats,
    HabitUpdate,
    ToggleResult,
)
from habitdesk.services.habits import HabitService

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("", response_model=List[HabitListItem])
def list_habits(
    habit_filter: str = Query("all", alias="filter", description="'all', 'today' or a category"),
    service: HabitService = Depends(get_habit_service)
):
    """List habits with their streak and completion badges"""
    try:
        return service.list_items(habit_filter)
    except InvalidHabitDataError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=Habit, status_code=201)
def create_habit(request: HabitCreate, service: HabitService = Depends(get_habit_service)):
    """Create a new habit"""
    return service.create_habit(request)


@router.get("/summary/today", response_model=DailySummary)
def get_daily_summary(service: HabitService = Depends(get_habit_service)):
    """Get today's summary of habit completion"""
    return service.get_daily_summary()


@router.get("/{habit_id}", response_model=Habit)
def get_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    try:
        return service.get_habit(habit_id)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{habit_id}", response_model=Habit)
def update_habit(habit_id: str, request: HabitUpdate, service: HabitService = Depends(get_habit_service)):
    """Edit a habit's configuration"""
    try:
        return service.update_habit(habit_id, request)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{habit_id}", response_model=Habit)
def delete_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """Delete a habit and cancel its reminders"""
    try:
        return service.delete_habit(habit_id)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{habit_id}/toggle", response_model=ToggleResult)
def toggle_habit(habit_id: str, service: HabitService = Depends(get_habit_service)):
    """Mark today done, or undo it if already done"""
    try:
        return service.toggle_habit(habit_id)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{habit_id}/stats", response_model=HabitStats)
def get_habit_stats(
    habit_id: str,
    window: int = Query(DETAIL_COMPLETION_WINDOW_DAYS, ge=1, le=366, description="Completion rate window in days"),
    service: HabitService = Depends(get_habit_service)
):
    """Streaks and completion rate for one habit"""
    try:
        return service.get_habit_stats(habit_id, window)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
