from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from studyplanner import store
from studyplanner.config import DEFAULT_USER_ID
from studyplanner.database import get_db
from studyplanner.schemas.task import TaskCreate, TaskUpdate, TaskComplete, TaskOut, TaskType, Status

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskOut])
def list_tasks(type: Optional[TaskType] = Query(None, description="Filter by task type"),
               status: Optional[Status] = Query(None, description="Filter by status"),
               db: Session = Depends(get_db)):
    return store.list_tasks(db, DEFAULT_USER_ID, type=type, status=status)


@router.post("", status_code=201)
def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    task_id = store.create_task(db, DEFAULT_USER_ID, task.model_dump())
    return {"id": task_id, "message": "Task created successfully"}


@router.put("/{task_id}")
def update_task(task_id: int, task: TaskUpdate, db: Session = Depends(get_db)):
    changes = store.update_task(db, task_id, task.model_dump(exclude_unset=True))
    if changes == 0:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task updated successfully"}


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    changes = store.delete_task(db, task_id)
    if changes == 0:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task deleted successfully"}


@router.post("/{task_id}/complete")
def complete_task(task_id: int, body: Optional[TaskComplete] = None, db: Session = Depends(get_db)):
    body = body or TaskComplete()
    log_id = store.complete_task(db, task_id, DEFAULT_USER_ID, hours_spent=body.hours_spent, notes=body.notes)
    if log_id is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"message": "Task completed successfully", "log_id": log_id}
