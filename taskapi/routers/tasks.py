import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.orm import Session

from taskapi.database import get_db
from taskapi.errors import RepositoryError, TaskNotFoundError
from taskapi.repositories.task import SqlTaskRepository, TaskRepository
from taskapi.schemas.task import ErrorOut, TaskCreate, TaskOut, TaskUpdate

logger = logging.getLogger(__name__)

# tasks.id is a Postgres INTEGER
MAX_TASK_ID = 2**31 - 1

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return SqlTaskRepository(db)


def _not_found(task_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"task {task_id} not found")


@router.api_route("/", methods=["GET", "PUT", "DELETE"], include_in_schema=False)
def missing_task_id():
    # "/tasks/" is an item path with an empty id, not the collection
    raise HTTPException(status_code=400, detail="invalid task ID")


@router.get("", response_model=List[TaskOut])
def list_tasks(repo: TaskRepository = Depends(get_task_repository)):
    try:
        return repo.list_all()
    except RepositoryError:
        logger.exception("list tasks failed")
        raise HTTPException(status_code=500, detail="failed to query tasks") from None


@router.post("", response_model=TaskOut, status_code=201)
def create_task(task: TaskCreate, repo: TaskRepository = Depends(get_task_repository)):
    try:
        return repo.create(task.user_id, task.title)
    except RepositoryError:
        logger.exception("create task failed for user_id=%s", task.user_id)
        raise HTTPException(status_code=500, detail="failed to create task") from None


@router.get("/{task_id}", response_model=TaskOut, responses={404: {"model": ErrorOut}})
def get_task(task_id: int = Path(..., gt=0, le=MAX_TASK_ID), repo: TaskRepository = Depends(get_task_repository)):
    try:
        return repo.get_by_id(task_id)
    except TaskNotFoundError:
        raise _not_found(task_id) from None
    except RepositoryError:
        logger.exception("get task %s failed", task_id)
        raise HTTPException(status_code=500, detail="failed to fetch task") from None


@router.put("/{task_id}", response_model=TaskOut, responses={404: {"model": ErrorOut}})
def update_task(
    body: TaskUpdate,
    task_id: int = Path(..., gt=0, le=MAX_TASK_ID),
    repo: TaskRepository = Depends(get_task_repository),
):
    """Write only the fields present in the body, then return the stored task.

    An empty body writes nothing but still answers with the current record.
    """
    changes = body.changes()
    if changes:
        try:
            repo.update_fields(task_id, changes)
        except RepositoryError:
            logger.exception("update task %s failed", task_id)
            raise HTTPException(status_code=500, detail="failed to update task") from None

    # the row may have vanished (or never existed); the re-read decides
    try:
        return repo.get_by_id(task_id)
    except TaskNotFoundError:
        raise _not_found(task_id) from None
    except RepositoryError:
        logger.exception("re-read of task %s failed", task_id)
        raise HTTPException(status_code=500, detail="failed to update task") from None


@router.delete("/{task_id}", status_code=204, responses={404: {"model": ErrorOut}})
def delete_task(task_id: int = Path(..., gt=0, le=MAX_TASK_ID), repo: TaskRepository = Depends(get_task_repository)):
    try:
        removed = repo.delete_by_id(task_id)
    except RepositoryError:
        logger.exception("delete task %s failed", task_id)
        raise HTTPException(status_code=500, detail="failed to delete task") from None
    if removed == 0:
        raise _not_found(task_id)
    return Response(status_code=204)
