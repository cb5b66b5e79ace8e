"""Task service enforcing per-user ownership."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.config import Settings
from src.exceptions import NotFoundError, ValidationError
from src.models.task import Task
from src.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
BLANK_MESSAGE = "This value should not be blank."


@dataclass
class TaskPage:
    """A page of tasks together with paging totals."""

    items: list[Task]
    total: int
    page: int
    pages: int


class TaskService:
    """Task operations on behalf of a single authenticated user.

    Tasks belonging to anyone else are reported as not found.
    """

    def __init__(self, db: Session, user: User, settings: Settings):
        self.db = db
        self.user = user
        self.title_max_length = settings.task_title_max_length
        self.description_max_length = settings.task_description_max_length

    def validate(self, task: Task) -> None:
        """Raise ValidationError with one message per invalid field."""
        errors = {}
        for field, max_length in (
            ("title", self.title_max_length),
            ("description", self.description_max_length),
        ):
            value = getattr(task, field)
            if value is None or not str(value).strip():
                errors[field] = BLANK_MESSAGE
            elif len(value) > max_length:
                errors[field] = (
                    f"This value is too long. It should have {max_length} characters or less."
                )
        if errors:
            raise ValidationError(field_errors=errors)

    def create(self, title: str | None, description: str | None) -> Task:
        """Create a task owned by the caller."""
        task = Task(
            title=title or "",
            description=description or "",
            is_done=False,
            created_at=datetime.now(UTC),
            user_id=self.user.id,
        )
        self.validate(task)

        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        logger.info(f"User {self.user.id} created task {task.id}")
        return task

    def list(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> TaskPage:
        """Return one page of the caller's tasks in insertion order."""
        if page < 1 or limit < 1:
            raise ValidationError(field_errors={"page" if page < 1 else "limit": "Must be at least 1."})

        query = self.db.query(Task).filter(Task.user_id == self.user.id)
        total = query.count()
        pages = -(-total // limit)

        # Offsets past the end can exceed the database integer range
        offset = (page - 1) * limit
        if offset >= total:
            return TaskPage(items=[], total=total, page=page, pages=pages)

        items = query.order_by(Task.id).offset(offset).limit(min(limit, total - offset)).all()
        return TaskPage(items=items, total=total, page=page, pages=pages)

    def get(self, task_id: int) -> Task:
        """Get one of the caller's tasks."""
        task = self.db.get(Task, task_id)
        if task is None or task.user_id != self.user.id:
            raise NotFoundError("Task not found or access denied")
        return task

    def update(self, task_id: int, fields: dict) -> Task:
        """Replace title, description and done flag, keeping current values for absent fields."""
        task = self.get(task_id)
        for name in ("title", "description", "is_done"):
            value = fields.get(name)
            setattr(task, name, getattr(task, name) if value is None else value)
        return self._save(task)

    def patch(self, task_id: int, fields: dict) -> Task:
        """Apply only the provided fields."""
        task = self.get(task_id)
        for name in ("title", "description", "is_done"):
            if name in fields and fields[name] is not None:
                setattr(task, name, fields[name])
        return self._save(task)

    def delete(self, task_id: int) -> None:
        task = self.get(task_id)
        self.db.delete(task)
        self.db.commit()
        logger.info(f"User {self.user.id} deleted task {task_id}")

    def complete(self, task_id: int) -> Task:
        """Mark a task done. Completing a done task is a no-op."""
        task = self.get(task_id)
        task.is_done = True
        self.db.commit()
        self.db.refresh(task)
        return task

    def _save(self, task: Task) -> Task:
        try:
            self.validate(task)
        except ValidationError:
            self.db.rollback()
            raise
        self.db.commit()
        self.db.refresh(task)
        return task
