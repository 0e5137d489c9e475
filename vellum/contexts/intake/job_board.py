"""
Job application board.

Tracks job applications across status columns (Wishlist, Applied,
Interview, Offer, Rejected) with a dense 0-based order inside each column.

Persistence is a JSON key/value file (JOB_STORAGE_PATH, default
outs/job_storage.json). The whole board is stored as one JSON blob under the
key "job-tracker.jobs". A missing or unreadable blob falls back to seed jobs.

Usage:
    from vellum.contexts.intake.job_board import JobBoard, JobStatus

    board = JobBoard.load()
    job = board.add_job()
    board.update_job(job.id, company="Acme", status=JobStatus.APPLIED)
"""

import json
import os
import shutil
import tempfile
import uuid
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv

from vellum.contexts.intake.logger import _log_warning, log_board_change, log_board_loaded
from vellum.utils.exceptions import NotFoundError, ValidationError
from vellum.utils.timestamp import now_exact

load_dotenv()
JOB_STORAGE_PATH = Path(os.getenv("JOB_STORAGE_PATH", "outs/job_storage.json"))

STORAGE_KEY = "job-tracker.jobs"


class JobStatus(str, Enum):
    WISHLIST = "Wishlist"
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


class Priority(str, Enum):
    LOW = "Low"
    MED = "Med"
    HIGH = "High"


# Board column order
COLUMNS = list(JobStatus)


@dataclass(frozen=True)
class Job:
    """
    One tracked application.

    Attributes:
        id: Stable identifier
        company: Company name
        title: Role title
        location: Location (optional)
        url: Posting URL (optional)
        status: Board column
        priority: Low, Med or High
        updated_at: ISO 8601 timestamp of the last change
        notes: Free-text notes
        order: Position within the status column (0-based)
    """

    id: str
    company: str
    title: str
    status: JobStatus = JobStatus.WISHLIST
    priority: Priority = Priority.MED
    updated_at: str = ""
    location: str = ""
    url: str = ""
    notes: str = ""
    order: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["priority"] = self.priority.value
        data["updatedAt"] = data.pop("updated_at")
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Job":
        """
        Build a Job from its stored form.

        Raises:
            ValueError: If status or priority is not a known value
            KeyError: If id is missing
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        values["updated_at"] = data.get("updatedAt", data.get("updated_at", ""))
        values["status"] = JobStatus(data.get("status", JobStatus.WISHLIST.value))
        values["priority"] = Priority(data.get("priority", Priority.MED.value))
        values["order"] = int(data.get("order") or 0)
        for key in ("company", "title", "location", "url", "notes"):
            values[key] = str(values.get(key) or "")
        return cls(id=str(data["id"]), **{k: v for k, v in values.items() if k != "id"})


def normalize_orders(jobs: List[Job]) -> List[Job]:
    """
    Re-derive dense 0-based order within each status column.

    Relative order inside a column is kept (stable for equal orders); the
    list itself keeps its original sequence.
    """
    positions: Dict[str, int] = {}
    for status in COLUMNS:
        column = sorted((job for job in jobs if job.status == status), key=lambda job: job.order)
        for index, job in enumerate(column):
            positions[job.id] = index
    return [replace(job, order=positions.get(job.id, 0)) for job in jobs]


def seed_jobs() -> List[Job]:
    """Example jobs shown on a fresh board."""
    timestamp = now_exact()
    return [
        Job("1", "Acme Corp", "Software Engineer (Intern)", JobStatus.WISHLIST, Priority.HIGH,
            timestamp, location="Remote"),
        Job("2", "Globex", "Data Scientist", JobStatus.APPLIED, Priority.MED,
            timestamp, location="Boston, MA", notes="Applied via referral"),
        Job("3", "Initech", "Full-Stack Engineer", JobStatus.INTERVIEW, Priority.HIGH,
            timestamp, location="NYC", notes="Phone screen scheduled"),
        Job("4", "Umbrella", "ML Engineer", JobStatus.OFFER, Priority.HIGH,
            timestamp, location="Remote", notes="Offer received - review comp"),
    ]


class JsonStorage:
    """
    String key/value store backed by one JSON file.

    Writes go to a temporary file that replaces the original, so a failed
    write leaves the previous contents intact.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or JOB_STORAGE_PATH)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Storage file is not a JSON object: {self.path}")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            _log_warning(f"Overwriting unreadable storage file {self.path}")
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(suffix=".json", dir=self.path.parent, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            shutil.move(temp_path, self.path)
        except Exception:
            # Clean up temp file if write failed
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise


class JobBoard:
    """
    Job list with persistence.

    Every mutation normalizes column order and saves immediately.
    """

    def __init__(self, jobs: List[Job], storage: Optional[JsonStorage] = None):
        self.storage = storage or JsonStorage()
        self.jobs: List[Job] = normalize_orders(jobs)

    @classmethod
    def load(cls, storage: Optional[JsonStorage] = None) -> "JobBoard":
        """Load the board, falling back to seed jobs if nothing valid is stored."""
        storage = storage or JsonStorage()
        try:
            raw = storage.get(STORAGE_KEY)
            if raw:
                jobs = [Job.from_dict(item) for item in json.loads(raw)]
                log_board_loaded(len(jobs), str(storage.path))
                return cls(jobs, storage)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            _log_warning(f"Stored jobs unreadable ({e}); using seed jobs")
        return cls(seed_jobs(), storage)

    def save(self) -> None:
        self.storage.set(STORAGE_KEY, json.dumps([job.to_dict() for job in self.jobs]))

    def _commit(self, jobs: List[Job]) -> None:
        self.jobs = normalize_orders(jobs)
        self.save()

    def get(self, job_id: str) -> Job:
        for job in self.jobs:
            if job.id == job_id:
                return job
        raise NotFoundError(f"No job with id {job_id}")

    def jobs_in(self, status: JobStatus) -> List[Job]:
        """Jobs of one column, in board order."""
        return sorted((job for job in self.jobs if job.status == JobStatus(status)), key=lambda job: job.order)

    def columns(self) -> Dict[JobStatus, List[Job]]:
        return {status: self.jobs_in(status) for status in COLUMNS}

    def add_job(
        self,
        company: str = "New Company",
        title: str = "New Role",
        location: str = "",
        url: str = "",
        priority: Priority = Priority.MED,
        notes: str = "",
    ) -> Job:
        """Add a job at the top of the Wishlist column."""
        job = Job(
            id=uuid.uuid4().hex,
            company=company,
            title=title,
            status=JobStatus.WISHLIST,
            priority=Priority(priority),
            updated_at=now_exact(),
            location=location,
            url=url,
            notes=notes,
            order=-1,
        )
        self._commit([job, *self.jobs])
        log_board_change("Added", job.id, f"{job.company} / {job.title}")
        return self.get(job.id)

    def update_job(self, job_id: str, **changes: Any) -> Job:
        """
        Change fields of a job and touch its updated_at.

        Raises:
            NotFoundError: If the id is unknown
            ValidationError: If a field name, status or priority is invalid
        """
        self.get(job_id)
        known = {f.name for f in fields(Job)} - {"id", "updated_at"}
        unknown = set(changes) - known
        if unknown:
            raise ValidationError(f"Unknown job fields: {', '.join(sorted(unknown))}")
        try:
            if "status" in changes:
                changes["status"] = JobStatus(changes["status"])
            if "priority" in changes:
                changes["priority"] = Priority(changes["priority"])
        except ValueError as e:
            raise ValidationError(str(e)) from e

        timestamp = now_exact()
        self._commit(
            [replace(job, **changes, updated_at=timestamp) if job.id == job_id else job for job in self.jobs]
        )
        log_board_change("Updated", job_id, ", ".join(sorted(changes)))
        return self.get(job_id)

    def remove_job(self, job_id: str) -> None:
        """Remove a job (no-op for unknown ids)."""
        self._commit([job for job in self.jobs if job.id != job_id])
        log_board_change("Removed", job_id)

    def set_ordering(
        self,
        order_ids_by_status: Mapping[JobStatus, List[str]],
        status_by_id: Optional[Mapping[str, JobStatus]] = None,
    ) -> None:
        """
        Apply a new arrangement of the board.

        Args:
            order_ids_by_status: Job ids per column, in display order
            status_by_id: Jobs that changed column

        Jobs mentioned in either mapping get a fresh updated_at.
        """
        status_by_id = {job_id: JobStatus(status) for job_id, status in (status_by_id or {}).items()}
        order_index = {}
        for ids in order_ids_by_status.values():
            for index, job_id in enumerate(ids):
                order_index[job_id] = index

        timestamp = now_exact()
        updated = []
        for job in self.jobs:
            touched = job.id in status_by_id or job.id in order_index
            updated.append(
                replace(
                    job,
                    status=status_by_id.get(job.id, job.status),
                    order=order_index.get(job.id, job.order),
                    updated_at=timestamp if touched else job.updated_at,
                )
            )
        self._commit(updated)

    def move_job(self, job_id: str, status: JobStatus, index: Optional[int] = None) -> Job:
        """
        Move a job to a column position (end of the column by default).

        Raises:
            NotFoundError: If the id is unknown
        """
        job = self.get(job_id)
        target = JobStatus(status)

        ids = {column: [j.id for j in jobs] for column, jobs in self.columns().items()}
        ids[job.status].remove(job_id)
        position = len(ids[target]) if index is None else max(0, min(index, len(ids[target])))
        ids[target].insert(position, job_id)

        status_by_id = {job_id: target} if target != job.status else None
        self.set_ordering({column: ids[column] for column in {job.status, target}}, status_by_id)
        log_board_change("Moved", job_id, f"{target.value} #{position}")
        return self.get(job_id)
