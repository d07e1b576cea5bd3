from dataclasses import dataclass, asdict
from typing import Optional
from smart_campus.utils.errors import ValidationError
from smart_campus.utils.validation_helpers import require_text

AVAILABLE = "Available"
CHECKED_OUT = "Checked Out"
MAINTENANCE = "Maintenance"

# statuses a caller may set directly; checkout and return manage the rest
SETTABLE_STATUSES = (AVAILABLE, MAINTENANCE)


def validate_settable_status(status):
    status = require_text(status, "Status")
    if status not in SETTABLE_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(SETTABLE_STATUSES)}")
    return status


@dataclass
class Resource:
    """A checkable item such as a book, lab equipment or an electronics kit."""
    id: str
    name: str
    type: str
    status: str = AVAILABLE
    checked_out_by: Optional[str] = None

    def __post_init__(self):
        self.id = require_text(self.id, "ID")
        self.name = require_text(self.name, "Name")
        self.type = require_text(self.type, "Type")
        self.status = require_text(self.status, "Status")

    @property
    def is_checked_out(self) -> bool:
        return self.status.startswith(CHECKED_OUT)

    def update(self, name: str, type: str, status: str):
        name = require_text(name, "Name")
        type = require_text(type, "Type")
        if self.is_checked_out:
            if require_text(status, "Status") != self.status:
                raise ValidationError(f"Resource {self.id} is checked out; return it before changing its status")
            status = self.status
        else:
            status = validate_settable_status(status)
        self.name, self.type, self.status = name, type, status

    def check_out(self, student_id: str):
        if self.status != AVAILABLE:
            raise ValidationError(f"Resource {self.id} is not available for checkout")
        self.checked_out_by = student_id
        self.status = f"{CHECKED_OUT} to {student_id}"

    def check_in(self):
        if not self.is_checked_out:
            raise ValidationError(f"Resource {self.id} is not checked out")
        self.checked_out_by = None
        self.status = AVAILABLE

    def matches(self, term: str) -> bool:
        term = term.strip().lower()
        return self.id.lower() == term or term in self.name.lower()

    def to_record(self) -> dict:
        return asdict(self)
