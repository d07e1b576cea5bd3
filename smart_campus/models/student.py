from dataclasses import dataclass, asdict
from smart_campus.utils.validation_helpers import require_text, validate_edu_email


@dataclass
class Student:
    # Registered student; `id` is unique ignoring case across the directory.
    id: str
    name: str
    degree: str
    email: str

    def __post_init__(self):
        self.id = require_text(self.id, "ID")
        self.name = require_text(self.name, "Name")
        self.degree = require_text(self.degree, "Degree")
        self.email = validate_edu_email(self.email)

    def update(self, name: str, degree: str, email: str):
        # validate everything before touching any field
        name = require_text(name, "Name")
        degree = require_text(degree, "Degree")
        email = validate_edu_email(email)
        self.name, self.degree, self.email = name, degree, email

    def matches(self, term: str) -> bool:
        term = term.strip().lower()
        return self.id.lower() == term or term in self.name.lower()

    def to_record(self) -> dict:
        return asdict(self)
