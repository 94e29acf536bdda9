"""Personal name value object."""

from dataclasses import dataclass

from rental_registry.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Name:
    """A tenant's first and last name.

    Equality is an exact, case-sensitive match of both parts, so
    ``Name("thomas", "hague") != Name("Thomas", "Hague")``.
    """

    first_name: str
    last_name: str

    def __post_init__(self) -> None:
        for label, value in (("First name", self.first_name), ("Last name", self.last_name)):
            if value is None:
                raise InvalidArgumentError(f"{label} cannot be None")
            if not isinstance(value, str):
                raise InvalidArgumentError(f"{label} must be a string, got {type(value).__name__}")
            if not value:
                raise InvalidArgumentError(f"{label} cannot be empty")

    @property
    def initials(self) -> str:
        return self.first_name[0] + self.last_name[0]

    @classmethod
    def parse(cls, text: str | None) -> "Name":
        """Build a Name from ``"First Last"`` split on a single space."""
        if text is None:
            raise InvalidArgumentError("Name cannot be None")
        if not text:
            raise InvalidArgumentError("Name cannot be empty")
        parts = text.split(" ")
        if len(parts) != 2:
            raise InvalidArgumentError("Name must contain a first and last name")
        return cls(parts[0], parts[1])

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"
