from dataclasses import dataclass
from typing import Optional

# Delimiters of the CSV output; never allowed inside a display name.
NAME_DELIMITERS = (",", ";")


@dataclass(frozen=True)
class UserCandidate:
    """An employee eligible for evaluation, as enumerated by the directory."""
    user_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def display_name(self) -> Optional[str]:
        """First and last name without delimiter characters, or None if either is blank."""
        first = (self.first_name or "").strip()
        last = (self.last_name or "").strip()
        if not first or not last:
            return None

        name = f"{first} {last}"
        for delimiter in NAME_DELIMITERS:
            name = name.replace(delimiter, "")
        return name.strip() or None
