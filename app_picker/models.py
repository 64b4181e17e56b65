"""Data models for application discovery."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WorkerState(str, Enum):
    """Lifecycle state of a discovery worker."""

    RUNNING = "RUNNING"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    @property
    def is_terminal(self) -> bool:
        """True for states a worker never leaves."""
        return self in (WorkerState.CANCELLED, WorkerState.COMPLETED)


class SortOrder(str, Enum):
    """Orderings offered when listing discovered applications."""

    LAST_ACCESS = "last_access"
    NAME = "name"
    NAME_DESC = "name_desc"

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        """Parse a user-supplied sort name (accepts dashes, any case)."""
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            choices = ", ".join(order.value for order in cls)
            raise ValueError(f"Invalid sort order '{value}'. Must be one of: {choices}")


class DiscoveredItem(BaseModel):
    """A plausible application executable found on disk."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "path": "C:\\Games\\Half-Life 2\\hl2.exe",
                "display_name": "Half-Life 2 (hl2.exe)",
                "icon": None,
                "last_access": "2026-02-05T10:30:00"
            }
        }
    )

    path: str = Field(description="Absolute path to the executable (unique key)")
    display_name: str = Field(description="Product description or title-cased file name, followed by the file name")
    icon: bytes | None = Field(default=None, description="PNG-encoded icon, None when no icon could be extracted")
    last_access: str = Field(default="", description="Last access time as YYYY-MM-DDTHH:MM:SS, empty if unknown")

    @property
    def has_icon(self) -> bool:
        return self.icon is not None

    def to_record(self) -> dict[str, Any]:
        """JSON-safe representation without the raw icon bytes."""
        record = self.model_dump(exclude={"icon"})
        record["has_icon"] = self.has_icon
        return record


@dataclass
class ScanStats:
    """Counters collected by one discovery session."""

    directories_visited: int = 0
    directories_skipped: int = 0
    files_seen: int = 0
    candidates: int = 0
    batches: int = 0
