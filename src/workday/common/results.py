from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ItemError:
    key: str
    message: str


@dataclass
class BatchResult:
    """Outcome of a bulk operation that keeps going after per-item failures."""

    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict:
        return {
            "processed": list(self.processed),
            "skipped": list(self.skipped),
            "errors": [{"key": e.key, "message": e.message} for e in self.errors],
        }
