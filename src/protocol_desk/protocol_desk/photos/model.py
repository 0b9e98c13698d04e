from __future__ import annotations

from dataclasses import dataclass, field

from ..visitors.model import VisitorPhoto


@dataclass(frozen=True)
class PhotoFile:
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class PhotoError:
    filename: str
    message: str


@dataclass(frozen=True)
class PhotoBatchResult:
    photos: tuple[VisitorPhoto, ...] = field(default_factory=tuple)
    errors: tuple[PhotoError, ...] = field(default_factory=tuple)
    completed: int = 0
    total: int = 0

    @property
    def all_failed(self) -> bool:
        return self.total > 0 and not self.photos
