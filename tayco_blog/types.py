from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Protocol


@dataclass(eq=False)
class Post:
    """Metadata for one blog entry listed in the remote index."""

    id: str
    title: str
    upload_date: date
    subtitle: str = ""
    image_url: Optional[str] = None
    # Chronological neighbours, filled in once after the index is loaded.
    previous: Optional[Post] = field(default=None, repr=False)
    next: Optional[Post] = field(default=None, repr=False)

    @property
    def name(self) -> str:
        if not self.subtitle or not self.subtitle.strip():
            return self.title
        return f"{self.title}: {self.subtitle}"


class PostRepository(Protocol):
    """Source of the post index and of individual post bodies."""

    def get_all(self) -> List[Post]: ...

    def get_content(self, post_id: str) -> str: ...
