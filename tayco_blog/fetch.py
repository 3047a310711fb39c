from __future__ import annotations

from datetime import date
from typing import Any, List, Optional, Sequence
import logging
import re

import requests

from .errors import FetchError, ParseError
from .types import Post

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"
CONTENT_SUFFIX = ".md"
DEFAULT_TIMEOUT = 20

# "January 02, 2023": full English month name, two-digit day, four-digit year.
DATE_PATTERN = re.compile(r"([A-Za-z]+) ([0-9]{2}), ([0-9]{4})")
MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


def parse_upload_date(text: Any) -> date:
    """Parse an index ``uploadDate`` value such as ``"March 14, 2024"``."""

    if not isinstance(text, str):
        raise ParseError(f"uploadDate must be a string, got {type(text).__name__}")

    match = DATE_PATTERN.fullmatch(text)
    if not match:
        raise ParseError(f"uploadDate {text!r} does not match 'Month DD, YYYY'")

    month_name, day, year = match.groups()
    try:
        month = MONTHS.index(month_name.lower()) + 1
    except ValueError:
        raise ParseError(f"Unknown month in uploadDate {text!r}") from None

    try:
        return date(int(year), month, int(day))
    except ValueError as exc:
        raise ParseError(f"Invalid uploadDate {text!r}: {exc}") from exc


def _required_str(record: dict, key: str, position: int) -> str:
    value = record.get(key)
    if not isinstance(value, str):
        raise ParseError(f"Index entry {position} is missing string field '{key}'")
    return value


def _parse_post(record: Any, position: int) -> Post:
    if not isinstance(record, dict):
        raise ParseError(f"Index entry {position} is not an object")

    subtitle = record.get("subtitle")
    image_url = record.get("imageUrl")
    if subtitle is not None and not isinstance(subtitle, str):
        raise ParseError(f"Index entry {position} has a non-string 'subtitle'")
    if image_url is not None and not isinstance(image_url, str):
        raise ParseError(f"Index entry {position} has a non-string 'imageUrl'")
    subtitle = subtitle or ""
    image_url = image_url or None

    try:
        upload_date = parse_upload_date(record.get("uploadDate"))
    except ParseError as exc:
        raise ParseError(f"Index entry {position}: {exc}") from exc

    return Post(
        id=_required_str(record, "id", position),
        title=_required_str(record, "title", position),
        subtitle=subtitle,
        image_url=image_url,
        upload_date=upload_date,
    )


def parse_index(payload: Any) -> List[Post]:
    """Turn a decoded index document into unlinked posts, in index order.

    Any malformed entry fails the whole index.
    """

    if not isinstance(payload, list):
        raise ParseError("Index document must be a JSON array")

    posts: List[Post] = []
    seen_ids: set[str] = set()
    for position, record in enumerate(payload):
        post = _parse_post(record, position)
        key = post.id.casefold()
        if key in seen_ids:
            raise ParseError(f"Duplicate post id {post.id!r} in index")
        seen_ids.add(key)
        posts.append(post)
    return posts


def link_chronologically(posts: Sequence[Post]) -> None:
    """Set ``previous``/``next`` on every post from a single date sort.

    Posts sharing an upload date keep their index order.
    """

    # sorted() is stable, so equal dates stay in index order.
    ordered = sorted(posts, key=lambda p: p.upload_date)

    for post in ordered:
        post.previous = None
        post.next = None
    for earlier, later in zip(ordered, ordered[1:]):
        earlier.next = later
        later.previous = earlier

    logger.debug("Linked %d posts chronologically", len(ordered))


class BlogRepository:
    """Reads the index and post bodies from a static HTTP endpoint."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must not be empty")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url_for(self, filename: str) -> str:
        return f"{self.base_url}/{filename}"

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, exc) from exc
        return response

    def get_all(self) -> List[Post]:
        url = self.url_for(INDEX_FILENAME)
        response = self._get(url)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"Index is not valid JSON: {exc}", url=url) from exc

        try:
            posts = parse_index(payload)
        except ParseError as exc:
            raise ParseError(str(exc), url=url) from exc

        logger.debug("Fetched %d posts from %s", len(posts), url)
        return posts

    def get_content(self, post_id: str) -> str:
        return self._get(self.url_for(f"{post_id}{CONTENT_SUFFIX}")).text


def load_index(
    base_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Post]:
    """Fetch ``{base_url}/index.json`` and return fully linked posts."""

    posts = BlogRepository(base_url, session=session, timeout=timeout).get_all()
    link_chronologically(posts)
    return posts
