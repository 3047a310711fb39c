from __future__ import annotations

from concurrent.futures import Future
from typing import Optional, Tuple
import logging
import threading

import requests

from .fetch import DEFAULT_TIMEOUT, BlogRepository, link_chronologically
from .types import Post, PostRepository

logger = logging.getLogger(__name__)


class BlogService:
    """In-memory cache of the linked post set, loaded at most once.

    The first read moves the cache from unloaded to loading; concurrent
    readers wait on the same future instead of fetching again. A failed
    load drops back to unloaded so the next read retries.
    """

    def __init__(self, repository: PostRepository) -> None:
        self._repository = repository
        self._lock = threading.Lock()
        self._pending: Optional[Future[Tuple[Post, ...]]] = None
        self._posts: Optional[Tuple[Post, ...]] = None

    @property
    def loaded(self) -> bool:
        return self._posts is not None

    def get_all(self) -> Tuple[Post, ...]:
        return self._ensure_loaded()

    def find_by_id(self, post_id: str) -> Optional[Post]:
        key = post_id.casefold()
        for post in self._ensure_loaded():
            if post.id.casefold() == key:
                return post
        return None

    def get_content(self, post_id: str) -> str:
        return self._repository.get_content(post_id)

    def _ensure_loaded(self) -> Tuple[Post, ...]:
        posts = self._posts
        if posts is not None:
            return posts

        with self._lock:
            if self._posts is not None:
                return self._posts
            future = self._pending
            owner = future is None
            if owner:
                future = self._pending = Future()

        if not owner:
            return future.result()

        try:
            posts = tuple(self._repository.get_all())
            link_chronologically(posts)
        except BaseException as exc:
            with self._lock:
                self._pending = None
            future.set_exception(exc)
            logger.debug("Post index load failed: %s", exc)
            raise

        with self._lock:
            self._posts = posts
            self._pending = None
        future.set_result(posts)
        logger.info("Loaded %d posts", len(posts))
        return posts


def create_service(
    base_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> BlogService:
    """Wire an HTTP repository for ``base_url`` into a fresh cache."""

    return BlogService(BlogRepository(base_url, session=session, timeout=timeout))
