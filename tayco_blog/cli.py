from __future__ import annotations

from argparse import ArgumentParser, ArgumentTypeError, Namespace
from typing import List, Optional
import logging

from .config import resolve_settings
from .errors import BlogError
from .service import BlogService, create_service
from .types import Post


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Browse blog posts published as a static index.json plus Markdown files."
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Blog endpoint prefix (default: $TAYCO_BLOG_BASE_URL)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: $TAYCO_BLOG_TIMEOUT or 20)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List posts by upload date")
    list_parser.add_argument(
        "--order",
        choices=("asc", "desc"),
        default="desc",
        help="Sort posts by date: asc or desc (default: desc)",
    )
    list_parser.add_argument(
        "--limit", type=_positive_int, default=None, help="Only print the first N posts"
    )

    show_parser = commands.add_parser("show", help="Print one post and its Markdown body")
    show_parser.add_argument("post_id", help="Post id (case-insensitive)")

    return parser


def _chronological(posts: List[Post]) -> List[Post]:
    earliest = [p for p in posts if p.previous is None]
    ordered: List[Post] = []
    current = earliest[0] if earliest else None
    while current is not None:
        ordered.append(current)
        current = current.next
    return ordered


def _neighbour(post: Optional[Post]) -> str:
    return post.id if post else "-"


def run_list(service: BlogService, args: Namespace) -> None:
    posts = _chronological(list(service.get_all()))
    print(f"[load] posts: {len(posts)}")

    if args.order == "desc":
        posts = list(reversed(posts))
    if args.limit is not None:
        posts = posts[: args.limit]

    for post in posts:
        print(
            f"{post.upload_date.isoformat()}  {post.id}  {post.name}"
            f"  (prev: {_neighbour(post.previous)}, next: {_neighbour(post.next)})"
        )


def run_show(service: BlogService, args: Namespace) -> None:
    post = service.find_by_id(args.post_id)
    if post is None:
        raise SystemExit(f"[error] no such post: {args.post_id}")

    content = service.get_content(post.id)

    print(f"# {post.name}")
    print(f"{post.upload_date.isoformat()}  prev: {_neighbour(post.previous)}  next: {_neighbour(post.next)}")
    if post.image_url:
        print(f"image: {post.image_url}")
    print()
    print(content)


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = resolve_settings(args.base_url, args.timeout)
    except ValueError as exc:
        parser.error(str(exc))

    service = create_service(settings.base_url, timeout=settings.timeout)
    try:
        if args.command == "list":
            run_list(service, args)
        else:
            run_show(service, args)
    except BlogError as exc:
        raise SystemExit(f"[error] {exc}") from exc


if __name__ == "__main__":
    main()
