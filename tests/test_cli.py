from unittest.mock import patch

import pytest

from tayco_blog import cli
from tayco_blog.service import create_service


@pytest.fixture
def wired(endpoint, base_url):
    """Route the CLI's service through the fake endpoint."""

    def factory(url, timeout):
        assert url == base_url
        return create_service(url, session=endpoint.session, timeout=timeout)

    with patch.object(cli, "create_service", side_effect=factory):
        yield endpoint


def test_list_prints_posts_newest_first(wired, base_url, capsys):
    cli.main(["--base-url", base_url, "list"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "[load] posts: 3"
    assert lines[1].startswith("2023-03-01  c  Third")
    assert lines[2] == "2023-02-01  b  Second: The sequel  (prev: a, next: c)"
    assert lines[3].startswith("2023-01-01  a  First  (prev: -")


def test_list_ascending_with_limit(wired, base_url, capsys):
    cli.main(["--base-url", base_url, "list", "--order", "asc", "--limit", "1"])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[1] == "2023-01-01  a  First  (prev: -, next: b)"


@pytest.mark.parametrize("limit", ["0", "-1", "many"])
def test_list_rejects_non_positive_limit(base_url, limit):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--base-url", base_url, "list", "--limit", limit])

    assert exc.value.code == 2


def test_show_prints_content(wired, base_url, capsys):
    wired.serve("a.md", "# First post\n\nHello.")

    cli.main(["--base-url", base_url, "show", "A"])

    out = capsys.readouterr().out
    assert out.startswith("# First\n2023-01-01  prev: -  next: b\n")
    assert "image: https://img.example.com/a.png" in out
    assert out.rstrip().endswith("Hello.")


def test_show_unknown_post_exits(wired, base_url):
    with pytest.raises(SystemExit, match="no such post"):
        cli.main(["--base-url", base_url, "show", "zzz"])


def test_fetch_error_exits(wired, base_url):
    with pytest.raises(SystemExit, match=r"\[error\] Failed to fetch"):
        cli.main(["--base-url", base_url, "show", "b"])


def test_missing_base_url_is_usage_error(monkeypatch):
    monkeypatch.delenv("TAYCO_BLOG_BASE_URL", raising=False)

    with pytest.raises(SystemExit) as exc:
        cli.main(["list"])

    assert exc.value.code == 2
