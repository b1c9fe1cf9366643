import pytest

from core.errors import ValidationError
from clients.github.inputs import parse_repo, normalize_ref


def test_parse_repo_slug_and_url_variants():
    assert parse_repo("octocat/Hello-World") == ("octocat", "Hello-World")
    assert parse_repo(" octocat/Hello-World ") == ("octocat", "Hello-World")
    assert parse_repo("https://github.com/octocat/Hello-World") == ("octocat", "Hello-World")
    assert parse_repo("https://github.com/octocat/Hello-World/") == ("octocat", "Hello-World")
    assert parse_repo("https://github.com/octocat/Hello-World.git") == ("octocat", "Hello-World")


@pytest.mark.parametrize("bad", ["", "octocat", "a/b/c", "https://gitlab.com/a/b", "not a repo"])
def test_parse_repo_invalid(bad):
    with pytest.raises(ValidationError):
        parse_repo(bad)


def test_normalize_ref():
    assert normalize_ref(" main ") == "main"
    assert normalize_ref("feature/x") == "feature/x"
    with pytest.raises(ValidationError):
        normalize_ref("   ")
    with pytest.raises(ValidationError):
        normalize_ref(None)
