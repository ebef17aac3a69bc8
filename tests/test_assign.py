import pytest

from triagebot.parser.commands.assign import (
    AssignOwn,
    AssignRelease,
    AssignUser,
    ParseError,
    ReviewName,
    parse,
    parse_review,
)
from triagebot.parser.error import CommandError
from triagebot.parser.token import Tokenizer


def test_claim_with_dot():
    tok = Tokenizer("claim.")
    assert parse(tok) == AssignOwn()
    assert tok.position() == 6


def test_claim():
    assert parse(Tokenizer("claim")) == AssignOwn()


def test_assign_user():
    assert parse(Tokenizer("assign @user")) == AssignUser("user")


def test_assign_bare_at():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("assign @"))
    assert exc.value.source is ParseError.MENTION_USER
    assert exc.value.position == 8


def test_assign_without_at():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("assign user"))
    assert exc.value.source is ParseError.MENTION_USER


def test_assign_no_user():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("assign ."))
    assert exc.value.source is ParseError.NO_USER


def test_release():
    assert parse(Tokenizer("release-assignment")) == AssignRelease()


def test_claim_expected_end():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("claim it"))
    assert exc.value.source is ParseError.EXPECTED_END


def test_unrelated():
    assert parse(Tokenizer("hello")) is None


@pytest.mark.parametrize(
    ("text", "name"),
    [
        ("octocat", "octocat"),
        ("@octocat", "octocat"),
        ("rust-lang/compiler", "rust-lang/compiler"),
        ("@rust-lang/cargo", "rust-lang/cargo"),
        ("abc xyz", "abc"),
        ("@user?", "user"),
        ("@user.", "user"),
        ("@user!", "user"),
    ],
)
def test_review_names(text, name):
    assert parse_review(Tokenizer(text)) == ReviewName(name)


@pytest.mark.parametrize("text", ["", "@", "@ user"])
def test_review_names_errs(text):
    with pytest.raises(CommandError) as exc:
        parse_review(Tokenizer(text))
    assert exc.value.source is ParseError.NO_USER


def test_review_tokenizer_error_becomes_no_user():
    with pytest.raises(CommandError) as exc:
        parse_review(Tokenizer('"open'))
    assert exc.value.source is ParseError.NO_USER