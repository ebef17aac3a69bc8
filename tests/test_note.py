import pytest

from triagebot.parser.commands.note import NoteCommand, ParseError, parse
from triagebot.parser.error import CommandError
from triagebot.parser.token import Tokenizer


def run(text):
    return parse(Tokenizer(text))


def test_summary_word():
    assert run("note summary") == NoteCommand("summary")


def test_summary_quoted():
    assert run('note "a longer title"') == NoteCommand("a longer title")


def test_remove():
    assert run("note remove summary") == NoteCommand("summary", remove=True)


def test_remove_repeated():
    assert run("note remove remove summary") == NoteCommand("summary", remove=True)


def test_remove_quoted():
    assert run('note remove "the title"') == NoteCommand("the title", remove=True)


def test_not_a_note():
    assert run("label +bug") is None


def test_missing_title():
    with pytest.raises(CommandError) as info:
        run("note")
    assert info.value.source is ParseError.MISSING_TITLE


def test_missing_title_after_remove():
    with pytest.raises(CommandError) as info:
        run("note remove.")
    assert info.value.source is ParseError.MISSING_TITLE


def test_tokenizer_not_advanced():
    tok = Tokenizer("note summary")
    before = tok.position()
    assert parse(tok) == NoteCommand("summary")
    assert tok.position() == before


def test_error_message():
    with pytest.raises(CommandError) as info:
        run("note")
    assert "missing required summary title" in str(info.value)