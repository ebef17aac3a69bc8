import pytest

from triagebot.parser.commands.simple import (
    CloseCommand,
    PrioritizeCommand,
    SecondCommand,
    parse_close,
    parse_prioritize,
    parse_second,
)
from triagebot.parser.token import Tokenizer


def test_close():
    assert parse_close(Tokenizer("close")) == CloseCommand()


def test_close_other_word():
    assert parse_close(Tokenizer("closed")) is None


def test_prioritize():
    assert parse_prioritize(Tokenizer("prioritize")) == PrioritizeCommand()


def test_prioritize_other_word():
    assert parse_prioritize(Tokenizer("priority")) is None


@pytest.mark.parametrize("text", ["second", "seconded", "second."])
def test_second(text):
    assert parse_second(Tokenizer(text)) == SecondCommand()


def test_second_other_word():
    assert parse_second(Tokenizer("third")) is None


def test_punctuation_is_not_a_command():
    assert parse_close(Tokenizer(".")) is None
    assert parse_second(Tokenizer("")) is None


@pytest.mark.parametrize(
    "parser, text",
    [(parse_close, "close"), (parse_prioritize, "prioritize"), (parse_second, "second")],
)
def test_tokenizer_not_advanced(parser, text):
    tok = Tokenizer(text)
    before = tok.position()
    assert parser(tok) is not None
    assert tok.position() == before