import pytest

from triagebot.parser.commands.relabel import (
    LabelDelta,
    ParseError,
    RelabelCommand,
    parse,
    parse_delta,
)
from triagebot.parser.error import CommandError
from triagebot.parser.token import Tokenizer

STANDARD = (
    LabelDelta("T-compiler"),
    LabelDelta("T-lang", add=False),
    LabelDelta("bug"),
)


def _parse(text):
    command = parse(Tokenizer(text))
    return None if command is None else command.deltas


def test_delta_empty():
    tok = Tokenizer("+ testing")
    with pytest.raises(CommandError) as exc:
        parse_delta(tok)
    assert exc.value.source is ParseError.EMPTY_LABEL
    assert exc.value.position == 1


def test_parse_simple():
    assert _parse("modify labels: +T-compiler -T-lang bug.") == STANDARD


def test_parse_leading_to_label():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("modify labels: to -T-lang"))
    assert exc.value.source is ParseError.MISLEADING_TO


def test_parse_no_label_paragraph():
    text = "modify labels yep; Labels do in fact exist but this is not a label paragraph."
    assert _parse(text) == (LabelDelta("yep"),)


@pytest.mark.parametrize(
    "text",
    [
        "modify labels to +T-compiler -T-lang bug",
        "modify labels to: +T-compiler -T-lang bug",
        "label +T-compiler -T-lang bug",
        "labels: +T-compiler -T-lang bug",
        "label to +T-compiler -T-lang bug",
        "label to: +T-compiler -T-lang bug",
    ],
)
def test_parse_variants(text):
    assert _parse(text) == STANDARD


def test_separators():
    assert _parse("labels +a, and -b, c.") == (
        LabelDelta("a"),
        LabelDelta("b", add=False),
        LabelDelta("c"),
    )


def test_not_a_label_command():
    tok = Tokenizer("hello world")
    assert parse(tok) is None
    assert tok.position() == 0


def test_success_advances_tokenizer():
    tok = Tokenizer("labels: +bug. Afterwards")
    assert parse(tok) == RelabelCommand((LabelDelta("bug"),))
    assert tok.input[tok.position():] == " Afterwards"


def test_missing_delta():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("labels: ,"))
    assert exc.value.source is ParseError.EXPECTED_LABEL_DELTA


def test_error_message():
    with pytest.raises(CommandError) as exc:
        parse_delta(Tokenizer("+ testing"))
    assert "empty label" in str(exc.value)