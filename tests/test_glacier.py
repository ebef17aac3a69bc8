import pytest

from triagebot.parser.commands.glacier import GlacierCommand, ParseError, parse
from triagebot.parser.error import CommandError
from triagebot.parser.token import Tokenizer

GIST = "https://gist.github.com/rust-play/89d6c8a2398dd2dd5fcb7ef3e8109c7b"


def test_glacier_empty():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("glacier"))
    assert exc.value.source is ParseError.NO_LINK


def test_glacier_invalid():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer("glacier hello"))
    assert exc.value.source is ParseError.INVALID_LINK


def test_glacier_valid():
    assert parse(Tokenizer(f'glacier "{GIST}"')) == GlacierCommand(GIST)


def test_glacier_quoted_non_gist():
    with pytest.raises(CommandError) as exc:
        parse(Tokenizer('glacier "https://example.com/code.rs"'))
    assert exc.value.source is ParseError.INVALID_LINK


def test_not_glacier():
    assert parse(Tokenizer("close")) is None