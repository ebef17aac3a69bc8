from triagebot.parser.mentions import get_mentions


def test_mentions_in_code_ignored():
    assert get_mentions("@rust-lang/libs `@user`") == ["rust-lang/libs"]
    assert get_mentions("@user `@user`") == ["user"]
    assert get_mentions("`@user`") == []


def test_italics():
    assert get_mentions("*@rust-lang/libs*") == ["rust-lang/libs"]


def test_slash():
    assert get_mentions("@rust-lang/libs/@rust-lang/release") == [
        "rust-lang/libs",
        "rust-lang/release",
    ]


def test_no_panic_lone():
    assert get_mentions("@ `@`") == []


def test_no_email():
    assert get_mentions("user@example.com") == []


def test_mentions_in_code_block_ignored():
    assert get_mentions("```\n@user\n```\n@other") == ["other"]


def test_mentions_in_quote_ignored():
    assert get_mentions("> @user said\n\n@other") == ["other"]


def test_mention_order_is_preserved():
    assert get_mentions("@b then @a") == ["b", "a"]