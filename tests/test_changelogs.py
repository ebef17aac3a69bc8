import pytest

from triagebot.changelogs import Changelog, ChangelogFormat

CONTENT = """\
Version 1.45.2 (2020-08-03)
==========================

* [Fix bindings in tuple struct patterns][74954]
* [Link in another section][69033]
* Very very very very very very very very very very very long line that has some
  linebreaks here and there

[74954]: https://example.com/issues/74954

Version 1.45.1 (2020-07-30)
==========================

* [Fix const propagation with references.][73613]
* [rustfmt accepts rustfmt_skip in cfg_attr again.][73078]

[73613]: https://example.com/pull/73613
[73078]: https://example.com/issues/73078

Version 1.44.0 (2020-06-04)
==========================

Language
--------
- [You can now use `async/.await` with `#[no_std]` enabled.][69033]

**Syntax-only changes**

- [Expansion-driven outline module parsing][69838]
```rust
#[cfg(FALSE)]
mod foo {
    mod bar {
        mod baz; // `foo/bar/baz.rs` doesn't exist, but no error!
    }
}
```

These are still rejected semantically, so you will likely receive an error but
these changes can be seen and parsed by macros and conditional compilation.

Internal Only
-------------
These changes provide no direct user facing benefits, but represent significant
improvements to the internals and overall performance of rustc and
related tools.

- [dep_graph Avoid allocating a set on when the number reads are small.][69778]

[69033]: https://example.com/pull/69033/
[69838]: https://example.com/pull/69838/
[69778]: https://example.com/pull/69778/
"""

EXPECTED_1_45_2 = """\
- [Fix bindings in tuple struct patterns](https://example.com/issues/74954)
- [Link in another section](https://example.com/pull/69033/)
- Very very very very very very very very very very very long line that has some linebreaks here and there
"""


@pytest.fixture
def parsed():
    return Changelog.parse(ChangelogFormat.RUSTC, CONTENT)


def test_changelog_parsing(parsed):
    assert parsed.version("1.45.2") == EXPECTED_1_45_2
    version_1_44_0 = parsed.version("1.44.0")
    assert version_1_44_0 is not None
    assert "Avoid allocating a set" in version_1_44_0


def test_all_versions_found(parsed):
    assert set(parsed.versions) == {"1.45.2", "1.45.1", "1.44.0"}


def test_references_become_inline_links(parsed):
    notes = parsed.version("1.45.1")
    assert "(https://example.com/pull/73613)" in notes
    assert "(https://example.com/issues/73078)" in notes
    assert "[73613]" not in notes


def test_subheadings_and_code_kept(parsed):
    notes = parsed.version("1.44.0")
    assert "## Language" in notes
    assert "## Internal Only" in notes
    assert "```rust\n#[cfg(FALSE)]\n" in notes
    assert "**Syntax-only changes**" in notes


def test_soft_breaks_joined(parsed):
    notes = parsed.version("1.44.0")
    assert "receive an error but these changes" in notes


def test_unknown_version_is_none(parsed):
    assert parsed.version("9.9.9") is None


def test_format_by_name():
    changelog = Changelog.parse("rustc", "# Version 2.0.0\n\n* a\n")
    assert changelog.version("2.0.0") == "- a\n"


def test_unknown_format_rejected():
    with pytest.raises(ValueError):
        Changelog.parse("unknown", "# Version 1.0.0\n")


def test_text_before_first_heading_ignored():
    changelog = Changelog.parse(ChangelogFormat.RUSTC, "intro text\n\n# Version 2.0.0\n\nbody\n")
    assert changelog.versions == {"2.0.0": "body\n"}


def test_heading_without_version_skipped():
    changelog = Changelog.parse(ChangelogFormat.RUSTC, "# Unreleased\n\nstuff\n")
    assert changelog.versions == {}


def test_ordered_list_rendered():
    changelog = Changelog.parse(ChangelogFormat.RUSTC, "# Version 1.0\n\n1. one\n2. two\n")
    assert changelog.version("1.0") == "1. one\n2. two\n"


def test_empty_section():
    changelog = Changelog.parse(ChangelogFormat.RUSTC, "# Version 1.0\n# Version 0.9\n\nx\n")
    assert changelog.version("1.0") == ""
    assert changelog.version("0.9") == "x\n"