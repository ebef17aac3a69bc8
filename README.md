# triagebot

The text-handling core of an issue triage bot. It finds the commands that
people address to the bot in issue and pull-request comments, lists the users
and teams a comment mentions, splits a release-notes changelog into one
section per version, and reads the bot's per-repository `triagebot.toml`
configuration.

Text inside inline code, fenced or indented code blocks and block quotes is
ignored, the same way the hosting site ignores mentions there.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Finding commands in a comment

`triagebot.parser.command.Input` takes the comment text and the names the bot
answers to, and yields one `Command` for each command it finds, in order. A
`Command` holds a `kind` (a `CommandKind`) and a `result`: the parsed command,
or the `CommandError` raised while parsing it. `is_ok()` and `is_err()` tell
the two apart. A command that failed to parse does not consume the text after
it; `Input.remaining()` returns the text not yet consumed.

```python
from triagebot.parser.command import Input

comment = "Looks good. @rustbot label +bug. r? @octocat"
for command in Input(comment, ["rustbot", "triagebot"]):
    print(command.kind, command.result, command.is_ok())
```

Bot names are matched case-insensitively. The commands understood are:

| Command | Result |
| --- | --- |
| `@bot label +A -B C` (also `labels`, `modify labels to:`) | `relabel.RelabelCommand` of `LabelDelta`s |
| `@bot claim`, `@bot release-assignment`, `@bot assign @user` | `assign.AssignOwn`, `AssignRelease`, `AssignUser` |
| `r? @user` or `r? team/name` | `assign.ReviewName` |
| `@bot ping <team>` | `ping.PingCommand` |
| `@bot nominate <team>`, `@bot beta-nominate <team>`, `@bot beta-accept`, `@bot beta-approve` | `nominate.NominateCommand` with a `Style` |
| `@bot prioritize` | `simple.PrioritizeCommand` |
| `@bot second` / `@bot seconded` | `simple.SecondCommand` |
| `@bot glacier "<gist link>"` | `glacier.GlacierCommand` |
| `@bot ready`, `@bot review`, `@bot reviewer`, `@bot author`, `@bot blocked` | a `shortcut.ShortcutCommand` member |
| `@bot close` | `simple.CloseCommand` |
| `@bot note <title>` / `@bot note remove <title>` | `note.NoteCommand` |

Each parser in `triagebot.parser.commands` can also be called on its own with
a `Tokenizer`. It returns None when the text is not its command and raises
`triagebot.parser.error.CommandError` when it is but cannot be parsed. The
error records the `input`, the `position` of the failure and the `source`
reason, a `ParseError` member of the command's module (or a
`TokenizerErrorKind`).

```python
from triagebot.parser.commands import ping
from triagebot.parser.token import Tokenizer

ping.parse(Tokenizer("ping compiler."))   # PingCommand(team='compiler')
```

## Mentions

```python
from triagebot.parser.mentions import get_mentions

get_mentions("@someone and @org/team, but not `@quoted` or user@example.com")
# ['someone', 'org/team']
```

## Tokens and ignored regions

`tokenize` splits text into the `Token`s the command parsers work on (words,
quoted strings and punctuation, with one end-of-line token at the end of the
input), and `IgnoreBlocks` reports which parts of a Markdown document are code
or quotes:

```python
from triagebot.parser.token import tokenize
from triagebot.parser.ignore_block import IgnoreBlocks

tokenize("labels: +bug")
IgnoreBlocks("text `code` text").overlaps_ignore(5, 11)   # (5, 11)
```

## Changelogs

`Changelog.parse` splits a changelog whose versions are level-one headings
such as `Version 1.45.2 (2020-08-03)` into per-version Markdown, keyed by the
second word of the heading. Reference links are written inline and soft line
breaks are joined, so the text can be used as release notes as it is.

```python
from triagebot.changelogs import Changelog, ChangelogFormat

changelog = Changelog.parse(ChangelogFormat.RUSTC, text)
print(changelog.version("1.45.2"))
```

## Repository configuration

`parse_config` reads the text (or bytes) of a `triagebot.toml` file into a
`Config`; sections that are absent are `None`, and unknown keys are ignored.
A malformed file raises `MalformedConfigError`.

```python
from triagebot.config import parse_config

config = parse_config('''
[ping.compiler]
message = "So many people!"
label = "T-compiler"
''')
name, team = config.ping.get_by_name("compiler")
```

`ConfigCache` wraps a function `fetch(full_name, branch, path)` that returns
the raw file for a repository, or None when there is none. It keeps each
result, failures included, for a refresh interval (two minutes by default)
before fetching again. A missing file is raised as `MissingConfigError` and a
failed fetch as `ConfigFetchError`; both derive from `ConfigurationError`.

## What this package does not do

It works on text only. It has no client for the hosting site's API, so
`ConfigCache` must be given the function that fetches files. It does not run
a webhook server, act on the commands it parses, post comments, store
anything in a database, or produce meeting agendas.