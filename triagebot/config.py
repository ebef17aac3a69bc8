"""Repository configuration read from ``triagebot.toml``."""

from __future__ import annotations

import logging
import threading
import time
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from .changelogs import ChangelogFormat

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "triagebot.toml"
REFRESH_EVERY = 120.0

_U64_LIMIT = 2**64


class ConfigurationError(Exception):
    """The configuration of a repository could not be obtained."""


class MissingConfigError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "This repository is not enabled to use triagebot.\n"
            "Add a `triagebot.toml` in the root of the default branch to enable it."
        )


class MalformedConfigError(ConfigurationError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed `triagebot.toml` in default branch.\n{detail}")


class ConfigFetchError(ConfigurationError):
    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to query configuration for this repository.\n{cause!r}")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _table(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedConfigError(f"invalid type for `{path}`: expected a table")
    return value


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise MalformedConfigError(f"invalid type for `{path}`: expected a string")
    return value


def _boolean(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise MalformedConfigError(f"invalid type for `{path}`: expected a boolean")
    return value


def _unsigned(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedConfigError(f"invalid type for `{path}`: expected an integer")
    if not 0 <= value < _U64_LIMIT:
        raise MalformedConfigError(f"invalid value for `{path}`: expected an unsigned integer")
    return value


def _string_list(value: Any, path: str) -> list[str]:
    if not isinstance(value, list):
        raise MalformedConfigError(f"invalid type for `{path}`: expected an array")
    return [_string(item, f"{path}[{index}]") for index, item in enumerate(value)]


def _string_set(value: Any, path: str) -> frozenset[str]:
    return frozenset(_string_list(value, path))


def _string_map(value: Any, path: str) -> dict[str, str]:
    return {key: _string(item, _join(path, key)) for key, item in _table(value, path).items()}


def _string_list_map(value: Any, path: str) -> dict[str, list[str]]:
    return {
        key: _string_list(item, _join(path, key)) for key, item in _table(value, path).items()
    }


def _required(table: dict[str, Any], key: str, path: str, reader: Callable[[Any, str], Any]) -> Any:
    if key not in table:
        raise MalformedConfigError(f"missing field `{key}` for key `{path}`")
    return reader(table[key], _join(path, key))


def _optional(
    table: dict[str, Any],
    key: str,
    path: str,
    reader: Callable[[Any, str], Any],
    default: Any = None,
) -> Any:
    if key not in table:
        return default() if callable(default) else default
    return reader(table[key], _join(path, key))


@dataclass
class NominateConfig:
    """Team name to the label applied on nomination."""

    teams: dict[str, str]

    @classmethod
    def _load(cls, value: Any, path: str) -> NominateConfig:
        table = _table(value, path)
        return cls(teams=_required(table, "teams", path, _string_map))


@dataclass
class PingTeamConfig:
    message: str
    alias: frozenset[str] = frozenset()
    label: str | None = None

    @classmethod
    def _load(cls, value: Any, path: str) -> PingTeamConfig:
        table = _table(value, path)
        return cls(
            message=_required(table, "message", path, _string),
            alias=_optional(table, "alias", path, _string_set, frozenset),
            label=_optional(table, "label", path, _string),
        )


@dataclass
class PingConfig:
    """Team name to the message posted when the team is pinged."""

    teams: dict[str, PingTeamConfig] = field(default_factory=dict)

    @classmethod
    def _load(cls, value: Any, path: str) -> PingConfig:
        table = _table(value, path)
        return cls(
            teams={key: PingTeamConfig._load(item, _join(path, key)) for key, item in table.items()}
        )

    def get_by_name(self, team: str) -> tuple[str, PingTeamConfig] | None:
        """Find a team by its name or, failing that, by one of its aliases."""
        if team in self.teams:
            return team, self.teams[team]
        for name, config in self.teams.items():
            if team in config.alias:
                return name, config
        return None


@dataclass
class AssignConfig:
    warn_non_default_branch: bool = False
    contributing_url: str | None = None
    adhoc_groups: dict[str, list[str]] = field(default_factory=dict)
    owners: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def _load(cls, value: Any, path: str) -> AssignConfig:
        table = _table(value, path)
        return cls(
            warn_non_default_branch=_optional(
                table, "warn_non_default_branch", path, _boolean, False
            ),
            contributing_url=_optional(table, "contributing_url", path, _string),
            adhoc_groups=_optional(table, "adhoc_groups", path, _string_list_map, dict),
            owners=_optional(table, "owners", path, _string_list_map, dict),
        )


class _Marker:
    """A section whose presence alone enables a feature."""

    @classmethod
    def _load(cls, value: Any, path: str) -> Any:
        _table(value, path)
        return cls()


@dataclass
class NoMergesConfig(_Marker):
    pass


@dataclass
class NoteConfig(_Marker):
    pass


@dataclass
class ShortcutConfig(_Marker):
    pass


@dataclass
class GlacierConfig(_Marker):
    pass


@dataclass
class CloseConfig(_Marker):
    pass


@dataclass
class MentionsPathConfig:
    message: str | None = None
    cc: list[str] = field(default_factory=list)

    @classmethod
    def _load(cls, value: Any, path: str) -> MentionsPathConfig:
        table = _table(value, path)
        return cls(
            message=_optional(table, "message", path, _string),
            cc=_optional(table, "cc", path, _string_list, list),
        )


@dataclass
class MentionsConfig:
    paths: dict[str, MentionsPathConfig] = field(default_factory=dict)

    @classmethod
    def _load(cls, value: Any, path: str) -> MentionsConfig:
        table = _table(value, path)
        return cls(
            paths={
                key: MentionsPathConfig._load(item, _join(path, key)) for key, item in table.items()
            }
        )


@dataclass
class RelabelConfig:
    allow_unauthenticated: list[str] = field(default_factory=list)

    @classmethod
    def _load(cls, value: Any, path: str) -> RelabelConfig:
        table = _table(value, path)
        return cls(
            allow_unauthenticated=_optional(
                table, "allow-unauthenticated", path, _string_list, list
            )
        )


@dataclass
class PrioritizeConfig:
    label: str

    @classmethod
    def _load(cls, value: Any, path: str) -> PrioritizeConfig:
        table = _table(value, path)
        return cls(label=_required(table, "label", path, _string))


@dataclass
class AutolabelLabelConfig:
    trigger_labels: list[str] = field(default_factory=list)
    exclude_labels: list[str] = field(default_factory=list)
    trigger_files: list[str] = field(default_factory=list)
    new_pr: bool = False

    @classmethod
    def _load(cls, value: Any, path: str) -> AutolabelLabelConfig:
        table = _table(value, path)
        return cls(
            trigger_labels=_optional(table, "trigger_labels", path, _string_list, list),
            exclude_labels=_optional(table, "exclude_labels", path, _string_list, list),
            trigger_files=_optional(table, "trigger_files", path, _string_list, list),
            new_pr=_optional(table, "new_pr", path, _boolean, False),
        )


@dataclass
class AutolabelConfig:
    labels: dict[str, AutolabelLabelConfig] = field(default_factory=dict)

    @classmethod
    def _load(cls, value: Any, path: str) -> AutolabelConfig:
        table = _table(value, path)
        return cls(
            labels={
                key: AutolabelLabelConfig._load(item, _join(path, key))
                for key, item in table.items()
            }
        )

    def get_by_trigger(self, trigger: str) -> list[tuple[str, AutolabelLabelConfig]]:
        """The labels to apply when the ``trigger`` label is added."""
        return [
            (label, config)
            for label, config in self.labels.items()
            if trigger in config.trigger_labels
        ]


@dataclass
class NotifyZulipLabelConfig:
    zulip_stream: int
    topic: str
    message_on_add: str | None = None
    message_on_remove: str | None = None
    message_on_close: str | None = None
    message_on_reopen: str | None = None
    required_labels: list[str] = field(default_factory=list)

    @classmethod
    def _load(cls, value: Any, path: str) -> NotifyZulipLabelConfig:
        table = _table(value, path)
        return cls(
            zulip_stream=_required(table, "zulip_stream", path, _unsigned),
            topic=_required(table, "topic", path, _string),
            message_on_add=_optional(table, "message_on_add", path, _string),
            message_on_remove=_optional(table, "message_on_remove", path, _string),
            message_on_close=_optional(table, "message_on_close", path, _string),
            message_on_reopen=_optional(table, "message_on_reopen", path, _string),
            required_labels=_optional(table, "required_labels", path, _string_list, list),
        )


@dataclass
class NotifyZulipConfig:
    labels: dict[str, NotifyZulipLabelConfig] = field(default_factory=dict)

    @classmethod
    def _load(cls, value: Any, path: str) -> NotifyZulipConfig:
        table = _table(value, path)
        return cls(
            labels={
                key: NotifyZulipLabelConfig._load(item, _join(path, key))
                for key, item in table.items()
            }
        )


@dataclass
class MajorChangeConfig:
    """Labels and Zulip settings for the major change process."""

    zulip_ping: str
    second_label: str
    meeting_label: str
    zulip_stream: int
    enabling_label: str = "major-change"
    accept_label: str = "major-change-accepted"
    open_extra_text: str | None = None

    @classmethod
    def _load(cls, value: Any, path: str) -> MajorChangeConfig:
        table = _table(value, path)
        return cls(
            zulip_ping=_required(table, "zulip_ping", path, _string),
            second_label=_required(table, "second_label", path, _string),
            meeting_label=_required(table, "meeting_label", path, _string),
            zulip_stream=_required(table, "zulip_stream", path, _unsigned),
            enabling_label=_optional(table, "enabling_label", path, _string, "major-change"),
            accept_label=_optional(table, "accept_label", path, _string, "major-change-accepted"),
            open_extra_text=_optional(table, "open_extra_text", path, _string),
        )


@dataclass
class ReviewSubmittedConfig:
    review_labels: list[str]
    reviewed_label: str

    @classmethod
    def _load(cls, value: Any, path: str) -> ReviewSubmittedConfig:
        table = _table(value, path)
        return cls(
            review_labels=_required(table, "review_labels", path, _string_list),
            reviewed_label=_required(table, "reviewed_label", path, _string),
        )


def _changelog_format(value: Any, path: str) -> ChangelogFormat:
    name = _string(value, path)
    try:
        return ChangelogFormat(name)
    except ValueError:
        raise MalformedConfigError(f"unknown variant `{name}` for `{path}`") from None


@dataclass
class GitHubReleasesConfig:
    format: ChangelogFormat
    project_name: str
    changelog_path: str
    changelog_branch: str

    @classmethod
    def _load(cls, value: Any, path: str) -> GitHubReleasesConfig:
        table = _table(value, path)
        return cls(
            format=_required(table, "format", path, _changelog_format),
            project_name=_required(table, "project-name", path, _string),
            changelog_path=_required(table, "changelog-path", path, _string),
            changelog_branch=_required(table, "changelog-branch", path, _string),
        )


@dataclass
class Config:
    """The sections of ``triagebot.toml``; absent sections are None."""

    relabel: RelabelConfig | None = None
    assign: AssignConfig | None = None
    ping: PingConfig | None = None
    nominate: NominateConfig | None = None
    prioritize: PrioritizeConfig | None = None
    major_change: MajorChangeConfig | None = None
    glacier: GlacierConfig | None = None
    close: CloseConfig | None = None
    autolabel: AutolabelConfig | None = None
    notify_zulip: NotifyZulipConfig | None = None
    github_releases: GitHubReleasesConfig | None = None
    review_submitted: ReviewSubmittedConfig | None = None
    shortcut: ShortcutConfig | None = None
    note: NoteConfig | None = None
    mentions: MentionsConfig | None = None
    no_merges: NoMergesConfig | None = None


_SECTIONS: dict[str, Callable[[Any, str], Any]] = {
    "relabel": RelabelConfig._load,
    "assign": AssignConfig._load,
    "ping": PingConfig._load,
    "nominate": NominateConfig._load,
    "prioritize": PrioritizeConfig._load,
    "major_change": MajorChangeConfig._load,
    "glacier": GlacierConfig._load,
    "close": CloseConfig._load,
    "autolabel": AutolabelConfig._load,
    "notify_zulip": NotifyZulipConfig._load,
    "github_releases": GitHubReleasesConfig._load,
    "review_submitted": ReviewSubmittedConfig._load,
    "shortcut": ShortcutConfig._load,
    "note": NoteConfig._load,
    "mentions": MentionsConfig._load,
    "no_merges": NoMergesConfig._load,
}


def parse_config(text: str | bytes) -> Config:
    """Parse the contents of ``triagebot.toml``.

    Raises MalformedConfigError when the text is not valid TOML or does not
    have the expected shape. Unknown keys are ignored.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as err:
            raise MalformedConfigError(str(err)) from err
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as err:
        raise MalformedConfigError(str(err)) from err
    sections = {}
    for name, loader in _SECTIONS.items():
        key = name.replace("_", "-")
        if key in data:
            sections[name] = loader(data[key], key)
    return Config(**sections)


_Fetch = Callable[[str, str, str], "str | bytes | None"]


class ConfigCache:
    """Fetches and caches repository configurations, failures included.

    ``fetch(full_name, branch, path)`` returns the file contents, or None when
    the file does not exist. Entries are refetched after ``refresh_every``.
    """

    def __init__(self, fetch: _Fetch, refresh_every: float | timedelta = REFRESH_EVERY) -> None:
        self._fetch = fetch
        if isinstance(refresh_every, timedelta):
            refresh_every = refresh_every.total_seconds()
        self._refresh_every = float(refresh_every)
        self._entries: dict[str, tuple[Config | ConfigurationError, float]] = {}
        self._lock = threading.Lock()

    def get(self, full_name: str, default_branch: str) -> Config:
        """The configuration of ``full_name``; raises ConfigurationError."""
        with self._lock:
            entry = self._entries.get(full_name)
        if entry is not None and time.monotonic() - entry[1] < self._refresh_every:
            log.debug("returning config for %s from cache", full_name)
            result = entry[0]
        else:
            log.debug("fetching fresh config for %s", full_name)
            result = self._fresh(full_name, default_branch)
            with self._lock:
                self._entries[full_name] = (result, time.monotonic())
        if isinstance(result, ConfigurationError):
            raise result
        return result

    def _fresh(self, full_name: str, default_branch: str) -> Config | ConfigurationError:
        try:
            contents = self._fetch(full_name, default_branch, CONFIG_FILE_NAME)
        except Exception as err:
            return ConfigFetchError(err)
        if contents is None:
            return MissingConfigError()
        try:
            config = parse_config(contents)
        except ConfigurationError as err:
            return err
        log.debug("fresh configuration for %s: %r", full_name, config)
        return config