"""Counting configuration loaded from YAML.

Everything here is policy, not logic: which files are noise, which
punctuation carries no meaning, and when a diff is big enough to escalate.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

# Literal substrings, matched anywhere in a file path.
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    # Dependency lockfiles
    "yarn.lock",
    "package-lock.json",
    "pnpm-lock.yaml",
    "pubspec.lock",
    "Podfile.lock",
    "Gemfile.lock",
    "Cargo.lock",
    "poetry.lock",
    "composer.lock",
    "go.sum",
    # Build and project manifests
    ".pbxproj",
    ".xcworkspacedata",
    # Generated snapshots
    ".snap",
    # Vendored assets
    "Pods/",
    "node_modules/",
    "vendor/",
    # Images
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".ico",
    ".svg",
    # Editor, linter and VCS config
    ".vscode/",
    ".idea/",
    ".eslintrc",
    ".prettierrc",
    ".editorconfig",
    ".gitignore",
    ".gitattributes",
)

DEFAULT_PUNCTUATION = "\"';,"
DEFAULT_THRESHOLD = 1000
DEFAULT_COMMENT_TAG = "[diff-counting]"


class ConfigError(ValueError):
    """Raised when a configuration file has invalid content."""

    pass


@dataclass(frozen=True)
class CountingConfig:
    """Settings for counting significant lines and reacting to the count.

    Attributes:
        ignore_patterns: Path substrings whose files are excluded entirely
        punctuation: Characters deleted from lines before comparison
        threshold: Counts above this value trigger a review request
        comment_tag: Prefix identifying the summary comment on a pull request
        reviewers: Logins asked to review when the threshold is exceeded
        bot_login: If set, only comments by this login are updated in place
    """

    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    punctuation: str = DEFAULT_PUNCTUATION
    threshold: int = DEFAULT_THRESHOLD
    comment_tag: str = DEFAULT_COMMENT_TAG
    reviewers: tuple[str, ...] = field(default_factory=tuple)
    bot_login: str | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> CountingConfig:
        """Parse configuration from a YAML mapping.

        Recognized keys: ignore (replaces the default list), extra_ignore
        (extends it), punctuation, threshold, comment_tag, reviewers,
        bot_login. Unknown keys are ignored.

        Args:
            data: Raw dictionary from YAML, or None for defaults

        Returns:
            Typed CountingConfig instance

        Raises:
            ConfigError: If a value has the wrong type
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        ignore = _string_list(data, "ignore")
        extra_ignore = _string_list(data, "extra_ignore") or []
        patterns = tuple(ignore) if ignore is not None else DEFAULT_IGNORE_PATTERNS
        patterns = patterns + tuple(p for p in extra_ignore if p not in patterns)

        punctuation = data.get("punctuation", DEFAULT_PUNCTUATION)
        if not isinstance(punctuation, str):
            raise ConfigError("'punctuation' must be a string of characters")

        threshold = data.get("threshold", DEFAULT_THRESHOLD)
        if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
            raise ConfigError("'threshold' must be a non-negative integer")

        comment_tag = data.get("comment_tag", DEFAULT_COMMENT_TAG)
        if not isinstance(comment_tag, str) or not comment_tag:
            raise ConfigError("'comment_tag' must be a non-empty string")

        bot_login = data.get("bot_login")
        if bot_login is not None and not isinstance(bot_login, str):
            raise ConfigError("'bot_login' must be a string")

        return cls(
            ignore_patterns=patterns,
            punctuation=punctuation,
            threshold=threshold,
            comment_tag=comment_tag,
            reviewers=tuple(_string_list(data, "reviewers") or []),
            bot_login=bot_login,
        )

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> CountingConfig:
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is not valid YAML or has invalid values
        """
        text = Path(path).read_text()
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data)

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def with_overrides(
        self,
        extra_ignore: list[str] | None = None,
        threshold: int | None = None,
    ) -> CountingConfig:
        """Return a copy with command-line overrides applied.

        Raises:
            ConfigError: If threshold is negative
        """
        if threshold is not None and threshold < 0:
            raise ConfigError("'threshold' must be a non-negative integer")
        config = self
        if extra_ignore:
            patterns = config.ignore_patterns + tuple(
                p for p in extra_ignore if p not in config.ignore_patterns
            )
            config = replace(config, ignore_patterns=patterns)
        if threshold is not None:
            config = replace(config, threshold=threshold)
        return config


def _string_list(data: dict, key: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return value
