"""Heuristics deciding whether an executable is a plausible application."""

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

TARGET_EXTENSION = ".exe"

_SEPARATORS = re.compile(r"[\\/]+")


@dataclass(frozen=True)
class ExclusionRule:
    """A single substring or path-segment matcher."""

    pattern: str
    kind: str = "substring"
    case_sensitive: bool = False
    reason: str = ""

    KINDS = ("substring", "segment_prefix", "segment_suffix", "segment_contains", "segment_equals")

    def __post_init__(self) -> None:
        if self.kind not in self.KINDS:
            raise ValueError(f"Unknown rule kind '{self.kind}'")
        if not self.pattern:
            raise ValueError("Rule pattern must not be empty")

    def matches(self, path: str) -> bool:
        pattern = self.pattern if self.case_sensitive else self.pattern.lower()
        text = path if self.case_sensitive else path.lower()

        if self.kind == "substring":
            return pattern in text

        segments = [segment for segment in _SEPARATORS.split(text) if segment]
        if self.kind == "segment_prefix":
            return any(segment.startswith(pattern) for segment in segments)
        if self.kind == "segment_suffix":
            return any(segment.endswith(pattern) for segment in segments)
        if self.kind == "segment_contains":
            return any(pattern in segment for segment in segments)
        return any(segment == pattern for segment in segments)


def _keywords(reason: str, *words: str) -> list[ExclusionRule]:
    return [ExclusionRule(word, reason=reason) for word in words]


# Installer, support and launcher executables
KEYWORD_RULES = [
    *_keywords("installer", "unins", "setup", "install", "patch", "register", "activation", "redis"),
    *_keywords("updater", "update"),
    *_keywords("launcher", "launch", "cefprocess"),
    *_keywords("diagnostics", "diagnostics", "report", "crash"),
    *_keywords("support", "support"),
    *_keywords("tooling", "tool", "config", "plugin", "benchmark"),
    *_keywords("vr runtime", "steamvr"),
    ExclusionRule("svc", case_sensitive=True, reason="anti-cheat service"),
]

# Folders that are unlikely to contain useful executables
STRUCTURAL_RULES = [
    ExclusionRule("docs", reason="documentation folder"),
    ExclusionRule("cache", reason="cache folder"),
    # AppData, ProgramData, <Game>_Data
    ExclusionRule("Data", kind="segment_suffix", case_sensitive=True, reason="data folder"),
    ExclusionRule("_CommonRedist", kind="segment_contains", case_sensitive=True, reason="redistributables"),
    ExclusionRule("__Installer", kind="segment_contains", case_sensitive=True, reason="installer assets"),
    ExclusionRule(".", kind="segment_prefix", reason="hidden folder"),
    ExclusionRule("$", kind="segment_prefix", reason="hidden folder"),
    ExclusionRule("windows", kind="segment_equals", reason="system folder"),
]


class ExclusionRules:
    """Immutable, ordered collection of exclusion rules."""

    def __init__(self, rules: Iterable[ExclusionRule]):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[ExclusionRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def first_match(self, path: str) -> ExclusionRule | None:
        """Return the first rule matching ``path``, or None."""
        for rule in self._rules:
            if rule.matches(path):
                return rule
        return None

    def matches(self, path: str) -> bool:
        return self.first_match(path) is not None

    def extended(self, keywords: Iterable[str]) -> "ExclusionRules":
        """Return a copy with extra case-insensitive keywords appended."""
        extra = [ExclusionRule(word.strip(), reason="configured") for word in keywords if word.strip()]
        return ExclusionRules([*self._rules, *extra])


DEFAULT_RULES = ExclusionRules([*KEYWORD_RULES, *STRUCTURAL_RULES])


def has_target_extension(path: str, extension: str = TARGET_EXTENSION) -> bool:
    """Check the file extension, ignoring case."""
    return os.path.splitext(path)[1].lower() == extension.lower()


def is_candidate(
    path: str,
    rules: ExclusionRules = DEFAULT_RULES,
    extension: str = TARGET_EXTENSION
) -> bool:
    """
    Decide whether ``path`` is a plausible application executable.

    A path is rejected when its extension differs from ``extension``, when the
    file no longer exists, or when any exclusion rule matches it. A file that
    vanishes between listing and this check is a plain rejection.

    Example:
        >>> is_candidate("C:\\\\Games\\\\Foo\\\\GameSetup.exe")
        False
    """
    if not path or not has_target_extension(path, extension):
        return False

    if not os.path.isfile(path):
        return False

    rule = rules.first_match(path)
    if rule is not None:
        logger.debug("Excluded %s (%s: %r)", path, rule.reason, rule.pattern)
        return False

    return True
