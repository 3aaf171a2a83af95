# font_scout/crawler/models.py
"""
Data models for the FontScout resolver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Set
from urllib.parse import urlsplit


class Verdict(str, Enum):
    """Final classification of a run."""

    YES = "YES"
    NO = "NO"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class PageOrigin:
    """Scheme and host (with port, without userinfo) of the audited page."""

    scheme: str
    host: str

    @classmethod
    def from_url(cls, url: str) -> PageOrigin:
        parts = urlsplit(url.strip())
        scheme = (parts.scheme or "https").lower()
        host = parts.netloc.rpartition("@")[2].lower()
        return cls(scheme=scheme, host=host)

    def __str__(self) -> str:
        return f"{self.scheme}://{self.host}"


@dataclass(slots=True)
class RunResult:
    """Outcome of one audit: both hit sets and the verdict."""

    destination: str
    stylesheets: Set[str] = field(default_factory=set)
    font_files: Set[str] = field(default_factory=set)
    verdict: Verdict = Verdict.UNKNOWN

    @property
    def sorted_stylesheets(self) -> List[str]:
        return sorted(self.stylesheets)

    @property
    def sorted_font_files(self) -> List[str]:
        return sorted(self.font_files)


@dataclass(slots=True)
class ResolveContext:
    """Mutable state of a single resolution run; never shared between runs."""

    origin: PageOrigin
    visited: Set[str] = field(default_factory=set)
    stylesheets: Set[str] = field(default_factory=set)
    font_files: Set[str] = field(default_factory=set)
    fetches: int = 0

    def to_result(self, destination: str) -> RunResult:
        found = bool(self.stylesheets or self.font_files)
        return RunResult(
            destination=destination,
            stylesheets=set(self.stylesheets),
            font_files=set(self.font_files),
            verdict=Verdict.YES if found else Verdict.NO,
        )
