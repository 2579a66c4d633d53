from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .errors import ExtractionError, RepositoryFactoryError


@dataclass(frozen=True)
class RepositoryRequest:
    """
    What the repository factory receives for every discovered URL.

    Discovered repositories never carry an explicit branch list; the
    account-level `all_branches` flag is the whole branch selection.
    """
    url:          str
    branches:     tuple[str, ...] = ()
    all_branches: bool            = False


@dataclass(frozen=True)
class RepositoryFailure:
    """A discovered URL the factory could not turn into a handle."""
    url:   str
    error: RepositoryFactoryError


@dataclass(frozen=True)
class Account:
    """
    Immutable aggregate for one forge account, built once discovery is done.

    `repositories` holds whatever the injected factory produced (IRepository
    handles). Nothing downstream ever sees a half-built Account.
    """
    name:          str
    canonical_url: str
    repositories:  tuple[Any, ...]
    skipped:       tuple[RepositoryFailure, ...] = ()

    @property
    def repository_count(self) -> int:
        return len(self.repositories)


@dataclass(frozen=True)
class CommitDataEntry:
    """Wrapper stored per repository name in the aggregated result."""
    repositories_data: Any


@dataclass
class CommitCollection:
    """
    Fan-in target of the extraction stage.

    Owned by the collector alone while workers report; handed out only
    after every worker has finished.
    """
    data:     dict[str, CommitDataEntry] = field(default_factory=dict)
    failures: dict[str, ExtractionError] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class AccountCommitResult:
    """
    Immutable value object summarising one account run.
    Returned by the application service when extraction finishes.
    """
    account_name: str
    collection:   CommitCollection
    discovered:   int
    skipped:      int
    status:       str
    elapsed_secs: float
