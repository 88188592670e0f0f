"""Per-attempt responses, cross-attempt bookkeeping and the final dispatch report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import InternalConsistencyError
from .model import UNRESOLVED, Delivered, Failed, is_final, is_transient

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .model import AttemptId, Outcome, RecipientId


@dataclass(frozen=True, slots=True)
class AttemptResponse:
    """What the gateway returned for one batch request.

    ``outcomes`` are order-aligned with the recipients submitted in that attempt. The counts are
    the gateway's own summary and are only advisory.
    """

    attempt_id: AttemptId
    outcomes: tuple[Outcome, ...]
    success: int = 0
    failure: int = 0
    canonical_ids: int = 0

    def pair_with(self, submitted: Sequence[RecipientId]) -> list[tuple[RecipientId, Outcome]]:
        if len(submitted) != len(self.outcomes):
            raise InternalConsistencyError(
                f"Gateway returned {len(self.outcomes)} outcomes for "
                f"{len(submitted)} submitted recipients (attempt {self.attempt_id})"
            )
        return list(zip(submitted, self.outcomes, strict=True))


@dataclass(slots=True)
class ResultStore:
    """Latest known outcome per recipient for a single dispatch."""

    _outcomes: dict[RecipientId, Outcome] = field(default_factory=dict)

    def get(self, recipient: RecipientId) -> Outcome:
        return self._outcomes.get(recipient, UNRESOLVED)

    def is_resolved(self, recipient: RecipientId) -> bool:
        return is_final(self.get(recipient))

    def record(self, recipient: RecipientId, outcome: Outcome) -> bool:
        """Store ``outcome`` unless the recipient already has a definitive one."""

        if self.is_resolved(recipient):
            return False
        self._outcomes[recipient] = outcome
        return True

    def merge(
        self,
        response: AttemptResponse,
        submitted: Sequence[RecipientId],
    ) -> list[RecipientId]:
        """Record an attempt's outcomes and return the recipients to retry, in submitted order."""

        retry: list[RecipientId] = []
        for recipient, outcome in response.pair_with(submitted):
            self.record(recipient, outcome)
            if is_transient(self.get(recipient)):
                retry.append(recipient)
        return retry

    def __len__(self) -> int:
        return len(self._outcomes)


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Merged result of every attempt of a dispatch, in the caller's recipient order."""

    results: tuple[tuple[RecipientId, Outcome], ...]
    success: int
    failure: int
    canonical_ids: int
    attempt_id: AttemptId
    retry_attempt_ids: tuple[AttemptId, ...] = ()

    @property
    def total(self) -> int:
        return self.success + self.failure

    @property
    def outcomes(self) -> list[Outcome]:
        return [outcome for _, outcome in self.results]

    @property
    def attempt_ids(self) -> list[AttemptId]:
        return [self.attempt_id, *self.retry_attempt_ids]

    def outcome_for(self, recipient: RecipientId) -> Outcome:
        for candidate, outcome in self.results:
            if candidate == recipient:
                return outcome
        raise KeyError(recipient)

    def canonical_replacements(self) -> dict[RecipientId, str]:
        return {
            recipient: outcome.canonical_id
            for recipient, outcome in self.results
            if isinstance(outcome, Delivered) and outcome.canonical_id is not None
        }

    def failures(self) -> dict[RecipientId, str | None]:
        """Failed recipients mapped to their error kind (``None`` if never resolved)."""

        failed: dict[RecipientId, str | None] = {}
        for recipient, outcome in self.results:
            if isinstance(outcome, Failed):
                failed[recipient] = outcome.error
            elif not isinstance(outcome, Delivered):
                failed[recipient] = None
        return failed


def finalize_report(
    store: ResultStore,
    original_order: Iterable[RecipientId],
    attempt_ids: Sequence[AttemptId],
) -> DispatchReport:
    if not attempt_ids:
        raise InternalConsistencyError("Cannot build a report without any attempt id")

    results: list[tuple[RecipientId, Outcome]] = []
    success = failure = canonical_ids = 0
    for recipient in original_order:
        outcome = store.get(recipient)
        results.append((recipient, outcome))
        if isinstance(outcome, Delivered):
            success += 1
            if outcome.has_canonical_id:
                canonical_ids += 1
        else:
            failure += 1

    return DispatchReport(
        results=tuple(results),
        success=success,
        failure=failure,
        canonical_ids=canonical_ids,
        attempt_id=attempt_ids[0],
        retry_attempt_ids=tuple(attempt_ids[1:]),
    )
