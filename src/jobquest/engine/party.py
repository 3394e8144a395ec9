"""Party construction from selected job ids."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from jobquest.catalog.provider import CatalogProvider
from jobquest.core.constants import DEFAULT_MAX_PARTY_SIZE
from jobquest.core.exceptions import EmptyPartyError, UnknownCatalogReferenceError
from jobquest.core.logging import get_logger
from jobquest.models.combatants import Combatant


logger = get_logger(__name__)


def build_party(
    catalog: CatalogProvider,
    job_ids: Iterable[str],
    max_size: int = DEFAULT_MAX_PARTY_SIZE,
) -> list[Combatant]:
    """Build fresh combatants for the selected jobs.

    Unresolvable ids are skipped with a warning and duplicates are ignored.
    The party keeps selection order and is truncated to ``max_size``.

    Args:
        catalog: Source of job definitions.
        job_ids: Selected job ids, in order.
        max_size: Largest party allowed.

    Returns:
        Combatants at full HP, level 1, zero experience.

    Raises:
        EmptyPartyError: If no id resolves to a job.
    """
    requested = list(job_ids)
    party: list[Combatant] = []
    seen: set[str] = set()

    for job_id in requested:
        if len(party) >= max_size:
            logger.debug("Party full, ignoring selection", job_id=job_id, max_size=max_size)
            break
        if job_id in seen:
            continue
        seen.add(job_id)

        try:
            job = catalog.get_job(job_id)
        except UnknownCatalogReferenceError as exc:
            logger.warning("Skipping unknown job", job_id=job_id, error=str(exc))
            continue

        party.append(Combatant.from_job(job))

    if not party:
        raise EmptyPartyError(
            "No selected job could be resolved",
            requested_ids=requested,
        )

    logger.info("Party built", members=[member.id for member in party])
    return party


def toggle_job_selection(
    selected: Sequence[str],
    job_id: str,
    max_size: int = DEFAULT_MAX_PARTY_SIZE,
) -> list[str]:
    """Toggle a job in a selection list.

    Removes the job when already selected, appends it while below
    ``max_size``, and otherwise returns the selection unchanged.
    """
    if job_id in selected:
        return [selected_id for selected_id in selected if selected_id != job_id]
    if len(selected) < max_size:
        return [*selected, job_id]
    return list(selected)


__all__ = [
    "build_party",
    "toggle_job_selection",
]
