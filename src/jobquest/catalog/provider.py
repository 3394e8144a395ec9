"""Read-only catalog of jobs and enemies.

The engine depends only on the CatalogProvider protocol. StaticCatalog
serves the bundled data by default and can also be loaded from a JSON
document with the same shape.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jobquest.catalog.data import COMPATIBILITY_TABLE, ENEMIES, JOBS
from jobquest.core.exceptions import CatalogError, UnknownCatalogReferenceError
from jobquest.core.logging import get_logger
from jobquest.models.definitions import EnemyDefinition, JobDefinition


logger = get_logger(__name__)


@runtime_checkable
class CatalogProvider(Protocol):
    """Read-only source of job and enemy definitions."""

    def list_jobs(self) -> list[JobDefinition]:
        """Jobs in catalog order."""
        ...

    def list_enemies(self) -> list[EnemyDefinition]:
        """Enemies ordered by id ascending."""
        ...

    def get_job(self, job_id: str) -> JobDefinition:
        """Resolve a job id or raise UnknownCatalogReferenceError."""
        ...

    def get_enemy(self, enemy_id: int | str) -> EnemyDefinition:
        """Resolve an enemy id or raise UnknownCatalogReferenceError."""
        ...


class CatalogDocument(BaseModel):
    """On-disk shape of a catalog JSON file."""

    model_config = ConfigDict(extra="forbid")

    jobs: list[JobDefinition] = Field(default_factory=list)
    enemies: list[EnemyDefinition] = Field(default_factory=list)
    compatibility: dict[str, dict[str, float]] = Field(default_factory=dict)


def _enemy_sort_key(enemy: EnemyDefinition) -> tuple[bool, int | str]:
    # Numeric ids sort before string ids; never compares int with str
    return (isinstance(enemy.id, str), enemy.id)


class StaticCatalog:
    """In-memory catalog built once and never mutated.

    Attributes:
        compatibility_table: Species/job multiplier table shipped with the catalog.
    """

    def __init__(
        self,
        jobs: Iterable[JobDefinition] | None = None,
        enemies: Iterable[EnemyDefinition] | None = None,
        *,
        compatibility_table: Mapping[str, Mapping[str, float]] | None = None,
    ) -> None:
        """Build the catalog.

        Args:
            jobs: Job definitions; defaults to the bundled jobs.
            enemies: Enemy definitions; defaults to the bundled enemies.
            compatibility_table: Species/job multipliers; defaults to the bundled table.

        Raises:
            CatalogError: If two jobs or two enemies share an id.
        """
        job_list = list(JOBS if jobs is None else jobs)
        enemy_list = list(ENEMIES if enemies is None else enemies)
        table = COMPATIBILITY_TABLE if compatibility_table is None else compatibility_table

        self._jobs: dict[str, JobDefinition] = {}
        for job in job_list:
            if job.id in self._jobs:
                raise CatalogError("Duplicate job id in catalog", details={"id": job.id})
            self._jobs[job.id] = job

        self._enemies: dict[str, EnemyDefinition] = {}
        for enemy in sorted(enemy_list, key=_enemy_sort_key):
            key = str(enemy.id)
            if key in self._enemies:
                raise CatalogError("Duplicate enemy id in catalog", details={"id": enemy.id})
            self._enemies[key] = enemy

        self.compatibility_table: dict[str, dict[str, float]] = {
            species: dict(row) for species, row in table.items()
        }

        logger.debug(
            "Catalog loaded",
            jobs=len(self._jobs),
            enemies=len(self._enemies),
            species=len(self.compatibility_table),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "StaticCatalog":
        """Load a catalog from a JSON document.

        Args:
            path: File with ``jobs``, ``enemies`` and ``compatibility`` keys.

        Returns:
            The loaded catalog.

        Raises:
            CatalogError: If the file cannot be read or fails validation.
        """
        file_path = Path(path)
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
            document = CatalogDocument.model_validate(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise CatalogError(
                f"Failed to load catalog: {exc}",
                details={"path": str(file_path)},
            ) from exc

        return cls(
            document.jobs,
            document.enemies,
            compatibility_table=document.compatibility,
        )

    def list_jobs(self) -> list[JobDefinition]:
        """Jobs in catalog order."""
        return list(self._jobs.values())

    def list_enemies(self) -> list[EnemyDefinition]:
        """Enemies ordered by id ascending."""
        return list(self._enemies.values())

    def get_job(self, job_id: str) -> JobDefinition:
        """Resolve a job id.

        Raises:
            UnknownCatalogReferenceError: If the id is not in the catalog.
        """
        try:
            return self._jobs[job_id]
        except KeyError:
            raise UnknownCatalogReferenceError(
                f"Unknown job: {job_id}",
                reference=job_id,
                kind="job",
            ) from None

    def get_enemy(self, enemy_id: int | str) -> EnemyDefinition:
        """Resolve an enemy id.

        Raises:
            UnknownCatalogReferenceError: If the id is not in the catalog.
        """
        try:
            return self._enemies[str(enemy_id)]
        except KeyError:
            raise UnknownCatalogReferenceError(
                f"Unknown enemy: {enemy_id}",
                reference=enemy_id,
                kind="enemy",
            ) from None


__all__ = [
    "CatalogProvider",
    "CatalogDocument",
    "StaticCatalog",
]
