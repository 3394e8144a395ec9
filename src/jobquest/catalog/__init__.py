"""Catalog provider for job and enemy definitions."""

from __future__ import annotations

from jobquest.catalog.data import COMPATIBILITY_TABLE, ENEMIES, JOBS, TRAINEE_JOB
from jobquest.catalog.provider import CatalogDocument, CatalogProvider, StaticCatalog


__all__ = [
    "CatalogProvider",
    "CatalogDocument",
    "StaticCatalog",
    "JOBS",
    "ENEMIES",
    "TRAINEE_JOB",
    "COMPATIBILITY_TABLE",
]
