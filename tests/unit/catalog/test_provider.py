"""Tests for the catalog provider."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from jobquest.catalog.data import COMPATIBILITY_TABLE
from jobquest.catalog.provider import CatalogProvider, StaticCatalog
from jobquest.core.exceptions import CatalogError, UnknownCatalogReferenceError


class TestStaticCatalog:
    """Tests for the bundled catalog."""

    def test_satisfies_protocol(self, catalog: StaticCatalog) -> None:
        """Test the catalog implements the provider protocol."""
        assert isinstance(catalog, CatalogProvider)

    def test_jobs_in_catalog_order(self, catalog: StaticCatalog) -> None:
        """Test jobs keep their declared order."""
        assert [job.id for job in catalog.list_jobs()] == [
            "wizard",
            "warrior",
            "hero",
            "rogue",
            "monk",
        ]

    def test_enemies_ordered_by_id(self, catalog: StaticCatalog) -> None:
        """Test enemies are listed by ascending id."""
        assert [enemy.id for enemy in catalog.list_enemies()] == [1, 2, 3, 4, 5]

    def test_get_job(self, catalog: StaticCatalog) -> None:
        """Test resolving a job id."""
        wizard = catalog.get_job("wizard")

        assert wizard.name == "Wizard"
        assert wizard.magic == 25

    def test_get_enemy_by_int_or_str(self, catalog: StaticCatalog) -> None:
        """Test enemy ids resolve whether given as int or str."""
        assert catalog.get_enemy(3).name == "Orc"
        assert catalog.get_enemy("3").name == "Orc"

    def test_unknown_job(self, catalog: StaticCatalog) -> None:
        """Test unknown job ids raise with the reference attached."""
        with pytest.raises(UnknownCatalogReferenceError) as exc_info:
            catalog.get_job("ninja")

        assert exc_info.value.reference == "ninja"
        assert exc_info.value.kind == "job"

    def test_unknown_enemy(self, catalog: StaticCatalog) -> None:
        """Test unknown enemy ids raise."""
        with pytest.raises(UnknownCatalogReferenceError):
            catalog.get_enemy(42)

    def test_compatibility_table(self, catalog: StaticCatalog) -> None:
        """Test the bundled table ships with the catalog."""
        assert catalog.compatibility_table == COMPATIBILITY_TABLE
        assert catalog.compatibility_table["Slime"]["wizard"] == 1.5

    def test_bundled_tags(self, catalog: StaticCatalog) -> None:
        """Test the enemies carry weakness and resistance tags."""
        dragon = catalog.get_enemy(4)

        assert "hero" in dragon.weaknesses
        assert {"wizard", "rogue"} <= dragon.resistances


class TestCustomCatalog:
    """Tests for catalogs built from custom definitions."""

    def test_duplicate_job_rejected(self, make_job: Callable[..., Any]) -> None:
        """Test duplicate job ids are refused."""
        with pytest.raises(CatalogError):
            StaticCatalog(jobs=[make_job(), make_job()], enemies=[])

    def test_duplicate_enemy_rejected(self, make_enemy: Callable[..., Any]) -> None:
        """Test duplicate enemy ids are refused."""
        with pytest.raises(CatalogError):
            StaticCatalog(jobs=[], enemies=[make_enemy(id=1), make_enemy(id=1)])

    def test_mixed_enemy_ids_sorted(self, make_enemy: Callable[..., Any]) -> None:
        """Test numeric ids sort before string ids."""
        catalog = StaticCatalog(
            jobs=[],
            enemies=[make_enemy(id="boss"), make_enemy(id=2), make_enemy(id=1)],
        )

        assert [enemy.id for enemy in catalog.list_enemies()] == [1, 2, "boss"]


class TestCatalogFromJson:
    """Tests for loading catalogs from JSON files."""

    def test_load(self, tmp_path: Path) -> None:
        """Test a valid document loads."""
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "jobs": [
                        {
                            "id": "knight",
                            "name": "Knight",
                            "hp": 110,
                            "attack": 16,
                            "defense": 14,
                            "magic": 2,
                        }
                    ],
                    "enemies": [
                        {
                            "id": 7,
                            "name": "Wraith",
                            "hp": 70,
                            "attack": 18,
                            "exp_reward": 80,
                            "weaknesses": ["knight"],
                        }
                    ],
                    "compatibility": {"Wraith": {"knight": 1.3}},
                }
            ),
            encoding="utf-8",
        )

        catalog = StaticCatalog.from_json(path)

        assert catalog.get_job("knight").hp == 110
        assert catalog.get_enemy(7).weaknesses == frozenset({"knight"})
        assert catalog.compatibility_table == {"Wraith": {"knight": 1.3}}

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises CatalogError."""
        with pytest.raises(CatalogError):
            StaticCatalog.from_json(tmp_path / "missing.json")

    def test_invalid_document(self, tmp_path: Path) -> None:
        """Test schema violations raise CatalogError."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"jobs": [{"id": "knight"}]}), encoding="utf-8")

        with pytest.raises(CatalogError):
            StaticCatalog.from_json(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Test unparseable files raise CatalogError."""
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError):
            StaticCatalog.from_json(path)
