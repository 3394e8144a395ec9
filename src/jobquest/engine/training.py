"""Training ground: one trainee against any catalog enemy.

A thin wrapper over the battle engine with neutral compatibility. The
trainee keeps HP, level and experience between fights; HP is restored
to full only after a defeat. There are no win/loss counters.
"""

from __future__ import annotations

from jobquest.catalog.data import TRAINEE_JOB
from jobquest.catalog.provider import CatalogProvider, StaticCatalog
from jobquest.core.config import BattleSettings
from jobquest.core.exceptions import UnknownCatalogReferenceError
from jobquest.core.logging import get_logger
from jobquest.engine.battle import ActionResult, BattleEngine
from jobquest.engine.compatibility import NeutralCompatibility
from jobquest.engine.dice import DiceRoller
from jobquest.engine.events import BattleEvent, EventKind
from jobquest.models.combatants import Combatant
from jobquest.models.definitions import EnemyDefinition, JobDefinition
from jobquest.models.enums import ActionType, BattlePhase


logger = get_logger(__name__)


class TrainingSession:
    """Back-to-back single encounters for a lone trainee."""

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        *,
        roller: DiceRoller | None = None,
        settings: BattleSettings | None = None,
        trainee_job: JobDefinition = TRAINEE_JOB,
    ) -> None:
        """Initialize the session.

        Args:
            catalog: Enemy source; defaults to the bundled catalog.
            roller: Random source for every encounter.
            settings: Battle settings for every encounter.
            trainee_job: Job the trainee is built from.
        """
        self._catalog = catalog if catalog is not None else StaticCatalog()
        self._roller = roller if roller is not None else DiceRoller()
        self._settings = settings
        self._trainee = Combatant.from_job(trainee_job)
        self._engine: BattleEngine | None = None

    @property
    def trainee(self) -> Combatant:
        """The persistent trainee."""
        return self._trainee

    @property
    def engine(self) -> BattleEngine | None:
        """Engine of the current or most recent fight."""
        return self._engine

    @property
    def in_battle(self) -> bool:
        """Whether a fight is in progress."""
        return self._engine is not None and not self._engine.phase.is_terminal

    def enemies(self) -> list[EnemyDefinition]:
        """Every enemy the trainee may fight."""
        return self._catalog.list_enemies()

    def start_battle(self, enemy_id: int | str) -> ActionResult:
        """Start a fight against a catalog enemy.

        Rejected while another fight is in progress or when the enemy id
        cannot be resolved.
        """
        if self.in_battle:
            return self._reject("encounter_in_progress")

        try:
            enemy = self._catalog.get_enemy(enemy_id)
        except UnknownCatalogReferenceError as exc:
            logger.warning("Skipping unknown enemy", enemy_id=enemy_id, error=str(exc))
            return self._reject("unknown_enemy")

        engine = BattleEngine(
            [self._trainee],
            compatibility=NeutralCompatibility(),
            roller=self._roller,
            settings=self._settings,
        )
        engine.add_listener(self._on_battle_event)
        self._engine = engine
        return engine.select_enemy(enemy)

    def _on_battle_event(self, event: BattleEvent) -> None:
        if event.kind == EventKind.ENCOUNTER_ENDED and event.payload["outcome"] == BattlePhase.DEFEAT:
            self._trainee.restore_full()
            logger.info("Trainee restored after defeat", hp=self._trainee.current_hp)

    def _reject(self, reason: str) -> ActionResult:
        phase = self._engine.phase if self._engine is not None else BattlePhase.AWAITING_ENEMY
        logger.debug("Training action rejected", reason=reason)
        return ActionResult(
            action=ActionType.SELECT_ENEMY,
            accepted=False,
            phase=phase,
            reason=reason,
        )


__all__ = [
    "TrainingSession",
]
