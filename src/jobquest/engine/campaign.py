"""Campaign controller: sequences encounters into a run.

A run starts from the job ids saved in the selection store, offers a
small random draw of enemies before each encounter, and ends in CLEARED
once enough encounters are won or GAME_OVER once too many are lost or
fled. The controller owns the CampaignState and writes it to the store
as a single JSON document after every change.

Exactly one encounter is live at a time. The controller is the engine's
outcome handler, so outcomes are recorded without the caller reporting
them, and a failed snapshot write surfaces to whoever ended the encounter.
A run saved by one controller can be continued by another with resume().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from jobquest.catalog.provider import CatalogProvider
from jobquest.core.config import BattleSettings, CampaignSettings, get_settings
from jobquest.core.constants import CAMPAIGN_STATE_KEY
from jobquest.core.exceptions import EmptyPartyError, UnknownCatalogReferenceError
from jobquest.core.logging import bind_context, clear_context, get_logger
from jobquest.engine.battle import BattleEngine
from jobquest.engine.compatibility import (
    CompatibilityStrategy,
    band_for_score,
    party_score,
    strategy_for_mode,
)
from jobquest.engine.dice import DiceRoller
from jobquest.engine.events import BattleEvent
from jobquest.engine.party import build_party
from jobquest.models.campaign import CampaignState, PartyMemberRecord
from jobquest.models.combatants import Combatant
from jobquest.models.definitions import EnemyDefinition
from jobquest.models.enums import BattlePhase, CampaignMode, CampaignStatus, CompatibilityBand


if TYPE_CHECKING:
    from jobquest.storage.selection_store import SelectionStore

logger = get_logger(__name__)


# =============================================================================
# Results
# =============================================================================


@dataclass
class CampaignActionResult:
    """Outcome of a campaign operation.

    Attributes:
        accepted: False when the call was rejected.
        status: Campaign status after the call.
        reason: Short rejection code when not accepted.
        engine: The encounter's engine, for begin_encounter.
    """

    accepted: bool
    status: CampaignStatus
    reason: str = ""
    engine: BattleEngine | None = None


# =============================================================================
# Campaign Controller
# =============================================================================


class CampaignController:
    """Drives a bounded run of encounters with one persistent party.

    Example:
        >>> controller = CampaignController(StaticCatalog(), store)
        >>> controller.start()
        >>> enemy = controller.offered_enemies()[0]
        >>> engine = controller.begin_encounter(enemy.id).engine
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        store: SelectionStore,
        *,
        settings: CampaignSettings | None = None,
        battle_settings: BattleSettings | None = None,
        roller: DiceRoller | None = None,
        compatibility: CompatibilityStrategy | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            catalog: Source of job and enemy definitions.
            store: Where selections are read and run state is written.
            settings: Campaign settings; defaults to the application settings.
            battle_settings: Settings passed to every encounter.
            roller: Random source shared by draws and encounters.
            compatibility: Multiplier strategy; defaults to the one for the mode.
        """
        app_settings = None
        if settings is None or battle_settings is None:
            app_settings = get_settings()

        self._catalog = catalog
        self._store = store
        self._settings = settings if settings is not None else app_settings.campaign
        self._battle_settings = (
            battle_settings if battle_settings is not None else app_settings.battle
        )
        self._roller = roller if roller is not None else DiceRoller()

        if compatibility is None:
            table = getattr(catalog, "compatibility_table", None)
            compatibility = strategy_for_mode(self._settings.mode, table)
        self._compatibility = compatibility

        self._status = CampaignStatus.NOT_STARTED
        self._state: CampaignState | None = None
        self._party: list[Combatant] = []
        self._engine: BattleEngine | None = None

        logger.debug(
            "CampaignController initialized",
            mode=self._settings.mode.value,
            battles_to_clear=self._settings.battles_to_clear,
            max_losses=self._settings.max_losses,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def status(self) -> CampaignStatus:
        """Lifecycle status of the run."""
        return self._status

    @property
    def state(self) -> CampaignState | None:
        """Copy of the run state, None before start or after reset."""
        return self._state.model_copy(deep=True) if self._state is not None else None

    @property
    def party(self) -> list[Combatant]:
        """The persistent party."""
        return list(self._party)

    @property
    def engine(self) -> BattleEngine | None:
        """Engine of the current or most recent encounter."""
        return self._engine

    @property
    def encounter_active(self) -> bool:
        """Whether an encounter is bound and not yet over."""
        return self._engine is not None and not self._engine.phase.is_terminal

    # -------------------------------------------------------------------------
    # Run Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> CampaignActionResult:
        """Start a run from the stored job selection.

        Rejected with ``no_selection`` when nothing is selected and with
        ``empty_party`` when no selected id resolves to a job. A saved run
        in the store is never overwritten: ``saved_run_exists`` asks the
        caller to ``resume()`` or ``reset()`` first.
        """
        if self._status != CampaignStatus.NOT_STARTED:
            return self._reject("not_reset")
        if self._store.get_value(CAMPAIGN_STATE_KEY) is not None:
            return self._reject("saved_run_exists")

        selected = self._store.get_selected_job_ids()
        if not selected:
            return self._reject("no_selection")

        try:
            party = build_party(self._catalog, selected, self._settings.max_party_size)
        except EmptyPartyError as exc:
            logger.warning("Campaign not started", reason="empty_party", error=str(exc))
            return self._reject("empty_party")

        self._party = party
        self._state = CampaignState(
            required_wins=self._settings.battles_to_clear,
            max_losses=self._settings.max_losses,
        )
        self._status = CampaignStatus.IN_PROGRESS
        bind_context(campaign_id=str(self._state.id))

        logger.info(
            "Campaign started",
            mode=self._settings.mode.value,
            party=[member.id for member in party],
        )

        self._draw_offers()
        if not self._end_if_exhausted():
            self._persist()

        return CampaignActionResult(accepted=True, status=self._status)

    def resume(self) -> CampaignActionResult:
        """Continue the run saved in the store.

        Counters, exclusions, offers and party progress are restored from
        the snapshot; HP is restored at the start of the next encounter.

        Rejected with ``no_saved_run`` when the store holds no run,
        ``corrupt_saved_run`` when the snapshot fails validation and
        ``empty_party`` when none of its members resolve to a job.
        """
        if self._status != CampaignStatus.NOT_STARTED:
            return self._reject("not_reset")

        raw = self._store.get_value(CAMPAIGN_STATE_KEY)
        if raw is None:
            return self._reject("no_saved_run")

        try:
            state = CampaignState.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Saved run is invalid", error=str(exc))
            return self._reject("corrupt_saved_run")

        party: list[Combatant] = []
        for record in state.party:
            try:
                job = self._catalog.get_job(record.job_id)
            except UnknownCatalogReferenceError as exc:
                logger.warning("Skipping unknown job", job_id=record.job_id, error=str(exc))
                continue
            member = Combatant.from_job(job)
            member.level = record.level
            member.experience = record.experience
            member.current_hp = min(record.current_hp, member.max_hp)
            party.append(member)

        if not party:
            return self._reject("empty_party")

        self._party = party
        self._state = state
        self._status = CampaignStatus.IN_PROGRESS
        bind_context(campaign_id=str(state.id))

        logger.info(
            "Campaign resumed",
            wins=state.wins,
            losses=state.losses,
            battle=state.current_battle,
            party=[member.id for member in party],
        )

        if not state.offered_enemy_ids:
            self._draw_offers()
        if not self._end_if_exhausted():
            self._persist()

        return CampaignActionResult(accepted=True, status=self._status)

    def reset(self) -> None:
        """Discard the run so a new one can start."""
        if self._state is not None or self._status != CampaignStatus.NOT_STARTED:
            logger.info("Campaign reset", status=self._status.value)

        self._store.delete_value(CAMPAIGN_STATE_KEY)
        self._status = CampaignStatus.NOT_STARTED
        self._state = None
        self._party = []
        self._engine = None
        clear_context()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def offered_enemies(self) -> list[EnemyDefinition]:
        """Candidate enemies for the next encounter."""
        if self._state is None or self._status != CampaignStatus.IN_PROGRESS:
            return []

        offered: list[EnemyDefinition] = []
        for enemy_id in self._state.offered_enemy_ids:
            try:
                offered.append(self._catalog.get_enemy(enemy_id))
            except UnknownCatalogReferenceError as exc:
                logger.warning("Skipping unknown enemy", enemy_id=enemy_id, error=str(exc))
        return offered

    def available_members(self) -> list[Combatant]:
        """Party members that may still fight this run."""
        if self._state is None:
            return []
        if not self._settings.exclude_used_members:
            return list(self._party)
        used = self._state.used_member_ids
        return [member for member in self._party if member.id not in used]

    def party_compatibility(self, enemy: EnemyDefinition) -> tuple[float, CompatibilityBand]:
        """Average multiplier of the available members and its display band."""
        score = party_score(
            self._compatibility,
            [member.id for member in self.available_members()],
            enemy,
        )
        return score, band_for_score(score)

    # -------------------------------------------------------------------------
    # Encounters
    # -------------------------------------------------------------------------

    def begin_encounter(
        self,
        enemy_id: int | str,
        member_ids: list[str] | None = None,
    ) -> CampaignActionResult:
        """Start an encounter against one of the offered enemies.

        Args:
            enemy_id: Id of an offered enemy.
            member_ids: Members to field; defaults to every available member.

        Returns:
            Accepted result carrying the engine, already past enemy selection.
        """
        if self._state is None or self._status != CampaignStatus.IN_PROGRESS:
            return self._reject("not_in_progress")
        if self.encounter_active:
            return self._reject("encounter_in_progress")

        offered = {str(offered_id) for offered_id in self._state.offered_enemy_ids}
        if str(enemy_id) not in offered:
            return self._reject("enemy_not_offered")

        try:
            enemy = self._catalog.get_enemy(enemy_id)
        except UnknownCatalogReferenceError as exc:
            logger.warning("Skipping unknown enemy", enemy_id=enemy_id, error=str(exc))
            return self._reject("unknown_enemy")

        members = self._select_members(member_ids)
        if not members:
            return self._reject("no_members")

        for member in self._party:
            member.restore_full()

        engine = BattleEngine(
            members,
            compatibility=self._compatibility,
            roller=self._roller,
            settings=self._battle_settings,
            outcome_handler=self._on_encounter_ended,
        )
        self._engine = engine
        engine.select_enemy(enemy)

        logger.info(
            "Encounter begun",
            battle=self._state.current_battle,
            enemy=enemy.name,
            members=[member.id for member in members],
        )
        return CampaignActionResult(accepted=True, status=self._status, engine=engine)

    def _select_members(self, member_ids: list[str] | None) -> list[Combatant]:
        available = self.available_members()
        if member_ids is None:
            return available

        by_id = {member.id: member for member in available}
        members: list[Combatant] = []
        for member_id in member_ids:
            member = by_id.pop(member_id, None)
            if member is None:
                logger.warning("Skipping unavailable member", member_id=member_id)
                continue
            members.append(member)
        return members

    def _on_encounter_ended(self, event: BattleEvent) -> None:
        # Storage failures propagate out of the engine action that ended the encounter
        self._record_outcome(
            event.payload["outcome"],
            event.payload["enemy_id"],
            event.payload["member_ids"],
        )

    def _record_outcome(
        self,
        outcome: BattlePhase,
        enemy_id: int | str | None,
        member_ids: list[str],
    ) -> None:
        state = self._state
        if state is None or self._status != CampaignStatus.IN_PROGRESS:
            return

        if outcome == BattlePhase.VICTORY:
            state.wins += 1
        else:
            state.losses += 1

        if enemy_id is not None:
            state.fought_enemy_ids = state.fought_enemy_ids | {enemy_id}
        if self._settings.mode == CampaignMode.ARENA:
            state.used_member_ids = state.used_member_ids | set(member_ids)

        logger.info(
            "Encounter recorded",
            outcome=outcome.value,
            wins=state.wins,
            losses=state.losses,
            battle=state.current_battle,
        )

        if state.is_cleared:
            self._finish(CampaignStatus.CLEARED, "🎉 Adventure cleared! Congratulations!")
            return
        if state.is_game_over:
            self._finish(CampaignStatus.GAME_OVER, "💀 Game over... try again.")
            return

        state.current_battle += 1
        self._draw_offers()
        if not self._end_if_exhausted():
            self._persist()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _draw_offers(self) -> None:
        state = self._state
        if state is None:
            return

        candidates = [
            enemy
            for enemy in self._catalog.list_enemies()
            if not (self._settings.exclude_fought_enemies and enemy.id in state.fought_enemy_ids)
        ]
        drawn = self._roller.sample(candidates, self._settings.enemies_offered)
        state.offered_enemy_ids = [enemy.id for enemy in drawn]
        logger.debug("Enemies offered", enemy_ids=state.offered_enemy_ids)

    def _end_if_exhausted(self) -> bool:
        state = self._state
        if state is None:
            return False
        if not state.offered_enemy_ids:
            self._finish(CampaignStatus.GAME_OVER, "No enemies remain to fight.")
            return True
        if not self.available_members():
            self._finish(CampaignStatus.GAME_OVER, "No party members remain to fight.")
            return True
        return False

    def _finish(self, status: CampaignStatus, message: str) -> None:
        self._status = status
        if self._engine is not None:
            self._engine.announce(message)

        state = self._state
        logger.info(
            "Campaign finished",
            status=status.value,
            wins=state.wins if state else 0,
            losses=state.losses if state else 0,
        )
        self._store.delete_value(CAMPAIGN_STATE_KEY)

    def _persist(self) -> None:
        if self._state is not None:
            self._state.party = [PartyMemberRecord.from_combatant(m) for m in self._party]
            self._store.set_value(CAMPAIGN_STATE_KEY, self._state.model_dump(mode="json"))

    def _reject(self, reason: str) -> CampaignActionResult:
        logger.debug("Campaign action rejected", status=self._status.value, reason=reason)
        return CampaignActionResult(accepted=False, status=self._status, reason=reason)


__all__ = [
    "CampaignActionResult",
    "CampaignController",
]
