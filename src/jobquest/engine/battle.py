"""Battle engine: the turn state machine for one encounter.

The engine owns a single encounter from enemy selection to a terminal
outcome:

    AWAITING_ENEMY -> PLAYER_TURN <-> ENEMY_TURN -> VICTORY | DEFEAT | FLED

Every public operation returns an ActionResult. Calls made in the wrong
phase are rejected as no-ops instead of raising, so UI code may call
them speculatively. Enemy turns are never resolved automatically: after
a player action hands the turn over, the caller invokes
``resolve_enemy_turn`` whenever it chooses (``enemy_turn_delay`` is the
suggested pause).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from jobquest.core.config import BattleSettings, get_settings
from jobquest.core.constants import DEFENSE_DIVISOR, HEAL_RATIO, MIN_ENEMY_DAMAGE
from jobquest.core.exceptions import EmptyPartyError, InvalidStateTransitionError
from jobquest.core.logging import get_logger
from jobquest.engine.compatibility import (
    CompatibilityStrategy,
    TableCompatibility,
    affinity_note,
    party_score,
    scale_damage,
)
from jobquest.engine.dice import DiceRoller
from jobquest.engine.events import BattleEvent, BattleListener, EventKind
from jobquest.models.battle_log import BattleLog, BattleLogEntry
from jobquest.models.combatants import Combatant, EnemyInstance
from jobquest.models.definitions import EnemyDefinition
from jobquest.models.enums import (
    ActionType,
    ActorPolicy,
    BattlePhase,
    CompatibilityScope,
    LogCategory,
)
from jobquest.models.progression import split_reward


logger = get_logger(__name__)


# =============================================================================
# Action Results
# =============================================================================


@dataclass
class ActionResult:
    """Outcome of a public engine operation.

    Attributes:
        action: The action that was attempted.
        accepted: False when the call was rejected as a no-op.
        phase: Engine phase after the call.
        reason: Short rejection code when not accepted.
        actor: Name of whoever acted.
        roll: Raw die roll, if any.
        multiplier: Compatibility score applied, if any.
        amount: Damage dealt or HP restored.
        messages: Log lines appended by this call.
    """

    action: ActionType
    accepted: bool
    phase: BattlePhase
    reason: str = ""
    actor: str = ""
    roll: int | None = None
    multiplier: float | None = None
    amount: int = 0
    messages: list[str] = field(default_factory=list)


# =============================================================================
# Battle Engine
# =============================================================================


class BattleEngine:
    """State machine for a single encounter.

    The party list is shared with the caller: HP, experience and levels
    are mutated in place so a campaign keeps its progress between
    encounters.

    Example:
        >>> engine = BattleEngine(party, compatibility=TagCompatibility())
        >>> engine.select_enemy(slime)
        >>> result = engine.attack()
        >>> if engine.phase is BattlePhase.ENEMY_TURN:
        ...     engine.resolve_enemy_turn()
    """

    def __init__(
        self,
        party: Sequence[Combatant],
        *,
        compatibility: CompatibilityStrategy | None = None,
        roller: DiceRoller | None = None,
        settings: BattleSettings | None = None,
        outcome_handler: BattleListener | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            party: Party members in order. Must not be empty.
            compatibility: Multiplier strategy; defaults to the bundled table.
            roller: Random source; defaults to an unseeded DiceRoller.
            settings: Battle settings; defaults to the application settings.
            outcome_handler: Owner callback for the ENCOUNTER_ENDED event.
                Unlike listeners, its exceptions propagate to the caller of
                the action that ended the encounter.

        Raises:
            EmptyPartyError: If ``party`` is empty.
        """
        if not party:
            raise EmptyPartyError("A battle needs at least one party member")

        self._party: list[Combatant] = list(party)
        self._compatibility = compatibility if compatibility is not None else TableCompatibility()
        self._roller = roller if roller is not None else DiceRoller()
        self._settings = settings if settings is not None else get_settings().battle

        self._phase = BattlePhase.AWAITING_ENEMY
        self._enemy: EnemyInstance | None = None
        self._active_index = self._first_living_index()
        self._log = BattleLog()
        self._listeners: list[BattleListener] = []
        self._outcome_handler = outcome_handler

        logger.debug(
            "BattleEngine initialized",
            party=[member.id for member in self._party],
            actor_policy=self._settings.actor_policy.value,
            compatibility=type(self._compatibility).__name__,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> BattlePhase:
        """Current phase of the state machine."""
        return self._phase

    @property
    def party(self) -> list[Combatant]:
        """Party members in order."""
        return list(self._party)

    @property
    def enemy(self) -> EnemyInstance | None:
        """The bound enemy, if one was selected."""
        return self._enemy

    @property
    def active_index(self) -> int:
        """Index of the active party member."""
        return self._active_index

    @property
    def active_combatant(self) -> Combatant:
        """The party member taking the current player action."""
        return self._party[self._active_index]

    @property
    def log(self) -> list[BattleLogEntry]:
        """Battle log entries for this encounter."""
        return self._log.entries

    @property
    def outcome(self) -> BattlePhase | None:
        """Terminal phase once the encounter has ended."""
        return self._phase if self._phase.is_terminal else None

    @property
    def enemy_turn_delay(self) -> float:
        """Suggested pause in seconds before resolving the enemy turn."""
        return self._settings.enemy_turn_delay_seconds

    @property
    def living_members(self) -> list[Combatant]:
        """Party members above 0 HP."""
        return [member for member in self._party if member.is_alive]

    def add_listener(self, listener: BattleListener) -> None:
        """Register a callback for engine notifications.

        Args:
            listener: Function called with every BattleEvent.
        """
        self._listeners.append(listener)

    def compatibility_for(self, member: Combatant) -> float:
        """Multiplier the member's attacks use against the bound enemy.

        Returns 1.0 when no enemy is bound.
        """
        if self._enemy is None:
            return 1.0
        if self._settings.compatibility_scope == CompatibilityScope.PARTY:
            return party_score(
                self._compatibility,
                [m.id for m in self._party],
                self._enemy.definition,
            )
        return self._compatibility.score(member.id, self._enemy.definition)

    # -------------------------------------------------------------------------
    # Public Operations
    # -------------------------------------------------------------------------

    def select_enemy(self, enemy: EnemyDefinition) -> ActionResult:
        """Bind a fresh enemy instance and start the encounter."""
        try:
            return self._select_enemy(enemy)
        except InvalidStateTransitionError as exc:
            return self._reject(ActionType.SELECT_ENEMY, exc)

    def attack(self, use_magic: bool = False) -> ActionResult:
        """Attack the enemy with the active party member.

        Args:
            use_magic: Roll against magic instead of attack.
        """
        action = ActionType.MAGIC if use_magic else ActionType.ATTACK
        try:
            return self._attack(action, use_magic=use_magic)
        except InvalidStateTransitionError as exc:
            return self._reject(action, exc)

    def heal(self) -> ActionResult:
        """Heal the active party member. Consumes the turn."""
        try:
            return self._heal()
        except InvalidStateTransitionError as exc:
            return self._reject(ActionType.HEAL, exc)

    def switch_active(self) -> ActionResult:
        """Move the active pointer to the next living member. Free action."""
        try:
            return self._switch_active()
        except InvalidStateTransitionError as exc:
            return self._reject(ActionType.SWITCH, exc)

    def flee(self) -> ActionResult:
        """End the encounter immediately with no rewards."""
        try:
            return self._flee()
        except InvalidStateTransitionError as exc:
            return self._reject(ActionType.FLEE, exc)

    def resolve_enemy_turn(self) -> ActionResult:
        """Resolve the enemy's attack. A no-op outside ENEMY_TURN."""
        try:
            return self._resolve_enemy_turn()
        except InvalidStateTransitionError as exc:
            return self._reject(ActionType.ENEMY_ATTACK, exc)

    def announce(self, message: str) -> BattleLogEntry:
        """Append a system line to the battle log."""
        return self._append_log(message, LogCategory.SYSTEM)

    # -------------------------------------------------------------------------
    # Action Implementations
    # -------------------------------------------------------------------------

    def _select_enemy(self, enemy: EnemyDefinition) -> ActionResult:
        action = ActionType.SELECT_ENEMY
        self._guard(
            self._enemy is None and self._phase == BattlePhase.AWAITING_ENEMY,
            action,
            "enemy_already_bound",
            "An enemy is already bound to this encounter",
        )
        self._guard(
            bool(self.living_members),
            action,
            "party_defeated",
            "No living party member can fight",
        )

        self._enemy = EnemyInstance.spawn(enemy)
        self._log.clear()
        self._append_log(f"{enemy.name} appeared!", LogCategory.SYSTEM)

        logger.info("Encounter started", enemy=enemy.name, enemy_hp=enemy.hp)
        self._begin_player_turn(announce=False)

        return self._accept(action, 0, actor=enemy.name)

    def _attack(self, action: ActionType, *, use_magic: bool) -> ActionResult:
        actor = self._require_actor(action)
        enemy = self._require_enemy(action)
        mark = len(self._log)

        power = actor.magic if use_magic else actor.attack
        roll = self._roller.roll_die(max(1, power))
        score = self.compatibility_for(actor)
        damage = scale_damage(roll, score, magic=use_magic)

        lost = enemy.take_damage(damage)
        self._emit_hp("enemy", str(enemy.definition.id), enemy.name, enemy.current_hp, enemy.max_hp, -lost)

        if use_magic:
            self._append_log(
                f"{actor.name} casts a spell! {damage} damage to {enemy.name}!",
                LogCategory.PLAYER,
            )
        else:
            self._append_log(
                f"{actor.name} attacks! {damage} damage to {enemy.name}!",
                LogCategory.PLAYER,
            )
            note = affinity_note(score)
            if note:
                self._append_log(note, LogCategory.SYSTEM)

        logger.info(
            "Player attack resolved",
            actor=actor.id,
            magic=use_magic,
            roll=roll,
            multiplier=score,
            damage=damage,
            enemy_hp=enemy.current_hp,
        )

        if not enemy.is_alive:
            self._award_victory(enemy)
        else:
            self._transition(BattlePhase.ENEMY_TURN)

        return self._accept(
            action,
            mark,
            actor=actor.name,
            roll=roll,
            multiplier=score,
            amount=damage,
        )

    def _heal(self) -> ActionResult:
        action = ActionType.HEAL
        actor = self._require_actor(action)
        self._require_enemy(action)
        self._guard(
            not actor.is_full_hp,
            action,
            "full_hp",
            f"{actor.name} is already at full HP",
        )

        mark = len(self._log)
        restored = actor.restore_hp(math.floor(actor.max_hp * HEAL_RATIO))
        self._emit_hp("party", actor.id, actor.name, actor.current_hp, actor.max_hp, restored)
        self._append_log(
            f"{actor.name} casts a healing spell! Recovered {restored} HP!",
            LogCategory.PLAYER,
        )
        logger.info("Heal resolved", actor=actor.id, restored=restored, hp=actor.current_hp)

        self._transition(BattlePhase.ENEMY_TURN)
        return self._accept(action, mark, actor=actor.name, amount=restored)

    def _switch_active(self) -> ActionResult:
        action = ActionType.SWITCH
        self._guard(
            self._settings.actor_policy == ActorPolicy.MANUAL,
            action,
            "random_actor_policy",
            "The acting member is chosen at random under this policy",
        )
        actor = self._require_actor(action)
        self._guard(
            len(self.living_members) > 1,
            action,
            "no_other_living_member",
            "No other living party member to switch to",
        )

        mark = len(self._log)
        next_index = self._next_living_index(self._active_index)
        if next_index is not None:
            self._set_active(next_index)
        self._append_log(f"{self.active_combatant.name}'s turn!", LogCategory.SYSTEM)
        logger.debug("Active member switched", previous=actor.id, active=self.active_combatant.id)

        return self._accept(action, mark, actor=self.active_combatant.name)

    def _flee(self) -> ActionResult:
        action = ActionType.FLEE
        self._guard(
            self._phase.is_active,
            action,
            "no_active_encounter",
            "There is no encounter to flee from",
        )

        mark = len(self._log)
        self._append_log("Got away safely!", LogCategory.SYSTEM)
        logger.info("Party fled", enemy=self._enemy.name if self._enemy else None)
        self._transition(BattlePhase.FLED)

        return self._accept(action, mark)

    def _resolve_enemy_turn(self) -> ActionResult:
        action = ActionType.ENEMY_ATTACK
        self._guard(
            self._phase == BattlePhase.ENEMY_TURN,
            action,
            "not_enemy_turn",
            "The enemy can only act during its turn",
        )
        enemy = self._require_enemy(action)
        target = self.active_combatant

        mark = len(self._log)
        roll = self._roller.roll_die(max(1, enemy.definition.attack))
        damage = max(MIN_ENEMY_DAMAGE, roll - target.defense // DEFENSE_DIVISOR)

        lost = target.take_damage(damage)
        self._emit_hp("party", target.id, target.name, target.current_hp, target.max_hp, -lost)
        self._append_log(
            f"{enemy.name} attacks! {target.name} takes {damage} damage!",
            LogCategory.ENEMY,
        )
        logger.info(
            "Enemy attack resolved",
            enemy=enemy.name,
            target=target.id,
            roll=roll,
            damage=damage,
            target_hp=target.current_hp,
        )

        if target.is_alive:
            self._begin_player_turn(announce=False)
        else:
            self._append_log(f"{target.name} has fallen...", LogCategory.SYSTEM)
            next_index = self._next_living_index(self._active_index)
            if next_index is None:
                self._set_active(0)
                self._append_log("The whole party has fallen...", LogCategory.SYSTEM)
                logger.info("Party defeated", enemy=enemy.name)
                self._transition(BattlePhase.DEFEAT)
            else:
                self._set_active(next_index)
                self._begin_player_turn(announce=True)

        return self._accept(action, mark, actor=enemy.name, roll=roll, amount=damage)

    # -------------------------------------------------------------------------
    # Victory & Progression
    # -------------------------------------------------------------------------

    def _award_victory(self, enemy: EnemyInstance) -> None:
        reward = enemy.definition.exp_reward
        share = split_reward(reward, len(self._party))

        self._append_log(f"{enemy.name} was defeated!", LogCategory.SYSTEM)
        self._append_log(f"Gained {reward} experience!", LogCategory.SYSTEM)

        for member in self._party:
            result = member.gain_experience(share)
            for level in result.levels_gained:
                self._append_log(
                    f"{member.name} leveled up! Now level {level}!",
                    LogCategory.SYSTEM,
                )
            if result.levels_gained:
                logger.info("Level up", member=member.id, level=member.level)

        logger.info("Enemy defeated", enemy=enemy.name, reward=reward, share=share)
        self._transition(BattlePhase.VICTORY)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _guard(self, condition: bool, action: ActionType, reason: str, message: str) -> None:
        if not condition:
            raise InvalidStateTransitionError(
                message,
                current_state=self._phase.value,
                action=action.value,
                details={"reason": reason},
            )

    def _require_actor(self, action: ActionType) -> Combatant:
        self._guard(
            self._phase == BattlePhase.PLAYER_TURN,
            action,
            "not_player_turn",
            "Party members can only act during the player turn",
        )
        actor = self.active_combatant
        self._guard(actor.is_alive, action, "actor_defeated", f"{actor.name} cannot act")
        return actor

    def _require_enemy(self, action: ActionType) -> EnemyInstance:
        enemy = self._enemy
        if enemy is None or not enemy.is_alive:
            raise InvalidStateTransitionError(
                "There is no living enemy",
                current_state=self._phase.value,
                action=action.value,
                details={"reason": "no_living_enemy"},
            )
        return enemy

    def _first_living_index(self) -> int:
        for index, member in enumerate(self._party):
            if member.is_alive:
                return index
        return 0

    def _next_living_index(self, start: int) -> int | None:
        """Next living member after ``start``, wrapping around.

        ``start`` itself is considered last, so a lone survivor at
        ``start`` is returned.
        """
        size = len(self._party)
        for offset in range(1, size + 1):
            index = (start + offset) % size
            if self._party[index].is_alive:
                return index
        return None

    def _set_active(self, index: int) -> None:
        if index == self._active_index:
            return
        self._active_index = index
        member = self._party[index]
        self._emit(EventKind.ACTIVE_CHANGED, index=index, member_id=member.id, name=member.name)

    def _begin_player_turn(self, *, announce: bool) -> None:
        if self._settings.actor_policy == ActorPolicy.RANDOM:
            living = [i for i, member in enumerate(self._party) if member.is_alive]
            self._set_active(self._roller.choice(living))
            announce = True
        elif not self.active_combatant.is_alive:
            next_index = self._next_living_index(self._active_index)
            if next_index is not None:
                self._set_active(next_index)

        if announce:
            self._append_log(f"{self.active_combatant.name}'s turn!", LogCategory.SYSTEM)
        self._transition(BattlePhase.PLAYER_TURN)

    def _transition(self, phase: BattlePhase) -> None:
        previous = self._phase
        self._phase = phase
        logger.debug("Phase changed", previous=previous.value, phase=phase.value)
        self._emit(EventKind.PHASE_CHANGED, previous=previous, phase=phase)
        if phase.is_terminal:
            payload: dict[str, Any] = {
                "outcome": phase,
                "enemy_id": self._enemy.definition.id if self._enemy else None,
                "member_ids": [member.id for member in self._party],
            }
            if self._outcome_handler is not None:
                self._outcome_handler(
                    BattleEvent(kind=EventKind.ENCOUNTER_ENDED, payload=dict(payload))
                )
            self._emit(EventKind.ENCOUNTER_ENDED, **payload)

    def _append_log(self, message: str, category: LogCategory) -> BattleLogEntry:
        entry = self._log.append(message, category)
        self._emit(EventKind.LOG, entry=entry)
        return entry

    def _emit_hp(
        self,
        target: str,
        target_id: str,
        name: str,
        current_hp: int,
        max_hp: int,
        delta: int,
    ) -> None:
        self._emit(
            EventKind.HP_CHANGED,
            target=target,
            id=target_id,
            name=name,
            current_hp=current_hp,
            max_hp=max_hp,
            delta=delta,
        )

    def _emit(self, kind: EventKind, **payload: Any) -> None:
        event = BattleEvent(kind=kind, payload=payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Battle listener failed", kind=kind.value)

    def _accept(self, action: ActionType, mark: int, **fields: Any) -> ActionResult:
        return ActionResult(
            action=action,
            accepted=True,
            phase=self._phase,
            messages=self._log.messages[mark:],
            **fields,
        )

    def _reject(self, action: ActionType, exc: InvalidStateTransitionError) -> ActionResult:
        reason = str(exc.details.get("reason", "invalid_state"))
        logger.debug(
            "Action rejected",
            action=action.value,
            phase=self._phase.value,
            reason=reason,
        )
        return ActionResult(action=action, accepted=False, phase=self._phase, reason=reason)


__all__ = [
    "ActionResult",
    "BattleEngine",
]
