"""
Battle system - turn-based combat engine.

The engine is stateless apart from its configuration and random source:
every operation takes a Battle snapshot and returns a new one.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from engine.core.rng import RandomSource, default_rng
from tamer.components import (
    Ability,
    AbilityCategory,
    ActiveStatusEffect,
    Element,
    StatusEffect,
    StatusType,
    TargetType,
    random_enemy_count,
)
from tamer.config import BattleConfig, DEFAULT_CONFIG
from tamer.battle.actions import ActionType, BattleAction, Effectiveness
from tamer.battle.actor import Combatant
from tamer.battle.formulas import (
    calculate_damage,
    calculate_flee_chance,
    get_element_multiplier,
)
from tamer.battle.state import ActionResult, Battle, BattleRewards, BattleState
from tamer.battle.targeting import (
    get_adjacent_enemies,
    get_multi_target_damage_multiplier,
    get_valid_targets,
    resolve_targets,
)


def classify_effectiveness(multiplier: float) -> Effectiveness:
    """Message/UI classification of an element multiplier."""
    if multiplier > 1.5:
        return Effectiveness.SUPER
    if multiplier < 0.75:
        return Effectiveness.WEAK
    return Effectiveness.NORMAL


_EFFECTIVENESS_MESSAGES = {
    Effectiveness.SUPER: " It's super effective!",
    Effectiveness.WEAK: " It's not very effective...",
    Effectiveness.NORMAL: "",
}


def _empty_result(battle: Battle, message: str) -> ActionResult:
    return ActionResult(battle=battle, message=message)


def _apply_damage(battle: Battle, combatant_id: str, damage: int) -> Battle:
    stats = battle.combatants[combatant_id].stats
    return battle.update_combatant(
        combatant_id, stats=stats.with_hp(stats.current_hp - damage)
    )


def _apply_heal(battle: Battle, combatant_id: str, amount: int) -> tuple[Battle, int]:
    """Heal clamped to max HP; returns the new battle and the HP actually restored."""
    stats = battle.combatants[combatant_id].stats
    new_stats = stats.with_hp(stats.current_hp + amount)
    healed = new_stats.current_hp - stats.current_hp
    return battle.update_combatant(combatant_id, stats=new_stats), healed


def _apply_status(battle: Battle, combatant_id: str, effect: ActiveStatusEffect) -> Battle:
    current = battle.combatants[combatant_id].status_effects
    return battle.update_combatant(combatant_id, status_effects=current + (effect,))


class BattleEngine:
    """
    Resolves battle actions against immutable Battle snapshots.

    Features:
    - Turn order fixed at creation, sorted by effective speed
    - Attack, ability, defend, flee, capture and item actions
    - Status effect ticking (poison, regen) and expiry
    - Victory/defeat detection and reward calculation
    """

    def __init__(
        self,
        config: Optional[BattleConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng or default_rng
        self.logger = logging.getLogger(__name__)

        self._handlers: dict[ActionType, Callable[[Battle, BattleAction], ActionResult]] = {
            ActionType.ATTACK: self._execute_attack,
            ActionType.ABILITY: self._execute_ability,
            ActionType.DEFEND: self._execute_defend,
            ActionType.FLEE: self._execute_flee,
            ActionType.CAPTURE: self._execute_capture,
            ActionType.ITEM: self._execute_item,
        }

    # Battle creation and turn flow

    def create_battle(
        self,
        player_combatants: Iterable[Combatant],
        enemy_combatants: Iterable[Combatant],
        background_key: str = "battle-bg-forest",
        can_flee: bool = True,
    ) -> Battle:
        """
        Start a battle between two squads.

        Raises:
            ValueError: If two combatants share an id
        """
        players = list(player_combatants)
        enemies = list(enemy_combatants)

        combatants: dict[str, Combatant] = {}
        for combatant in players + enemies:
            if combatant.combatant_id in combatants:
                raise ValueError(f"Duplicate combatant id: {combatant.combatant_id}")
            combatants[combatant.combatant_id] = combatant

        turn_order = self.calculate_turn_order(players + enemies)

        battle = Battle(
            state=BattleState.START,
            combatants=combatants,
            player_ids=tuple(c.combatant_id for c in players),
            enemy_ids=tuple(c.combatant_id for c in enemies),
            turn_order_ids=tuple(c.combatant_id for c in turn_order),
            current_turn_index=0,
            turn_count=1,
            can_flee=can_flee,
            background_key=background_key,
            rewards=None,
        )
        self.logger.info(
            f"Battle created: {len(players)} vs {len(enemies)}, "
            f"order {[c.name for c in turn_order]}"
        )
        return battle

    def calculate_turn_order(self, combatants: Iterable[Combatant]) -> list[Combatant]:
        """Living combatants by descending effective speed, random tiebreak."""
        living = [c for c in combatants if c.is_alive]
        keyed = [(-c.get_speed(self.config), self.rng.random(), i) for i, c in enumerate(living)]
        keyed.sort()
        return [living[i] for _, _, i in keyed]

    def get_current_combatant(self, battle: Battle) -> Optional[Combatant]:
        """Combatant whose turn it is, if any."""
        if battle.current_turn_index >= len(battle.turn_order_ids):
            return None
        return battle.combatants[battle.turn_order_ids[battle.current_turn_index]]

    def determine_next_state(self, battle: Battle) -> BattleState:
        """
        State that follows the current turn.

        A dead next combatant yields ANIMATING, which the caller advances past.
        """
        if battle.all_enemies_defeated:
            return BattleState.VICTORY
        if battle.all_players_defeated:
            return BattleState.DEFEAT

        if not battle.turn_order_ids:
            return BattleState.ANIMATING
        next_id = battle.turn_order_ids[
            (battle.current_turn_index + 1) % len(battle.turn_order_ids)
        ]
        upcoming = battle.combatants[next_id]
        if not upcoming.is_alive:
            return BattleState.ANIMATING
        return BattleState.PLAYER_TURN if upcoming.is_player else BattleState.ENEMY_TURN

    def advance_turn(self, battle: Battle) -> Battle:
        """Move to the next slot in the turn order, counting a round on wrap."""
        state = self.determine_next_state(battle)
        if not battle.turn_order_ids:
            return battle.with_state(state)

        next_index = (battle.current_turn_index + 1) % len(battle.turn_order_ids)
        turn_count = battle.turn_count + 1 if next_index == 0 else battle.turn_count

        if state.is_terminal:
            self.logger.info(f"Battle ended: {state.value} after {battle.turn_count} rounds")

        return battle.model_copy(update={
            "current_turn_index": next_index,
            "turn_count": turn_count,
            "state": state,
        })

    # Action dispatch

    def execute_action(self, battle: Battle, action: BattleAction) -> ActionResult:
        """
        Resolve one action.

        Gameplay failures (bad target, missing MP ...) come back as a
        result with zero damage and an explanatory message.
        """
        handler = self._handlers.get(ActionType(action.type))
        if handler is None:
            return _empty_result(battle, "Nothing happened.")

        result = handler(battle, action)
        self.logger.debug(f"{action.type.value} by {action.actor_id}: {result.message}")
        return result

    def _execute_attack(self, battle: Battle, action: BattleAction) -> ActionResult:
        attacker = battle.find(action.actor_id)
        target = battle.find(action.target_id)
        if attacker is None or target is None:
            return _empty_result(battle, "Invalid target.")

        damage, is_critical = calculate_damage(
            attacker.get_attack(self.config),
            self.config.basic_attack_power,
            target.get_defense(self.config),
            Element.NEUTRAL,
            Element.NEUTRAL,
            attacker.stats.luck,
            config=self.config,
            rng=self.rng,
        )
        updated = _apply_damage(battle, target.combatant_id, damage)

        crit = " Critical hit!" if is_critical else ""
        return ActionResult(
            battle=updated,
            damage=damage,
            is_critical=is_critical,
            message=f"{attacker.name} attacks {target.name} for {damage} damage!{crit}",
        )

    def _execute_ability(self, battle: Battle, action: BattleAction) -> ActionResult:
        attacker = battle.find(action.actor_id)
        if attacker is None or not action.ability_id:
            return _empty_result(battle, "Invalid ability.")

        ability = attacker.find_ability(action.ability_id)
        if ability is None:
            return _empty_result(battle, "Unknown ability.")

        if attacker.stats.current_mp < ability.mp_cost:
            return _empty_result(battle, f"{attacker.name} doesn't have enough MP!")

        # MP is spent once the ability is eligible, hit or miss
        updated = battle.update_combatant(
            attacker.combatant_id,
            stats=attacker.stats.with_mp(attacker.stats.current_mp - ability.mp_cost),
        )
        attacker = updated.combatants[attacker.combatant_id]

        if not self.rng.chance(ability.accuracy / 100):
            return _empty_result(
                updated, f"{attacker.name} used {ability.name} but it missed!"
            )

        if ability.category == AbilityCategory.HEALING:
            return self._execute_healing(updated, attacker, ability, action)
        if ability.category == AbilityCategory.STATUS and ability.power == 0:
            return self._execute_status(updated, attacker, ability, action)
        return self._execute_damage(updated, attacker, ability, action)

    def _execute_healing(
        self,
        battle: Battle,
        caster: Combatant,
        ability: Ability,
        action: BattleAction,
    ) -> ActionResult:
        if ability.target_type == TargetType.ALL_ALLIES:
            total = 0
            for ally in battle.allies_of(caster):
                if not ally.is_alive:
                    continue
                battle, healed = _apply_heal(battle, ally.combatant_id, ability.power)
                total += healed
            return ActionResult(
                battle=battle,
                message=f"{caster.name} used {ability.name}! Healed all allies for {total} HP!",
            )

        target = battle.find(action.target_id or caster.combatant_id)
        if target is None:
            return _empty_result(battle, "Invalid target.")

        battle, healed = _apply_heal(battle, target.combatant_id, ability.power)
        return ActionResult(
            battle=battle,
            message=f"{caster.name} used {ability.name}! {target.name} recovered {healed} HP!",
        )

    def _execute_status(
        self,
        battle: Battle,
        caster: Combatant,
        ability: Ability,
        action: BattleAction,
    ) -> ActionResult:
        effect = ability.status_effect
        if effect is None:
            return _empty_result(battle, "No effect.")

        if ability.target_type == TargetType.SELF:
            target = caster
        else:
            target = battle.find(action.target_id)
        if target is None:
            return _empty_result(battle, "Invalid target.")

        if target.has_status(effect.type):
            return _empty_result(battle, f"{target.name} already has {effect.name}!")

        battle = _apply_status(battle, target.combatant_id, ActiveStatusEffect(
            effect=effect,
            turns_remaining=effect.duration,
            applied_by=caster.combatant_id,
        ))
        return ActionResult(
            battle=battle,
            status_applied=effect.name,
            message=f"{caster.name} used {ability.name}! {target.name} is now {effect.name}!",
        )

    def _roll_hit(self, attacker: Combatant, target: Combatant, ability: Ability):
        """Damage roll for one ability hit against one target."""
        if ability.category == AbilityCategory.PHYSICAL:
            attack_stat = attacker.get_attack(self.config)
            defense_stat = target.get_defense(self.config)
        else:
            attack_stat = attacker.get_magic_attack(self.config)
            defense_stat = target.get_magic_defense(self.config)

        return calculate_damage(
            attack_stat,
            ability.power,
            defense_stat,
            ability.element,
            target.resolve_element(self.config),
            attacker.stats.luck,
            config=self.config,
            rng=self.rng,
        )

    def _execute_damage(
        self,
        battle: Battle,
        attacker: Combatant,
        ability: Ability,
        action: BattleAction,
    ) -> ActionResult:
        if ability.target_type == TargetType.ALL_ENEMIES:
            return self._execute_all_enemies(battle, attacker, ability)
        if (
            ability.target_type == TargetType.ADJACENT_ENEMIES
            or random_enemy_count(ability.target_type) is not None
        ):
            return self._execute_multi_target(battle, attacker, ability, action)

        if action.target_id:
            target = battle.find(action.target_id)
        else:
            fallback = resolve_targets(
                battle, TargetType.SINGLE_ENEMY, None, attacker.combatant_id
            )
            target = battle.find(fallback[0]) if fallback else None
        if target is None:
            return _empty_result(battle, "Invalid target.")

        damage, is_critical = self._roll_hit(attacker, target, ability)
        multiplier = get_element_multiplier(ability.element, target.resolve_element(self.config))
        effectiveness = classify_effectiveness(multiplier)

        battle = _apply_damage(battle, target.combatant_id, damage)

        status_applied = None
        effect = ability.status_effect
        if effect is not None and self.rng.chance(self.config.status_on_hit_chance):
            battle = _apply_status(battle, target.combatant_id, ActiveStatusEffect(
                effect=effect,
                turns_remaining=effect.duration,
                applied_by=attacker.combatant_id,
            ))
            status_applied = effect.name

        crit = " Critical hit!" if is_critical else ""
        return ActionResult(
            battle=battle,
            damage=damage,
            is_critical=is_critical,
            is_effective=effectiveness,
            status_applied=status_applied,
            message=(
                f"{attacker.name} used {ability.name}! {damage} damage!"
                f"{crit}{_EFFECTIVENESS_MESSAGES[effectiveness]}"
            ),
        )

    def _execute_all_enemies(
        self,
        battle: Battle,
        attacker: Combatant,
        ability: Ability,
    ) -> ActionResult:
        total = 0
        any_critical = False
        for target in battle.opponents_of(attacker):
            if not target.is_alive:
                continue
            damage, is_critical = self._roll_hit(attacker, target, ability)
            battle = _apply_damage(battle, target.combatant_id, damage)
            total += damage
            any_critical = any_critical or is_critical

        return ActionResult(
            battle=battle,
            damage=total,
            is_critical=any_critical,
            message=f"{attacker.name} used {ability.name}! {total} total damage to all enemies!",
        )

    def _execute_multi_target(
        self,
        battle: Battle,
        attacker: Combatant,
        ability: Ability,
        action: BattleAction,
    ) -> ActionResult:
        target_ids = self._multi_target_ids(battle, attacker, ability, action)
        targets = [battle.combatants[tid] for tid in target_ids]
        if not targets:
            return _empty_result(battle, "Invalid target.")

        scale = get_multi_target_damage_multiplier(len(targets), self.config)
        total = 0
        any_critical = False
        for target in targets:
            damage, is_critical = self._roll_hit(attacker, target, ability)
            damage = max(1, int(damage * scale))
            battle = _apply_damage(battle, target.combatant_id, damage)
            total += damage
            any_critical = any_critical or is_critical

        crit = " Critical hit!" if any_critical else ""
        return ActionResult(
            battle=battle,
            damage=total,
            is_critical=any_critical,
            message=(
                f"{attacker.name} used {ability.name}! "
                f"{total} total damage to {len(targets)} enemies!{crit}"
            ),
        )

    def _multi_target_ids(
        self,
        battle: Battle,
        attacker: Combatant,
        ability: Ability,
        action: BattleAction,
    ) -> list[str]:
        """
        Targets of an adjacent or random-N ability.

        Pre-resolved ids are kept only if they are distinct living enemies
        the policy could have picked; otherwise the resolver decides.
        """
        if not action.target_ids:
            return resolve_targets(
                battle,
                ability.target_type,
                action.target_id,
                attacker.combatant_id,
                rng=self.rng,
            )

        allowed = {
            c.combatant_id
            for c in get_valid_targets(battle, attacker.combatant_id, ability.target_type)
        }
        picked = list(dict.fromkeys(tid for tid in action.target_ids if tid in allowed))

        if ability.target_type == TargetType.ADJACENT_ENEMIES and picked:
            cluster = get_adjacent_enemies(battle, picked[0], attacker.is_player)
            picked = [tid for tid in picked if tid in cluster]

        count = random_enemy_count(ability.target_type)
        if count is not None:
            picked = picked[:count]
        return picked

    def _execute_defend(self, battle: Battle, action: BattleAction) -> ActionResult:
        actor = battle.find(action.actor_id)
        if actor is None:
            return _empty_result(battle, "Invalid actor.")

        battle = _apply_status(battle, actor.combatant_id, ActiveStatusEffect(
            effect=StatusEffect(
                id="defending",
                name="Defending",
                type=StatusType.SHIELD,
                duration=1,
                magnitude=self.config.defend_shield_magnitude,
            ),
            turns_remaining=1,
            applied_by=actor.combatant_id,
        ))
        return ActionResult(
            battle=battle,
            status_applied="Defending",
            message=f"{actor.name} is defending!",
        )

    def _execute_flee(self, battle: Battle, action: BattleAction) -> ActionResult:
        if not battle.can_flee:
            return _empty_result(battle, "Can't flee from this battle!")

        actor = battle.find(action.actor_id)
        if actor is None:
            return _empty_result(battle, "Invalid actor.")

        enemies = battle.opponents_of(actor)
        avg_speed = sum(e.stats.speed for e in enemies) / len(enemies) if enemies else 0.0
        flee_chance = calculate_flee_chance(actor.stats.speed, avg_speed, self.config)

        if self.rng.chance(flee_chance):
            self.logger.info(f"{actor.name} fled (chance {flee_chance:.2f})")
            return _empty_result(battle.with_state(BattleState.FLED), "Got away safely!")
        return _empty_result(battle, "Couldn't escape!")

    def _execute_capture(self, battle: Battle, action: BattleAction) -> ActionResult:
        # The caller owns the device inventory and runs the capture model
        return _empty_result(
            battle.with_state(BattleState.CAPTURE_ATTEMPT), "Attempting to capture..."
        )

    def _execute_item(self, battle: Battle, action: BattleAction) -> ActionResult:
        # The caller owns the inventory; see tamer.battle.items
        return _empty_result(battle, "Used item.")

    # Status effects

    def process_status_effects(self, battle: Battle, combatant_id: str) -> Battle:
        """
        Apply poison/regen, then count every effect down by one turn.

        Called once per combatant at the start of its turn. Effects apply
        before the countdown, so an effect on its last turn still fires.
        """
        combatant = battle.find(combatant_id)
        if combatant is None:
            return battle

        max_hp = combatant.stats.max_hp
        for active in combatant.status_effects:
            if active.type == StatusType.POISON:
                poison = max(1, int(max_hp * self.config.poison_damage_percent))
                battle = _apply_damage(battle, combatant_id, poison)
            elif active.type == StatusType.REGEN:
                regen = max(1, int(max_hp * self.config.regen_heal_percent))
                battle, _ = _apply_heal(battle, combatant_id, regen)

        remaining = tuple(
            ticked
            for ticked in (se.tick() for se in battle.combatants[combatant_id].status_effects)
            if not ticked.is_expired
        )
        return battle.update_combatant(combatant_id, status_effects=remaining)

    @staticmethod
    def is_sleeping(combatant: Combatant) -> bool:
        """Sleeping combatants skip their turn."""
        return combatant.has_status(StatusType.SLEEP)

    # Effective stats

    def get_effective_speed(self, combatant: Combatant) -> int:
        return combatant.get_speed(self.config)

    def get_effective_attack(self, combatant: Combatant) -> int:
        return combatant.get_attack(self.config)

    def get_effective_defense(self, combatant: Combatant) -> int:
        return combatant.get_defense(self.config)

    # Resolution

    def check_battle_end(self, battle: Battle) -> BattleState:
        """VICTORY or DEFEAT once a side is wiped out, else the current state."""
        if battle.all_enemies_defeated:
            return BattleState.VICTORY
        if battle.all_players_defeated:
            return BattleState.DEFEAT
        return battle.state

    def calculate_battle_rewards(self, battle: Battle) -> BattleRewards:
        """XP scaled by enemy toughness plus a little random gold per enemy."""
        experience = 0
        gold = 0
        for enemy in battle.enemy_squad:
            stat_total = enemy.stats.max_hp + enemy.stats.attack + enemy.stats.defense
            experience += self.config.base_xp_per_enemy + stat_total // 10
            gold += self.config.base_gold_per_enemy + self.rng.randint(0, self.config.gold_bonus_max)

        # Item drops are left to callers with drop tables of their own
        return BattleRewards(experience=experience, gold=gold, items=())
