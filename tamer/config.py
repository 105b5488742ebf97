"""
Battle configuration - tunable combat constants.
"""

from __future__ import annotations


class BattleConfig:
    """Configuration for combat, capture and growth formulas."""

    def __init__(
        self,
        # Damage
        damage_variance_min: float = 0.85,
        damage_variance_max: float = 1.15,
        critical_multiplier: float = 2.0,
        base_critical_rate: float = 0.05,
        luck_critical_bonus: float = 0.003,
        basic_attack_power: int = 40,
        status_on_hit_chance: float = 0.5,
        multi_target_multiplier: float = 0.75,
        use_declared_elements: bool = False,
        # Fleeing
        flee_base_chance: float = 0.5,
        flee_speed_factor: float = 0.01,
        flee_min_chance: float = 0.10,
        flee_max_chance: float = 0.95,
        # Capture
        capture_min_rate: float = 0.05,
        capture_max_rate: float = 0.95,
        sleep_capture_bonus: float = 1.5,
        low_hp_capture_threshold: float = 0.25,
        low_hp_capture_modifier: float = 1.2,
        # Status effects
        poison_damage_percent: float = 0.1,
        regen_heal_percent: float = 0.08,
        slow_speed_multiplier: float = 0.5,
        haste_speed_multiplier: float = 1.5,
        shield_defense_multiplier: float = 1.5,
        attack_up_multiplier: float = 1.3,
        defense_up_multiplier: float = 1.3,
        defend_shield_magnitude: float = 0.5,
        item_buff_duration: int = 5,
        # Enemy AI
        ai_heal_threshold: float = 0.3,
        ai_ability_chance: float = 0.6,
        # Rewards
        base_xp_per_enemy: int = 25,
        base_gold_per_enemy: int = 15,
        gold_bonus_max: int = 10,
        # Growth
        max_level: int = 25,
        xp_per_level_step: int = 100,
    ):
        if damage_variance_min > damage_variance_max:
            raise ValueError("damage_variance_min must not exceed damage_variance_max")
        if capture_min_rate > capture_max_rate:
            raise ValueError("capture_min_rate must not exceed capture_max_rate")
        if flee_min_chance > flee_max_chance:
            raise ValueError("flee_min_chance must not exceed flee_max_chance")

        self.damage_variance_min = damage_variance_min
        self.damage_variance_max = damage_variance_max
        self.critical_multiplier = critical_multiplier
        self.base_critical_rate = base_critical_rate
        self.luck_critical_bonus = luck_critical_bonus
        self.basic_attack_power = basic_attack_power
        self.status_on_hit_chance = status_on_hit_chance
        self.multi_target_multiplier = multi_target_multiplier
        self.use_declared_elements = use_declared_elements

        self.flee_base_chance = flee_base_chance
        self.flee_speed_factor = flee_speed_factor
        self.flee_min_chance = flee_min_chance
        self.flee_max_chance = flee_max_chance

        self.capture_min_rate = capture_min_rate
        self.capture_max_rate = capture_max_rate
        self.sleep_capture_bonus = sleep_capture_bonus
        self.low_hp_capture_threshold = low_hp_capture_threshold
        self.low_hp_capture_modifier = low_hp_capture_modifier

        self.poison_damage_percent = poison_damage_percent
        self.regen_heal_percent = regen_heal_percent
        self.slow_speed_multiplier = slow_speed_multiplier
        self.haste_speed_multiplier = haste_speed_multiplier
        self.shield_defense_multiplier = shield_defense_multiplier
        self.attack_up_multiplier = attack_up_multiplier
        self.defense_up_multiplier = defense_up_multiplier
        self.defend_shield_magnitude = defend_shield_magnitude
        self.item_buff_duration = item_buff_duration

        self.ai_heal_threshold = ai_heal_threshold
        self.ai_ability_chance = ai_ability_chance

        self.base_xp_per_enemy = base_xp_per_enemy
        self.base_gold_per_enemy = base_gold_per_enemy
        self.gold_bonus_max = gold_bonus_max

        self.max_level = max_level
        self.xp_per_level_step = xp_per_level_step


DEFAULT_CONFIG = BattleConfig()
