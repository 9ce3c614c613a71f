"""Market purchases and healing."""

import logging
import math

from tanelorn.content.market import ARMORS, CASTLE_DEFENSES, WEAPONS
from tanelorn.models.items import Armor, CastleDefense, Weapon
from tanelorn.models.player import PlayerState

logger = logging.getLogger(__name__)

HEAL_BASE_RATE = 0.5
HEAL_RATE_PER_LEVEL = 0.1


class MarketManager:
    """Handles gold-for-goods trades with the town market and healer.

    A trade the player cannot pay for leaves the player untouched and
    returns the very same object.
    """

    @staticmethod
    def can_afford(player: PlayerState, cost: int) -> bool:
        return player.gold >= cost

    @staticmethod
    def purchase_weapon(player: PlayerState, weapon: Weapon) -> PlayerState:
        """
        Buy and equip a weapon, replacing the current one.

        Args:
            player: Buyer
            weapon: Weapon from the catalog

        Returns:
            Updated player, or the same player if gold is short
        """
        if not MarketManager.can_afford(player, weapon.cost):
            logger.warning(f"{player.name} cannot afford {weapon.name} ({weapon.cost} gold)")
            return player
        logger.info(f"{player.name} bought {weapon.name} for {weapon.cost} gold")
        return player.model_copy(update={"gold": player.gold - weapon.cost, "weapon": weapon})

    @staticmethod
    def purchase_armor(player: PlayerState, armor: Armor) -> PlayerState:
        """Buy and equip armor. Same rules as purchase_weapon."""
        if not MarketManager.can_afford(player, armor.cost):
            logger.warning(f"{player.name} cannot afford {armor.name} ({armor.cost} gold)")
            return player
        logger.info(f"{player.name} bought {armor.name} for {armor.cost} gold")
        return player.model_copy(update={"gold": player.gold - armor.cost, "armor": armor})

    @staticmethod
    def purchase_castle_defense(player: PlayerState, defense: CastleDefense) -> PlayerState:
        """Add a castle fortification. Already owned ones are not bought twice."""
        if player.owns_defense(defense.id):
            logger.warning(f"{player.name} already owns {defense.name}")
            return player
        if not MarketManager.can_afford(player, defense.cost):
            logger.warning(f"{player.name} cannot afford {defense.name} ({defense.cost} gold)")
            return player
        logger.info(f"{player.name} built {defense.name} for {defense.cost} gold")
        return player.model_copy(
            update={
                "gold": player.gold - defense.cost,
                "castle_defenses": [*player.castle_defenses, defense],
            }
        )

    @staticmethod
    def get_healing_cost(player: PlayerState) -> int:
        """Price of a full heal, rising with level and missing HP."""
        missing = player.max_hp - player.hp
        return math.ceil(missing * (HEAL_BASE_RATE + player.level * HEAL_RATE_PER_LEVEL))

    @staticmethod
    def heal(player: PlayerState) -> PlayerState:
        """
        Pay the healer to restore full HP.

        Returns:
            Healed player, or the same player when already at full health
            or unable to pay
        """
        cost = MarketManager.get_healing_cost(player)
        if cost == 0:
            return player
        if not MarketManager.can_afford(player, cost):
            logger.warning(f"{player.name} cannot afford healing ({cost} gold)")
            return player
        logger.info(f"{player.name} healed for {cost} gold")
        return player.model_copy(update={"gold": player.gold - cost, "hp": player.max_hp})

    @staticmethod
    def get_available_weapons(player: PlayerState) -> list[Weapon]:
        """Weapons the player's level allows, minus the one equipped."""
        equipped = player.weapon.id if player.weapon else None
        return [w for w in WEAPONS if w.required_level <= player.level and w.id != equipped]

    @staticmethod
    def get_available_armors(player: PlayerState) -> list[Armor]:
        equipped = player.armor.id if player.armor else None
        return [a for a in ARMORS if a.required_level <= player.level and a.id != equipped]

    @staticmethod
    def get_available_castle_defenses(player: PlayerState) -> list[CastleDefense]:
        return [
            d for d in CASTLE_DEFENSES
            if d.required_level <= player.level and not player.owns_defense(d.id)
        ]
