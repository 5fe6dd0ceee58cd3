"""
Spell records in FGU's ``client.xml`` schema.

A spell element holds its scalar fields in a fixed order followed by an
``actions`` element. Actions from all four categories share one counter, in
the order attacks, saves, damages, effects; the counter names each action
element and is repeated in its ``order`` field.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import ContentError
from ..formatting import MarkupConverter, to_markup
from ..ids import element_id
from ..markup import FORMATTED_TEXT, NUMBER, STRING, MarkupBuilder, flag, type_attr
from ..models import (
    AbilityModifier,
    AbilitySave,
    AbilityScoreStat,
    Action,
    ActionDamage,
    AttackRange,
    BonusAction,
    Cantrip,
    DcSave,
    FiniteDuration,
    FixedSave,
    Forever,
    IndefiniteDuration,
    Instant,
    Level,
    ModuleDefinition,
    NoModifier,
    Reaction,
    SpellAttack,
    SpellDamage,
    SpellDefinition,
    SpellEffect,
    SpellSave,
)

logger = logging.getLogger("fgu-builder.emitters.spell")

TOKEN_BUTTON = type_attr("tknbutton")
DICE = type_attr("dice")


class SpellEmitter:
    """Writes spells of one module into a ``MarkupBuilder``."""

    def __init__(
        self,
        module: ModuleDefinition,
        to_markup: MarkupConverter = to_markup,
    ) -> None:
        self.module = module
        self.to_markup = to_markup

    def emit(self, w: MarkupBuilder, spell: SpellDefinition) -> None:
        if spell.id is None:
            raise ContentError(f"Spell {spell.name!r} has no id assigned")

        logger.debug("Emitting spell %d: %s", spell.id, spell.name)
        with w.scope(element_id(spell.id)):
            w.text("castingtime", [STRING], casting_time_text(spell))
            w.raw("description", [FORMATTED_TEXT], self.to_markup(spell.description))
            if spell.duration is not None:
                w.text("duration", [STRING], spell.duration)
            w.text("level", [NUMBER], spell_level_number(spell))
            w.text("locked", [NUMBER], 1)
            w.text("name", [STRING], spell.name)
            w.text("ritual", [NUMBER], flag(spell.is_ritual))
            w.text("school", [STRING], spell.school)
            w.text("prepared", [NUMBER], flag(spell.needs_preparation))
            if spell.short_description is not None:
                w.text("shortdescription", [STRING], spell.short_description)
            w.text("group", [STRING], spell.group)
            w.text("source", [STRING], self.module.name)
            emit_actions(w, spell)


def casting_time_text(spell: SpellDefinition) -> str:
    ct = spell.casting_time
    if isinstance(ct, Reaction):
        return "1 reaction"
    if isinstance(ct, BonusAction):
        return f"{ct.count} bonus action"
    if isinstance(ct, Action):
        return f"{ct.count} action"
    if isinstance(ct, Instant):
        return "instant"
    if isinstance(ct, Forever):
        return "forever"
    raise ContentError(f"Unsupported casting time for {spell.name!r}: {ct!r}")


def spell_level_number(spell: SpellDefinition) -> int:
    level = spell.spell_level
    if isinstance(level, Cantrip):
        return 0
    if isinstance(level, Level):
        return level.number
    raise ContentError(f"Unsupported spell level for {spell.name!r}: {level!r}")


def emit_actions(w: MarkupBuilder, spell: SpellDefinition) -> None:
    """Write the ``actions`` element, numbering every action from 1."""
    actions = spell.actions
    queue: list[tuple[Callable[[MarkupBuilder, object], None], object]] = []
    queue.extend((_emit_attack, a) for a in actions.attacks)
    queue.extend((_emit_save, s) for s in actions.saves)
    queue.extend((_emit_damage, d) for d in actions.damages)
    queue.extend((_emit_effect, e) for e in actions.effects)

    with w.scope("actions"):
        for index, (emit, action) in enumerate(queue, start=1):
            with w.scope(element_id(index)):
                w.text("order", [NUMBER], index)
                emit(w, action)


def _ability_long_name(stat: AbilityScoreStat) -> str:
    if isinstance(stat, AbilityScoreStat):
        return stat.ability.long_name
    raise ContentError(f"Unsupported spell stat: {stat!r}")


def _emit_attack(w: MarkupBuilder, attack: SpellAttack) -> None:
    if attack.range not in (AttackRange.MELEE, AttackRange.RANGED):
        raise ContentError(f"Unsupported attack range: {attack.range!r}")
    w.text("atktype", [STRING], attack.range.value)
    w.text("type", [STRING], "cast")
    w.text("tknbutton", [TOKEN_BUTTON], "")
    w.text("tknimg", [TOKEN_BUTTON], "")


def _emit_save(w: MarkupBuilder, save: SpellSave) -> None:
    difficulty = save.save
    if isinstance(difficulty, DcSave):
        w.text("savedcmod", [NUMBER], 0)
        w.text("savedcprof", [NUMBER], 1)
    elif isinstance(difficulty, FixedSave):
        # FGU has no fixed-DC field; only the shared fields below are written.
        logger.warning(
            "Fixed save DC %d is not supported by the FGU output; omitted",
            difficulty.value,
        )
    elif isinstance(difficulty, AbilitySave):
        w.text("savedcbase", [STRING], "ability")
        w.text("savedcmod", [NUMBER], difficulty.bonus)
        w.text("savedcprof", [NUMBER], flag(difficulty.is_proficient))
        w.text("savedcstat", [STRING], _ability_long_name(difficulty.stat))
    else:
        raise ContentError(f"Unsupported save difficulty: {difficulty!r}")

    w.text("savemagic", [NUMBER], flag(save.is_magic))
    w.text("savetype", [STRING], _ability_long_name(save.stat))
    w.text("tknbutton", [TOKEN_BUTTON], "")
    w.text("tknimg", [TOKEN_BUTTON], "")
    w.text("type", [STRING], "cast")


def dice_text(damage: SpellDamage) -> str:
    """``2d6,1d4`` for two d6 and one d4."""
    return ",".join(str(dice) for dice in damage.dice)


def _emit_damage(w: MarkupBuilder, action: ActionDamage) -> None:
    w.text("type", [STRING], "damage")
    with w.scope("damagelist"):
        for index, damage in enumerate(action.damage, start=1):
            with w.scope(element_id(index)):
                w.text("type", [STRING], damage.damage_type)
                w.text("dice", [DICE], dice_text(damage))
                modifier = damage.modifier
                if isinstance(modifier, AbilityModifier):
                    w.text("stat", [STRING], modifier.ability.long_name)
                elif not isinstance(modifier, NoModifier):
                    raise ContentError(f"Unsupported damage modifier: {modifier!r}")


def _emit_effect(w: MarkupBuilder, effect: SpellEffect) -> None:
    if effect.targets_self:
        w.text("targeting", [STRING], "self")
    w.text("type", [STRING], "effect")
    w.text("label", [STRING], effect.effect)

    duration = effect.duration
    if isinstance(duration, FiniteDuration):
        w.text("durunit", [STRING], duration.unit.value)
        w.text("durmod", [NUMBER], duration.count)
    elif not isinstance(duration, IndefiniteDuration):
        raise ContentError(f"Unsupported effect duration: {duration!r}")
