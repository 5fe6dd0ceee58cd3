"""
Pytest configuration and fixtures for fgu-builder tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing fgu_builder
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from fgu_builder.models import (  # noqa: E402
    Ability,
    AbilityModifier,
    AbilitySave,
    AbilityScoreStat,
    ActionDamage,
    AttackRange,
    BonusAction,
    Cantrip,
    DcSave,
    Dice,
    FiniteDuration,
    IndefiniteDuration,
    Instant,
    Level,
    ModuleContent,
    ModuleDefinition,
    SpellActions,
    SpellAttack,
    SpellDamage,
    SpellDefinition,
    SpellEffect,
    SpellSave,
    TableDefinition,
    TableRange,
    TimeUnit,
)


@pytest.fixture
def plain_markup():
    """Stand-in markup converter with predictable output."""
    return lambda text: f"<p>{text}</p>"


@pytest.fixture
def module_definition() -> ModuleDefinition:
    return ModuleDefinition(
        name="Test Book",
        author="Jane Doe",
        source="Homebrew",
    )


@pytest.fixture
def cantrip() -> SpellDefinition:
    """A cantrip with no actions."""
    return SpellDefinition(
        name="Light",
        description="Makes things glow.",
        casting_time=Instant(),
        school="Evocation",
        spell_level=Cantrip(),
    )


@pytest.fixture
def full_spell() -> SpellDefinition:
    """A spell with actions in every category."""
    wisdom = AbilityScoreStat(ability=Ability.WISDOM)
    return SpellDefinition(
        name="Storm Lance",
        short_description="A crackling spear of lightning.",
        description="Hurl a **lance** of lightning.",
        duration="1 minute",
        casting_time=BonusAction(count=1),
        school="Evocation",
        spell_level=Level(number=3),
        needs_preparation=True,
        is_ritual=False,
        group="Storm",
        actions=SpellActions(
            attacks=[SpellAttack(range=AttackRange.RANGED)],
            saves=[
                SpellSave(is_magic=True, stat=AbilityScoreStat(ability=Ability.DEXTERITY), save=DcSave()),
                SpellSave(
                    is_magic=False,
                    stat=AbilityScoreStat(ability=Ability.CONSTITUTION),
                    save=AbilitySave(stat=wisdom, is_proficient=True, bonus=2),
                ),
            ],
            damages=[
                ActionDamage(damage=[
                    SpellDamage(
                        damage_type="lightning",
                        dice=[Dice(count=2, dice_type="d6"), Dice(count=1, dice_type="d4")],
                        modifier=AbilityModifier(ability=Ability.CHARISMA),
                    ),
                    SpellDamage(damage_type="thunder", dice=[Dice(count=1, dice_type="d8")]),
                ]),
            ],
            effects=[
                SpellEffect(
                    effect="Charged",
                    duration=FiniteDuration(count=2, unit=TimeUnit.HOUR),
                    targets_self=True,
                ),
                SpellEffect(effect="Deafened", duration=IndefiniteDuration()),
            ],
        ),
    )


@pytest.fixture
def wild_magic_table() -> TableDefinition:
    return TableDefinition(
        name="Wild Magic",
        description="Roll on surge",
        formatted_text="Roll a *d100*.",
        ranges=[
            TableRange(from_=1, until=50, description="Nothing happens"),
            TableRange(from_=51, until=100, description="You turn blue"),
        ],
    )


@pytest.fixture
def module_content(module_definition, full_spell, cantrip, wild_magic_table) -> ModuleContent:
    return ModuleContent(
        module=module_definition,
        spells=[full_spell, cantrip],
        tables=[wild_magic_table],
    )
