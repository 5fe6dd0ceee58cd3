"""
Content model for FGU module builds.

Every model is immutable once validated. Source documents use kebab-case keys
(``short-description``, ``casting-time``) and tagged mappings for variant
fields, e.g.::

    casting-time:
      type: bonusaction
      count: 1
    spell-level:
      type: Level
      number: 3

Record ids are not part of the source documents; they are filled in by
``fgu_builder.ids.assign_ids`` before compilation.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _kebab(name: str) -> str:
    return name.rstrip("_").replace("_", "-")


class ContentModel(BaseModel):
    """Base for all content models: frozen, kebab-case aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=_kebab,
    )


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Ability(str, Enum):
    """The six ability scores, keyed by their source abbreviation."""
    STRENGTH = "str"
    DEXTERITY = "dex"
    CONSTITUTION = "con"
    INTELLIGENCE = "int"
    WISDOM = "wis"
    CHARISMA = "cha"

    @property
    def long_name(self) -> str:
        """Spelling FGU expects in ``savetype``, ``savedcstat`` and ``stat``."""
        return ABILITY_LONG_NAMES[self]


ABILITY_LONG_NAMES: dict[Ability, str] = {
    Ability.STRENGTH: "strength",
    Ability.DEXTERITY: "dexterity",
    Ability.CONSTITUTION: "constitution",
    Ability.INTELLIGENCE: "intelligence",
    Ability.WISDOM: "wisdom",
    Ability.CHARISMA: "charisma",
}


class TimeUnit(str, Enum):
    ROUND = "round"
    MINUTE = "minute"
    HOUR = "hour"


class AttackRange(str, Enum):
    MELEE = "melee"
    RANGED = "ranged"


class ModuleCategory(str, Enum):
    SOURCE_BOOK = "Source Book"


class RuleSet(str, Enum):
    """Supported rulesets. Source documents spell fifth edition ``5e``."""
    FIFTH_EDITION = "5e"

    @classmethod
    def _missing_(cls, value: object) -> RuleSet | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if normalized in (member.value, member.name.lower().replace("_", "-")):
                    return member
        return None

    @property
    def label(self) -> str:
        """Ruleset name as written into ``definition.xml``."""
        return RULESET_LABELS[self]


RULESET_LABELS: dict[RuleSet, str] = {
    RuleSet.FIFTH_EDITION: "5E",
}


# ---------------------------------------------------------------------------
# Spell variants
# ---------------------------------------------------------------------------


class Instant(ContentModel):
    type: Literal["instant"] = "instant"


class Reaction(ContentModel):
    type: Literal["reaction"] = "reaction"


class BonusAction(ContentModel):
    type: Literal["bonusaction"] = "bonusaction"
    count: int = Field(default=1, ge=1)


class Action(ContentModel):
    type: Literal["action"] = "action"
    count: int = Field(default=1, ge=1)


class Forever(ContentModel):
    type: Literal["forever"] = "forever"


CastingTime = Annotated[
    Union[Instant, Reaction, BonusAction, Action, Forever],
    Field(discriminator="type"),
]


class Cantrip(ContentModel):
    type: Literal["Cantrip", "cantrip"] = "Cantrip"


class Level(ContentModel):
    type: Literal["Level", "level"] = "Level"
    number: int = Field(ge=1, le=9)


SpellLevel = Annotated[Union[Cantrip, Level], Field(discriminator="type")]


class AbilityScoreStat(ContentModel):
    """A stat driven by one of the six ability scores."""
    type: Literal["ability-score"] = "ability-score"
    ability: Ability


SpellStat = AbilityScoreStat


class FixedSave(ContentModel):
    """A save with a fixed DC. FGU output for it is not implemented."""
    type: Literal["fixed"] = "fixed"
    value: int


class DcSave(ContentModel):
    """A save against the caster's spell save DC."""
    type: Literal["dc"] = "dc"


class AbilitySave(ContentModel):
    """A save whose DC is derived from an ability score plus a bonus."""
    type: Literal["ability"] = "ability"
    stat: SpellStat
    is_proficient: bool = False
    bonus: int = 0


SaveDifficulty = Annotated[
    Union[FixedSave, DcSave, AbilitySave],
    Field(discriminator="type"),
]


class NoModifier(ContentModel):
    damage_mod: Literal["none"] = "none"


class AbilityModifier(ContentModel):
    damage_mod: Literal["ability-score"] = "ability-score"
    ability: Ability


DamageModifier = Annotated[
    Union[NoModifier, AbilityModifier],
    Field(discriminator="damage_mod"),
]


class FiniteDuration(ContentModel):
    type: Literal["finite"] = "finite"
    count: int = Field(ge=1)
    unit: TimeUnit


class IndefiniteDuration(ContentModel):
    type: Literal["indefinite"] = "indefinite"


EffectDuration = Annotated[
    Union[FiniteDuration, IndefiniteDuration],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Spell actions
# ---------------------------------------------------------------------------


class SpellAttack(ContentModel):
    range: AttackRange
    save: SaveDifficulty = Field(default_factory=DcSave)


class SpellSave(ContentModel):
    is_magic: bool = False
    stat: SpellStat
    save: SaveDifficulty = Field(default_factory=DcSave)


class Dice(ContentModel):
    """``count`` dice of ``dice_type`` faces, e.g. 2 and ``d6``."""
    dice_type: str
    count: int = Field(default=1, ge=1)

    def __str__(self) -> str:
        return f"{self.count}{self.dice_type}"


class SpellDamage(ContentModel):
    modifier: DamageModifier = Field(default_factory=NoModifier)
    damage_type: str
    dice: list[Dice] = Field(min_length=1)


class ActionDamage(ContentModel):
    """One damage action; each entry becomes a row of its ``damagelist``."""
    damage: list[SpellDamage] = Field(min_length=1)


class SpellEffect(ContentModel):
    effect: str = Field(description="Effect label shown in FGU")
    duration: EffectDuration = Field(default_factory=IndefiniteDuration)
    targets_self: bool = False

    @field_validator("duration", mode="before")
    @classmethod
    def _tag_untagged_duration(cls, value: Any) -> Any:
        # Older spell files write the duration as a bare {count, unit} mapping.
        if isinstance(value, dict) and "type" not in value and "unit" in value:
            return {"type": "finite", **value}
        return value


class SpellActions(ContentModel):
    attacks: list[SpellAttack] = Field(default_factory=list)
    saves: list[SpellSave] = Field(default_factory=list)
    damages: list[ActionDamage] = Field(default_factory=list)
    effects: list[SpellEffect] = Field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of actions across all four categories."""
        return len(self.attacks) + len(self.saves) + len(self.damages) + len(self.effects)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class SpellDefinition(ContentModel):
    id: int | None = Field(default=None, exclude=True, ge=1)
    name: str
    short_description: str | None = None
    description: str = Field(description="Long description, markdown")
    duration: str | None = None
    casting_time: CastingTime
    school: str
    spell_level: SpellLevel
    needs_preparation: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "needs-preparation", "needs-preperation", "needs_preparation",
        ),
        serialization_alias="needs-preparation",
    )
    is_ritual: bool = False
    group: str = ""
    actions: SpellActions = Field(default_factory=SpellActions)


class TableRange(ContentModel):
    from_: int
    until: int
    description: str


class TableDefinition(ContentModel):
    id: int | None = Field(default=None, exclude=True, ge=1)
    name: str
    description: str
    formatted_text: str | None = None
    ranges: list[TableRange] = Field(default_factory=list)


class ModuleDefinition(ContentModel):
    name: str
    spell_files: list[str] = Field(default_factory=list)
    table_files: list[str] = Field(default_factory=list)
    source: str = ""
    category: ModuleCategory = ModuleCategory.SOURCE_BOOK
    author: str
    ruleset: RuleSet = RuleSet.FIFTH_EDITION

    @property
    def library_key(self) -> str:
        """Module name lower-cased with all whitespace removed."""
        return "".join(self.name.split()).lower()


class ModuleContent(ContentModel):
    """Everything one build compiles: module metadata plus its records."""
    module: ModuleDefinition
    spells: list[SpellDefinition] = Field(default_factory=list)
    tables: list[TableDefinition] = Field(default_factory=list)
