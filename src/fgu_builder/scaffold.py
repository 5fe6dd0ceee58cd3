"""
Starter spell and table files.

The samples exercise every field a record file can carry, so authors can
delete what they do not need instead of looking up key names.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import yaml

from .errors import ScaffoldError
from .models import (
    Ability,
    AbilityModifier,
    AbilitySave,
    AbilityScoreStat,
    ActionDamage,
    AttackRange,
    Cantrip,
    ContentModel,
    DcSave,
    Dice,
    FiniteDuration,
    IndefiniteDuration,
    Instant,
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

logger = logging.getLogger("fgu-builder.scaffold")

SAMPLE_DESCRIPTION = """
# Simple Description

- List item 1
- List item 2
"""


def sample_spell(name: str) -> SpellDefinition:
    charisma = AbilityScoreStat(ability=Ability.CHARISMA)
    return SpellDefinition(
        name=name,
        short_description="Something simple",
        duration="1 minute",
        description=SAMPLE_DESCRIPTION,
        casting_time=Instant(),
        school="Evocation",
        spell_level=Cantrip(),
        needs_preparation=False,
        is_ritual=False,
        group="A group",
        actions=SpellActions(
            attacks=[
                SpellAttack(range=AttackRange.MELEE, save=DcSave()),
                SpellAttack(range=AttackRange.RANGED, save=DcSave()),
            ],
            saves=[
                SpellSave(is_magic=False, stat=charisma, save=DcSave()),
                SpellSave(
                    is_magic=False,
                    stat=charisma,
                    save=AbilitySave(stat=charisma, is_proficient=True, bonus=1),
                ),
            ],
            damages=[
                ActionDamage(damage=[
                    SpellDamage(
                        modifier=AbilityModifier(ability=Ability.CONSTITUTION),
                        damage_type="slashing",
                        dice=[Dice(dice_type="d4", count=1)],
                    ),
                ]),
            ],
            effects=[
                SpellEffect(
                    effect="DMG: 4d4",
                    duration=FiniteDuration(count=1, unit=TimeUnit.MINUTE),
                    targets_self=True,
                ),
                SpellEffect(
                    effect="DMG: 4d4",
                    duration=FiniteDuration(count=1, unit=TimeUnit.ROUND),
                    targets_self=False,
                ),
                SpellEffect(
                    effect="DMG: 4d4",
                    duration=IndefiniteDuration(),
                    targets_self=True,
                ),
            ],
        ),
    )


def sample_table(name: str) -> TableDefinition:
    return TableDefinition(
        name=name,
        description="A simple table",
        ranges=[
            TableRange(from_=1, until=10, description="low"),
            TableRange(from_=11, until=100, description="high"),
        ],
    )


def render_sample(record: ContentModel) -> str:
    """Serialize a record the way record files are written: kebab-case YAML."""
    data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def write_sample(record: ContentModel, path: Path | str) -> Path:
    """Write ``record`` as YAML to ``path`` with an atomic replace.

    Raises:
        ScaffoldError: The file could not be written.
    """
    target = Path(path)
    content = render_sample(record)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent, suffix=".yaml.tmp", prefix=".sample_",
        )
    except OSError as e:
        raise ScaffoldError(f"Cannot prepare {target}: {e}") from e

    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(target)
    except OSError as e:
        Path(tmp_path).unlink(missing_ok=True)
        raise ScaffoldError(f"Cannot write {target}: {e}") from e
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise

    logger.info(
        "Wrote file %s. You will need to add it to your module definition.", target,
    )
    return target
