"""Tests for emitters/spell.py: spell records in client.xml."""

import logging
import xml.etree.ElementTree as ET

import pytest

from fgu_builder.emitters.spell import (
    SpellEmitter,
    casting_time_text,
    dice_text,
    spell_level_number,
)
from fgu_builder.errors import ContentError
from fgu_builder.markup import MarkupBuilder
from fgu_builder.models import (
    ABILITY_LONG_NAMES,
    Ability,
    AbilityScoreStat,
    Action,
    BonusAction,
    Dice,
    FixedSave,
    Forever,
    Instant,
    Level,
    ModuleDefinition,
    Reaction,
    SpellActions,
    SpellDamage,
    SpellDefinition,
    SpellSave,
)


def emit(spell: SpellDefinition, module: ModuleDefinition, to_markup=None) -> ET.Element:
    """Emit one spell inside a wrapper element and return the spell element."""
    emitter = SpellEmitter(module, to_markup) if to_markup else SpellEmitter(module)
    b = MarkupBuilder()
    with b.scope("spell"):
        emitter.emit(b, spell)
    root = ET.fromstring(b.finish())
    assert len(root) == 1
    return root[0]


@pytest.fixture
def storm_lance(full_spell: SpellDefinition) -> SpellDefinition:
    return full_spell.model_copy(update={"id": 3})


class TestSpellFields:

    def test_element_named_by_id(self, storm_lance, module_definition, plain_markup) -> None:
        el = emit(storm_lance, module_definition, plain_markup)
        assert el.tag == "id-00003"

    def test_field_order(self, storm_lance, module_definition, plain_markup) -> None:
        el = emit(storm_lance, module_definition, plain_markup)
        assert [child.tag for child in el] == [
            "castingtime", "description", "duration", "level", "locked", "name",
            "ritual", "school", "prepared", "shortdescription", "group", "source",
            "actions",
        ]

    def test_field_values(self, storm_lance, module_definition, plain_markup) -> None:
        el = emit(storm_lance, module_definition, plain_markup)
        assert el.findtext("castingtime") == "1 bonus action"
        assert el.findtext("duration") == "1 minute"
        assert el.findtext("level") == "3"
        assert el.findtext("locked") == "1"
        assert el.findtext("name") == "Storm Lance"
        assert el.findtext("ritual") == "0"
        assert el.findtext("school") == "Evocation"
        assert el.findtext("prepared") == "1"
        assert el.findtext("shortdescription") == "A crackling spear of lightning."
        assert el.findtext("group") == "Storm"
        assert el.findtext("source") == "Test Book"

    def test_type_attributes(self, storm_lance, module_definition, plain_markup) -> None:
        el = emit(storm_lance, module_definition, plain_markup)
        assert el.find("castingtime").get("type") == "string"
        assert el.find("level").get("type") == "number"
        assert el.find("description").get("type") == "formattedtext"

    def test_description_is_converted_markup(self, storm_lance, module_definition) -> None:
        el = emit(storm_lance, module_definition)
        paragraph = el.find("description/p")
        assert paragraph is not None
        assert paragraph.find("strong").text == "lance"

    def test_optional_fields_omitted(self, cantrip, module_definition, plain_markup) -> None:
        el = emit(cantrip.model_copy(update={"id": 1}), module_definition, plain_markup)
        assert el.find("duration") is None
        assert el.find("shortdescription") is None
        assert el.findtext("level") == "0"
        assert el.findtext("castingtime") == "instant"

    def test_booleans_render_as_digits(self, cantrip, module_definition, plain_markup) -> None:
        spell = cantrip.model_copy(update={"id": 1, "is_ritual": True, "needs_preparation": False})
        el = emit(spell, module_definition, plain_markup)
        assert el.findtext("ritual") == "1"
        assert el.findtext("prepared") == "0"

    def test_missing_id_rejected(self, cantrip, module_definition) -> None:
        with pytest.raises(ContentError, match="no id"):
            emit(cantrip, module_definition)


class TestCastingTimeAndLevel:

    @pytest.mark.parametrize(
        "casting_time, expected",
        [
            (Reaction(), "1 reaction"),
            (BonusAction(count=2), "2 bonus action"),
            (Action(count=1), "1 action"),
            (Instant(), "instant"),
            (Forever(), "forever"),
        ],
    )
    def test_casting_time_text(self, cantrip, casting_time, expected) -> None:
        spell = cantrip.model_copy(update={"casting_time": casting_time})
        assert casting_time_text(spell) == expected

    def test_level_number(self, cantrip) -> None:
        assert spell_level_number(cantrip) == 0
        assert spell_level_number(cantrip.model_copy(update={"spell_level": Level(number=9)})) == 9


class TestActions:

    def test_no_actions_gives_empty_actions_element(self, cantrip, module_definition, plain_markup) -> None:
        el = emit(cantrip.model_copy(update={"id": 1}), module_definition, plain_markup)
        actions = el.find("actions")
        assert actions is not None
        assert len(actions) == 0

    def test_count_and_order_across_categories(self, storm_lance, module_definition, plain_markup) -> None:
        el = emit(storm_lance, module_definition, plain_markup)
        actions = el.find("actions")
        assert len(actions) == storm_lance.actions.total == 6
        assert [a.tag for a in actions] == [f"id-0000{i}" for i in range(1, 7)]
        assert [a.findtext("order") for a in actions] == ["1", "2", "3", "4", "5", "6"]
        # Category order: attack, save, save, damage, effect, effect.
        assert [a.findtext("type") for a in actions] == [
            "cast", "cast", "cast", "damage", "effect", "effect",
        ]

    def test_attack(self, storm_lance, module_definition, plain_markup) -> None:
        attack = emit(storm_lance, module_definition, plain_markup).find("actions/id-00001")
        assert [c.tag for c in attack] == ["order", "atktype", "type", "tknbutton", "tknimg"]
        assert attack.findtext("atktype") == "ranged"
        assert attack.find("tknbutton").get("type") == "tknbutton"
        assert attack.findtext("tknbutton") == ""

    def test_dc_save(self, storm_lance, module_definition, plain_markup) -> None:
        save = emit(storm_lance, module_definition, plain_markup).find("actions/id-00002")
        assert [c.tag for c in save] == [
            "order", "savedcmod", "savedcprof", "savemagic", "savetype",
            "tknbutton", "tknimg", "type",
        ]
        assert save.findtext("savedcmod") == "0"
        assert save.findtext("savedcprof") == "1"
        assert save.findtext("savemagic") == "1"
        assert save.findtext("savetype") == "dexterity"

    def test_ability_save(self, storm_lance, module_definition, plain_markup) -> None:
        save = emit(storm_lance, module_definition, plain_markup).find("actions/id-00003")
        assert save.findtext("savedcbase") == "ability"
        assert save.findtext("savedcmod") == "2"
        assert save.findtext("savedcprof") == "1"
        assert save.findtext("savedcstat") == "wisdom"
        assert save.findtext("savemagic") == "0"
        assert save.findtext("savetype") == "constitution"

    def test_fixed_save_emits_only_shared_fields(self, cantrip, module_definition, plain_markup, caplog) -> None:
        spell = cantrip.model_copy(update={
            "id": 1,
            "actions": SpellActions(saves=[
                SpellSave(stat=AbilityScoreStat(ability=Ability.STRENGTH), save=FixedSave(value=14)),
            ]),
        })
        with caplog.at_level(logging.WARNING, logger="fgu-builder.emitters.spell"):
            save = emit(spell, module_definition, plain_markup).find("actions/id-00001")
        assert [c.tag for c in save] == [
            "order", "savemagic", "savetype", "tknbutton", "tknimg", "type",
        ]
        assert "Fixed save DC 14" in caplog.text

    def test_damage(self, storm_lance, module_definition, plain_markup) -> None:
        damage = emit(storm_lance, module_definition, plain_markup).find("actions/id-00004")
        assert damage.findtext("type") == "damage"
        rows = damage.find("damagelist")
        assert [r.tag for r in rows] == ["id-00001", "id-00002"]
        assert rows.findtext("id-00001/type") == "lightning"
        assert rows.findtext("id-00001/dice") == "2d6,1d4"
        assert rows.find("id-00001/dice").get("type") == "dice"
        assert rows.findtext("id-00001/stat") == "charisma"
        assert rows.findtext("id-00002/dice") == "1d8"
        assert rows.find("id-00002/stat") is None

    def test_finite_effect(self, storm_lance, module_definition, plain_markup) -> None:
        effect = emit(storm_lance, module_definition, plain_markup).find("actions/id-00005")
        assert [c.tag for c in effect] == ["order", "targeting", "type", "label", "durunit", "durmod"]
        assert effect.findtext("targeting") == "self"
        assert effect.findtext("label") == "Charged"
        assert effect.findtext("durunit") == "hour"
        assert effect.findtext("durmod") == "2"

    def test_indefinite_effect(self, storm_lance, module_definition, plain_markup) -> None:
        effect = emit(storm_lance, module_definition, plain_markup).find("actions/id-00006")
        assert effect.find("targeting") is None
        assert effect.find("durunit") is None
        assert effect.find("durmod") is None
        assert effect.findtext("label") == "Deafened"


class TestHelpers:

    def test_dice_text(self) -> None:
        damage = SpellDamage(
            damage_type="fire",
            dice=[Dice(count=2, dice_type="d6"), Dice(count=1, dice_type="d4")],
        )
        assert dice_text(damage) == "2d6,1d4"

    def test_ability_long_names(self) -> None:
        assert {a.value: a.long_name for a in Ability} == {
            "str": "strength",
            "dex": "dexterity",
            "con": "constitution",
            "int": "intelligence",
            "wis": "wisdom",
            "cha": "charisma",
        }
        assert set(ABILITY_LONG_NAMES) == set(Ability)
