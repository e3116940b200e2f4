"""Static specialization and class lookup tables.

The tables are read-only mappings populated once at import.  An unknown
specialization id is not an error; lookups simply return ``None``.
"""

from __future__ import annotations

from types import MappingProxyType

__all__ = [
    "CLASS_NAMES",
    "SPEC_CLASS_IDS",
    "SPEC_NAMES",
    "class_name_for_spec",
    "spec_name",
]

CLASS_NAMES = MappingProxyType(
    {
        1: "Warrior",
        2: "Paladin",
        3: "Hunter",
        4: "Rogue",
        5: "Priest",
        6: "Death Knight",
        7: "Shaman",
        8: "Mage",
        9: "Warlock",
        10: "Monk",
        11: "Druid",
        12: "Demon Hunter",
        13: "Evoker",
    }
)

# spec id -> (display name, class id)
_SPECS: dict[int, tuple[str, int]] = {
    62: ("Arcane Mage", 8),
    63: ("Fire Mage", 8),
    64: ("Frost Mage", 8),
    65: ("Holy Paladin", 2),
    66: ("Protection Paladin", 2),
    70: ("Retribution Paladin", 2),
    71: ("Arms Warrior", 1),
    72: ("Fury Warrior", 1),
    73: ("Protection Warrior", 1),
    102: ("Balance Druid", 11),
    103: ("Feral Druid", 11),
    104: ("Guardian Druid", 11),
    105: ("Restoration Druid", 11),
    250: ("Blood Death Knight", 6),
    251: ("Frost Death Knight", 6),
    252: ("Unholy Death Knight", 6),
    253: ("Beast Mastery Hunter", 3),
    254: ("Marksmanship Hunter", 3),
    255: ("Survival Hunter", 3),
    256: ("Discipline Priest", 5),
    257: ("Holy Priest", 5),
    258: ("Shadow Priest", 5),
    259: ("Assassination Rogue", 4),
    260: ("Outlaw Rogue", 4),
    261: ("Subtlety Rogue", 4),
    262: ("Elemental Shaman", 7),
    263: ("Enhancement Shaman", 7),
    264: ("Restoration Shaman", 7),
    265: ("Affliction Warlock", 9),
    266: ("Demonology Warlock", 9),
    267: ("Destruction Warlock", 9),
    268: ("Brewmaster Monk", 10),
    269: ("Windwalker Monk", 10),
    270: ("Mistweaver Monk", 10),
    577: ("Havoc Demon Hunter", 12),
    581: ("Vengeance Demon Hunter", 12),
    1467: ("Devastation Evoker", 13),
    1468: ("Preservation Evoker", 13),
    1473: ("Augmentation Evoker", 13),
}

SPEC_NAMES = MappingProxyType({spec_id: name for spec_id, (name, _) in _SPECS.items()})
SPEC_CLASS_IDS = MappingProxyType(
    {spec_id: class_id for spec_id, (_, class_id) in _SPECS.items()}
)


def spec_name(spec_id: int) -> str | None:
    """Return the display name for ``spec_id``, or None when unknown."""
    return SPEC_NAMES.get(spec_id)


def class_name_for_spec(spec_id: int) -> str | None:
    """Return the class name owning ``spec_id``, or None when unknown."""
    class_id = SPEC_CLASS_IDS.get(spec_id)
    if class_id is None:
        return None
    return CLASS_NAMES.get(class_id)
