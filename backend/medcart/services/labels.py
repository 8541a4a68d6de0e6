# backend/medcart/services/labels.py
"""Lookups the cart and label views use to pick icons, packaging and label text."""
import re
from enum import Enum
from typing import List, Tuple

from medcart.schemas import ItemType
from medcart.services.dosage import record_field


class ItemKind(str, Enum):
    PILL = "pill"
    SYRINGE = "syringe"
    DROPLETS = "droplets"
    STETHOSCOPE = "stethoscope"
    SCISSORS = "scissors"


class Packaging(str, Enum):
    VIAL = "vial"
    BOTTLE = "bottle"
    INHALER = "inhaler"
    SYRINGE = "syringe"
    TOOL = "tool"


ITEM_KIND_BY_TYPE = {
    ItemType.TOOL.value: ItemKind.STETHOSCOPE,
    ItemType.SUPPLY.value: ItemKind.SCISSORS,
}

# first match wins; abbreviations only match as whole words
FORM_PATTERNS: List[Tuple[re.Pattern, ItemKind]] = [
    (re.compile(r"tablet|pill|capsule"), ItemKind.PILL),
    (re.compile(r"injection|syringe|vial"), ItemKind.SYRINGE),
    (re.compile(r"liquid|solution|\biv\b"), ItemKind.DROPLETS),
]

PACKAGING_PATTERNS: List[Tuple[re.Pattern, Packaging]] = [
    (re.compile(r"inhaler|\bmdi\b|nebulizer"), Packaging.INHALER),
    (re.compile(r"injection|vial|infusion|powder for"), Packaging.VIAL),
    (re.compile(r"syringe"), Packaging.SYRINGE),
]

LABEL_SECTIONS = [
    ("Indication", "indication"),
    ("Warnings", "warnings"),
    ("Contraindications", "contraindications"),
    ("Side Effects", "side_effects"),
    ("Nursing Considerations", "nursing_considerations"),
    ("Storage", "storage_instructions"),
]


def item_kind(form: str, item_type: str) -> ItemKind:
    if item_type in ITEM_KIND_BY_TYPE:
        return ITEM_KIND_BY_TYPE[item_type]
    lower = (form or "").lower()
    for pattern, kind in FORM_PATTERNS:
        if pattern.search(lower):
            return kind
    return ItemKind.PILL


def packaging_type(form: str, route: str) -> Packaging:
    f = (form or "").lower()
    r = (route or "").lower()
    if "tool" in f or "supply" in f or r == "n/a":
        return Packaging.TOOL
    for pattern, packaging in PACKAGING_PATTERNS:
        if pattern.search(f):
            return packaging
    return Packaging.BOTTLE


def label_sections(record) -> List[Tuple[str, str]]:
    """(title, text) pairs for the non-empty clinical fields of a record."""
    sections = []
    for title, field in LABEL_SECTIONS:
        text = record_field(record, field)
        if text and str(text).strip():
            sections.append((title, str(text).strip()))
    return sections


def item_count_label(count: int) -> str:
    return f"{count} {'item' if count == 1 else 'items'}"
