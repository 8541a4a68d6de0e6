# backend/medcart/seed.py
import logging

from sqlalchemy.orm import Session

from medcart import storage
from medcart.schemas import DrawerIn, MedicationIn

log = logging.getLogger("medcart.seed")

DRAWERS = [
    {"label": "Oral Medications", "position": 1, "color": "#3B82F6"},
    {"label": "Injectables", "position": 2, "color": "#EF4444"},
    {"label": "Liquids & Solutions", "position": 3, "color": "#10B981"},
    {"label": "Controlled Substances", "position": 4, "color": "#8B5CF6"},
    {"label": "Supplies & Tools", "position": 5, "color": "#6B7280", "size": "large"},
]

# keyed by drawer position
ITEMS = {
    1: [
        dict(name="Metoprolol Tartrate", generic_name="metoprolol tartrate", brand_name="Lopressor",
             dosage="50 mg", form="Tablet", route="PO", frequency="BID",
             classification="Beta-adrenergic blocker",
             indication="Hypertension; angina pectoris.",
             warnings="Do not stop abruptly. Hold for apical pulse < 60 or SBP < 100.",
             nursing_considerations="Check apical pulse and blood pressure before administration.",
             storage_instructions="Store at room temperature.",
             prep_method="cup", prep_target_amount="2", prep_target_unit="tablets"),
        dict(name="Acetaminophen", generic_name="acetaminophen", brand_name="Tylenol",
             dosage="650 mg", form="Tablet", route="PO", frequency="Q6H PRN",
             classification="Analgesic, antipyretic",
             indication="Mild pain; fever.",
             warnings="Max 4 g per day from all sources.",
             prep_method="cup", prep_target_amount="2", prep_target_unit="tablets"),
        dict(name="Lisinopril", generic_name="lisinopril", brand_name="Zestril",
             dosage="10 mg", form="Tablet", route="PO", frequency="Daily",
             classification="ACE inhibitor", color="#F59E0B",
             prep_method="cup", prep_target_amount="1", prep_target_unit="tablet"),
        dict(name="Docusate Sodium", generic_name="docusate", dosage="100 mg", form="Capsule",
             route="PO", frequency="BID", classification="Stool softener"),
    ],
    2: [
        dict(name="Enoxaparin", generic_name="enoxaparin sodium", brand_name="Lovenox",
             dosage="40 mg/0.4 mL", form="Prefilled syringe", route="SubQ", frequency="Daily",
             classification="Low molecular weight heparin",
             warnings="Monitor for bleeding. Do not expel the air bubble.",
             color="#EF4444"),
        dict(name="Ondansetron", generic_name="ondansetron", brand_name="Zofran",
             dosage="4 mg (2 mL)", form="Injection, vial 2 mg/mL", route="IV", frequency="Q8H PRN",
             classification="Antiemetic",
             prep_method="syringe", prep_target_amount="2", prep_target_unit="mL"),
        dict(name="Furosemide", generic_name="furosemide", brand_name="Lasix",
             dosage="20 mg (2 mL)", form="Injection, vial 10 mg/mL", route="IV push",
             classification="Loop diuretic",
             nursing_considerations="Monitor potassium and intake/output.",
             prep_method="syringe", prep_target_amount="2", prep_target_unit="mL"),
    ],
    3: [
        dict(name="Amoxicillin Suspension", generic_name="amoxicillin", dosage="250 mg (5 mL)",
             form="Oral suspension 250 mg/5 mL", route="PO", frequency="TID",
             classification="Aminopenicillin antibiotic", color="#10B981",
             storage_instructions="Refrigerate after reconstitution. Discard after 14 days.",
             prep_method="syringe", prep_target_amount="5", prep_target_unit="mL"),
        dict(name="Lactulose", generic_name="lactulose", dosage="10 g (15 mL)",
             form="Oral solution 10 g/15 mL", route="PO", frequency="BID",
             classification="Osmotic laxative",
             prep_method="syringe", prep_target_amount="15", prep_target_unit="mL",
             prep_max_amount="20"),
    ],
    4: [
        dict(name="Morphine Sulfate", generic_name="morphine", dosage="2 mg (0.5 mL)",
             form="Injection, vial 4 mg/mL", route="IV", frequency="Q4H PRN",
             classification="Opioid analgesic", controlled_substance=True, schedule_class="CII",
             warnings="Respiratory depression. Have naloxone available.",
             color="#8B5CF6",
             prep_method="syringe", prep_target_amount="0.5", prep_target_unit="mL"),
        dict(name="Oxycodone", generic_name="oxycodone hydrochloride", dosage="5 mg", form="Tablet",
             route="PO", frequency="Q4H PRN", classification="Opioid analgesic",
             controlled_substance=True, schedule_class="CII", color="#8B5CF6",
             prep_method="cup", prep_target_amount="1", prep_target_unit="tablet"),
    ],
    5: [
        dict(name="Alcohol Prep Pads", dosage="Box of 100", form="Supply", route="N/A",
             classification="Antiseptic supply", item_type="supply"),
        dict(name="Oral Syringe 10 mL", dosage="10 mL", form="Supply", route="N/A",
             classification="Administration supply", item_type="supply"),
        dict(name="Digital Thermometer", dosage="1 unit", form="Tool", route="N/A",
             classification="Monitoring device", item_type="tool"),
        dict(name="Pill Crusher", dosage="1 unit", form="Tool", route="N/A",
             classification="Administration tool", item_type="tool"),
    ],
}


def seed_catalog(db: Session) -> int:
    """Load the demonstration cart into an empty store. Returns the number of items added."""
    if storage.get_drawer_count(db) > 0:
        log.info("Catalog already present; skipping seed")
        return 0

    added = 0
    for spec in DRAWERS:
        drawer = storage.create_drawer(db, DrawerIn(**spec))
        for item in ITEMS.get(spec["position"], []):
            storage.create_medication(db, MedicationIn(drawer_id=drawer.id, **item))
            added += 1
    log.info("Seeded %d drawers and %d items", len(DRAWERS), added)
    return added
