"""Reference catalog used to seed an empty vehicle store."""

from __future__ import annotations

import copy
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Vehicle

logger = logging.getLogger(__name__)

GENERIC_SELLER_ID = "generic_seller"

DEFAULT_INSURANCE: list[dict] = [
    {
        "id": "ins1",
        "provider": "HDFC Ergo",
        "name": "Titanium Zero Dep",
        "premium": 45000,
        "type": "Zero-Dep",
        "addons": ["Engine Protect", "Key Loss", "RTI"],
        "coverage_details": "100% coverage on metal and plastic parts.",
    },
    {
        "id": "ins2",
        "provider": "ICICI Lombard",
        "name": "Pay-As-You-Drive",
        "premium": 22000,
        "type": "Pay-As-You-Drive",
        "addons": ["Roadside Assistance"],
        "coverage_details": "Ideal for low usage. Premium based on KM driven.",
    },
    {
        "id": "ins3",
        "provider": "Digit",
        "name": "Standard Comprehensive",
        "premium": 30000,
        "type": "Comprehensive",
        "addons": ["Personal Accident"],
        "coverage_details": "Standard own damage + third party coverage.",
    },
]

_ALL = [0, 1, 2]

_IMG = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&q=80&w=800"

CATALOG: list[dict] = [
    {
        "id": "v1", "name": "Terra Explorer X", "trim": "Alpine Edition", "drive": "AWD", "seats": 5,
        "use_cases": ["Trekking", "Off-road", "Adventure", "Dogs", "Camping", "Mountain"],
        "price_range": (3600000, 4200000), "f_and_i": ["Adventure Pack"],
        "image_url": _IMG.format("1533473359331-0135ef1b58bf"),
        "visual_desc": "Rugged silver SUV with roof rack, mud tires, and high ground clearance",
        "contract_template": (
            "<h3>OFF-ROAD VEHICLE SALES AGREEMENT</h3><br><p><b>1. THE PARTIES</b><br>Buyer: {{buyer_name}}"
            "<br>Seller: Teckion Auto</p><br><p><b>2. UNIT DESCRIPTION</b><br>Model: {{vehicle_name}} (Terra Explorer)"
            "<br>Trim: Alpine Edition</p><br><p><b>3. OFF-ROAD DISCLAIMER</b><br>Seller is not liable for damage on "
            "non-paved roads. Warranty covers powertrain only. Use of 4WD mode on dry pavement voids warranty.</p>"
        ),
        "insurance": _ALL,
    },
    {
        "id": "v2", "name": "CityGlider EV", "trim": "Urban Prime", "drive": "FWD", "seats": 4,
        "use_cases": ["City Commute", "Eco-Friendly", "Budget", "Small Family", "Student", "Efficient"],
        "price_range": (2250000, 2600000), "f_and_i": ["Green Tax Credit"],
        "image_url": _IMG.format("1593055498207-6c3d9a5441b4"),
        "visual_desc": "Compact white electric hatchback, futuristic rounded design, aerodynamic wheels",
        "contract_template": (
            "<h3>EV PURCHASE AGREEMENT</h3><br><p><b>1. THE PARTIES</b><br>Buyer: {{buyer_name}}<br>Seller: Teckion "
            "Auto</p><br><p><b>2. VEHICLE</b><br>Model: {{vehicle_name}}<br>VIN: [VIN]</p><br><p><b>3. BATTERY LEASE"
            "</b><br>The battery is sold with the vehicle (not leased). 8-year manufacturer warranty applies to the "
            "HV battery.</p>"
        ),
        "insurance": [1, 2],
    },
    {
        "id": "v3", "name": "Luxor S-Class", "trim": "Executive", "drive": "RWD", "seats": 5,
        "use_cases": ["Luxury Preference", "Business", "Comfort", "Clients", "Highway", "Status"],
        "price_range": (8800000, 11000000), "f_and_i": ["Executive Lease"],
        "image_url": _IMG.format("1552519507-da3b142c6e3d"),
        "visual_desc": "Black luxury sedan, chrome accents, long wheelbase, tinted windows",
        "contract_template": (
            "<h3>LUXURY VEHICLE PURCHASE AGREEMENT</h3><br><p><b>1. THE PARTIES</b><br>Client: {{buyer_name}}<br>"
            "Seller: Teckion Luxury</p><br><p><b>2. VEHICLE</b><br>Model: {{vehicle_name}}</p><br><p><b>3. CONCIERGE "
            "SERVICE</b><br>Includes 3 years of scheduled maintenance and valet pickup.</p>"
        ),
        "insurance": [0],
    },
    {
        "id": "v4", "name": "FamilyHauler 5000", "trim": "Platinum Minivan", "drive": "AWD", "seats": 8,
        "use_cases": ["Family", "Safety-First", "Roadtrips", "Kids", "Pets", "7 Seater", "8 Seater", "Space"],
        "price_range": (3200000, 3800000), "f_and_i": ["Family Protection Plan"],
        "image_url": _IMG.format("1616422285623-13ff0162193c"),
        "visual_desc": "Blue minivan, sliding doors, roof rails, spacious interior visibility",
        "contract_template": (
            "<h3>FAMILY VEHICLE SALE</h3><br><p><b>1. THE PARTIES</b><br>Buyer: {{buyer_name}}<br>Seller: Teckion "
            "Auto</p><br><p><b>2. SAFETY INSPECTION</b><br>Certified Child Seat Anchors verified. 5-Star Safety "
            "Rating certificate attached.</p>"
        ),
        "insurance": _ALL,
    },
    {
        "id": "v5", "name": "SpeedDemon GT", "trim": "Track Pack", "drive": "RWD", "seats": 2,
        "use_cases": ["Performance", "Weekend", "Luxury", "Solo", "Sport", "Fast"],
        "price_range": (5500000, 6500000), "f_and_i": ["Tire Insurance"],
        "image_url": _IMG.format("1492144534655-ae79c964c9d7"),
        "visual_desc": "Red sports coupe, low profile, spoiler, aggressive front grille",
        "contract_template": (
            "<h3>PERFORMANCE VEHICLE WAIVER</h3><br><p><b>1. PARTIES</b><br>Buyer: {{buyer_name}}</p><br><p><b>2. "
            "TRACK USE</b><br>Manufacturer warranty is VOID if vehicle is used on a competitive race track.</p>"
        ),
        "insurance": [0],
    },
    {
        "id": "v6", "name": "WorkHorse 1500", "trim": "Heavy Duty", "drive": "4WD", "seats": 3,
        "use_cases": ["Work", "Towing", "Off-road", "Cargo", "Truck", "Construction"],
        "price_range": (3500000, 4500000), "f_and_i": ["Commercial Loan"],
        "image_url": _IMG.format("1566008885218-90abf9200ddb"),
        "visual_desc": "White pickup truck, large bed, towing mirrors, rugged bumper",
        "contract_template": (
            "<h3>COMMERCIAL VEHICLE SALE</h3><br><p><b>1. BUYER:</b> {{buyer_name}}</p><br><p><b>2. TOWING "
            "CAPACITY:</b> Verified at 12,000 lbs. Buyer acknowledges commercial registration requirements.</p>"
        ),
        "insurance": _ALL,
    },
    {
        "id": "v7", "name": "Compacto Z", "trim": "Sport", "drive": "FWD", "seats": 4,
        "use_cases": ["City Commute", "Budget", "Student", "Solo", "Efficient", "Cheap"],
        "price_range": (1200000, 1600000), "f_and_i": ["First Time Buyer Program"],
        "image_url": _IMG.format("1541899481282-d53bffe3c35d"),
        "visual_desc": "Small yellow hatchback, sporty rims, compact design",
        "contract_template": (
            "<h3>STANDARD SALE AGREEMENT</h3><br><p><b>1. PARTIES</b><br>Buyer: {{buyer_name}}</p><br><p><b>2. "
            "AS-IS SALE</b><br>This economy vehicle is sold with standard state mandated warranties only.</p>"
        ),
        "insurance": [1, 2],
    },
    {
        "id": "v8", "name": "RidgeClimber", "trim": "Summit", "drive": "4WD", "seats": 5,
        "use_cases": ["Trekking", "Adventure", "Camping", "Dogs", "Mud", "Rocky"],
        "price_range": (2800000, 3400000), "f_and_i": ["Gap Insurance"],
        "image_url": _IMG.format("1532588365922-db13a30cb23d"),
        "visual_desc": "Green boxy SUV, vintage style, spare tire on back, white roof",
        "contract_template": (
            "<h3>ADVENTURE VEHICLE TERMS</h3><br><p><b>1. BUYER:</b> {{buyer_name}}</p><br><p><b>2. MODIFICATIONS"
            "</b><br>Any aftermarket lift kits installed by Buyer post-sale may void suspension warranty.</p>"
        ),
        "insurance": _ALL,
    },
    {
        "id": "v9", "name": "VoltStream SUV", "trim": "Long Range", "drive": "AWD", "seats": 7,
        "use_cases": ["Family", "Eco-Friendly", "Tech-Forward", "Roadtrips", "7 Seater", "Electric"],
        "price_range": (4800000, 5800000), "f_and_i": ["Tech Lease"],
        "image_url": _IMG.format("1560958089-b8a1929cea89"),
        "visual_desc": "Silver aerodynamic SUV, flush door handles, panoramic glass roof",
        "contract_template": (
            "<h3>DIGITAL SALES CONTRACT</h3><br><p><b>1. BUYER:</b> {{buyer_name}}</p><br><p><b>2. SOFTWARE "
            "LICENSE</b><br>Vehicle software is licensed, not sold. OTA updates provided for 5 years.</p>"
        ),
        "insurance": _ALL,
    },
    {
        "id": "v10", "name": "SafeGuard Sentinel", "trim": "Armored Lite", "drive": "AWD", "seats": 4,
        "use_cases": ["Safety-First", "Luxury", "Security", "VIP", "City", "Bulletproof"],
        "price_range": (12000000, 15000000), "f_and_i": ["Security Package"],
        "image_url": _IMG.format("1617788138017-80ad40651399"),
        "visual_desc": "Matte black large SUV, reinforced glass, run-flat tires, imposing stance",
        "contract_template": (
            "<h3>SPECIALTY VEHICLE AGREEMENT</h3><br><p><b>1. BUYER:</b> {{buyer_name}}</p><br><p><b>2. ARMORING"
            "</b><br>Ballistic protection level B4 certified. Handling characteristics differ from standard models.</p>"
        ),
        "insurance": [0],
    },
]


def build_catalog_vehicle(entry: dict) -> Vehicle:
    low, high = entry["price_range"]
    return Vehicle(
        id=entry["id"],
        seller_id=None,
        name=entry["name"],
        trim=entry["trim"],
        drive=entry["drive"],
        seats=entry["seats"],
        price_low=low,
        price_high=high,
        use_cases=list(entry["use_cases"]),
        f_and_i=list(entry["f_and_i"]),
        image_url=entry["image_url"],
        visual_desc=entry["visual_desc"],
        contract_template=entry["contract_template"],
        insurance_options=[copy.deepcopy(DEFAULT_INSURANCE[i]) for i in entry["insurance"]],
    )


def catalog_vehicles() -> list[Vehicle]:
    """Transient (unsaved) Vehicle rows for the reference catalog, in catalog order."""
    return [build_catalog_vehicle(entry) for entry in CATALOG]


def seed_catalog(db: Session) -> int:
    """Insert catalog vehicles missing from the store. Returns the number inserted."""
    existing = set(db.scalars(select(Vehicle.id)).all())
    created = 0
    for entry in CATALOG:
        if entry["id"] in existing:
            continue
        db.add(build_catalog_vehicle(entry))
        created += 1
    db.commit()
    logger.info("catalog.seeded", extra={"event": "catalog.seeded", "created": created})
    return created
