"""Restoran katalog verileri: personel, bölümler, lokasyonlar, sipariş takvimi ve eşikler.

Bu modül varsayılan değerleri tutar. Çalışma zamanında kullanılan yapı
`StockConfig` nesnesidir ve her router çağrısına açıkça verilir.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from src.models.stock import Section, StaffMember, SupplierSlot

DEFAULT_LOCATION = "Vic Park"
DEFAULT_TRANSFER_LOCATION = "Nedlands"
GENERAL_SECTION = "General"

DEFAULT_LOCATIONS = ["Nedlands", "Vic Park"]

DEFAULT_STAFF = [
    StaffMember("sapna", "Sapna", "👩‍🍳", ["Dry Store", "KOT Fridge & Freezer"]),
    StaffMember("simran", "Simran", "👩‍🍳", ["Vegetables", "Dough", "Marination", "Front Fridge", "Dairy", "Drinks"]),
    StaffMember("charles", "Charles", "👨‍🍳", ["Cold Room", "Meat Stock", "Seafood"]),
    StaffMember("veer", "Veer", "👨‍🍳", ["Back Dry Store", "KOT Dry Section", "KOT Fridge/Freezer", "Mini Freezer"]),
    StaffMember("pramod", "Pramod", "👨‍🍳", ["Mini Storage Fridges", "Curry Stock", "Meat & Seafood"]),
    StaffMember("vijith", "Vijith", "👨‍🍳", ["Mini Storage Fridges", "Curry Stock", "Meat & Seafood"]),
    StaffMember("shushi", "Shushi/Rushda", "👨‍🍳", ["Ordering", "Final Stock Check", "Overall Management"]),
]

DEFAULT_SECTIONS = [
    Section("KOT Section", "🍛", [
        "Sambar", "Tamarind", "Veg Korma", "Combo Curry", "Coconut Chutney", "Red Chutney", "Idli",
        "Mini Idli", "Thattu Idli", "Kuzhi Paniyaram", "Big Vada", "Small Vada", "Raita", "Mint Chutney",
        "Samosa", "Chicken Biryani", "Goat Biryani", "Dum Chicken", "Donne Mutton", "Beef Biryani",
        "Veg Biryani", "Plain Rice", "Sappadu Rice", "Idiyappam", "Prawns", "Lamb Sheek", "Madras Chicken",
    ]),
    Section("Cool Room", "❄️", [
        "Lamb Rogan Josh", "Butter Sauce", "Veg Khorma", "Dal", "North OT", "OT Base", "White Khorma",
        "Dosa Batter", "Sambar", "Curry Base", "Mutton Boiled", "Chicken Lollipop", "Fish Goramthy",
        "Beef Cooked", "Mutton Chukka", "Boiled Chicken", "Noodles", "Lamb Mince Mix", "65",
        "Fried Chicken", "Fish", "Palak", "Chicken Thighs",
    ]),
    Section("Freezer", "🧊", [
        "Fish Fillets", "Raw Prawns", "Green Chillies", "Puff Pastry", "Raw Mutton", "Green Peas",
        "Frozen Carrots", "Spinach", "Varthu Curry Paste", "Chicken Thigh", "Biryani Chicken",
        "Whole Chicken", "Lollipop", "Okra",
    ]),
    Section("Dry Store", "📦", [
        "Long Life Noodle", "Coconut Oil", "Tamarind Chutney", "Chaat Masala", "Baking Soda",
        "Baking Powder", "Tamarind Paste", "Tomato Sauce", "Tea", "Light Soy Sauce", "Dark Soy Sauce",
        "Sweet Chilli Sauce", "Hot Chilli Sauce", "Condensed Milk", "Rose Milk", "Lemon Juice",
        "Schezewan Chutney", "Canola Oil", "Ghee", "Oil", "Rice", "Salt", "Plain Flour", "Raising Flour",
    ]),
    Section("Vegetables", "🥬", [
        "Capsicum", "Coriander", "Spring Onion", "Mint", "Eggplant", "Carrot", "Lemon", "Cucumber",
        "Beans", "Tomato", "Garlic", "Ginger", "Green Chilli", "Cabbage", "Red Cabbage", "Cauliflower",
        "Mushroom", "Red Onion", "White Onion", "Potatoes",
    ]),
    Section("Dairy", "🥛", ["Yogurt", "Paneer", "Cream", "Butter", "Cheese", "Milk"]),
    Section("Drinks", "🥤", [
        "Coca Classic", "Coca Zero", "Fanta", "Sprite", "Water", "Lemonade", "Soda Water",
        "Apple Juice", "Lemon Lime Bitter", "Coconut Water",
    ]),
    Section("Tandoor/Grill", "🔥", [
        "Tandoori Chicken", "Murg Malai Tikka", "Lamb Sheek", "Paneer Tikka", "Bhaji", "Naan",
        "Paratha", "Roti Dough",
    ]),
    Section("Marination", "🫙", ["Yellow Marination", "Red Marination", "White Marination"]),
    Section("Meat & Seafood", "🥩", [
        "Whole Chicken", "Prawns", "Thigh Fillet", "Lollipop", "Fish", "Chicken Chettinad",
        "Chicken Vartha Curry", "Mutton Vartha Curry", "Mutton Chettinad", "White Khorma",
        "Butter Sauce", "OT Base", "Lamb Rogan", "Curry Base",
    ]),
]

DEFAULT_SCHEDULE = [
    SupplierSlot("Amith", "Sunday", "Missing items informed by Friday"),
    SupplierSlot("Vegetables", "Twice a week"),
    SupplierSlot("Shakti", "Wednesday"),
    SupplierSlot("Billy", "Regular pick-up"),
    SupplierSlot("Yuwan", "Friday (Nedlands) / Tuesday (Vic Park)"),
]

DEFAULT_THRESHOLDS = {
    "default": 2,
    "Sambar": 10,
    "Curry Base": 5,
    "Butter Sauce": 5,
    "OT Base": 5,
    "White Khorma": 3,
    "Dosa Batter": 10,
    "Chicken Biryani": 5,
    "White Onion": 20,
    "Potatoes": 5,
    "Tomato": 3,
    "Plain Rice": 5,
    "Big Vada": 5,
    "Small Vada": 5,
}


@dataclass
class StockConfig:
    """Router ve agent'a enjekte edilen yapılandırma nesnesi."""
    staff: list[StaffMember] = field(default_factory=lambda: list(DEFAULT_STAFF))
    sections: list[Section] = field(default_factory=lambda: list(DEFAULT_SECTIONS))
    locations: list[str] = field(default_factory=lambda: list(DEFAULT_LOCATIONS))
    schedule: list[SupplierSlot] = field(default_factory=lambda: list(DEFAULT_SCHEDULE))
    default_location: str = DEFAULT_LOCATION
    default_transfer_location: str = DEFAULT_TRANSFER_LOCATION

    def find_staff(self, staff_id: str) -> Optional[StaffMember]:
        return next((s for s in self.staff if s.id == staff_id), None)

    def find_section(self, name: str) -> Optional[Section]:
        return next((s for s in self.sections if s.name == name), None)
