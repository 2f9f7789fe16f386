"""
Example Surveys
Ready-made survey types used by the CLI runner and the test-suite
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, List, Optional

from interview import ResponsePath, Responses, ask, one_of, survey


# ===================
# Validators
# ===================

def validate_email(value: str, responses: Responses, path: ResponsePath) -> Optional[str]:
    if "@" not in value or "." not in value:
        return "Please enter a valid email address"
    user, _, domain = value.partition("@")
    if not user or not domain or "@" in domain:
        return "Email must be in format 'user@domain.com'"
    return None


def validate_name(value: str, responses: Responses, path: ResponsePath) -> Optional[str]:
    name = value.strip()
    if not name:
        return "Name cannot be empty"
    if len(name) < 3:
        return "Name must be at least 3 characters"
    if len(name) > 50:
        return "Name must be at most 50 characters"
    if not all(c.isalpha() or c.isspace() for c in name):
        return "Name can only contain letters and spaces"
    return None


def validate_passphrase(value: str, responses: Responses, path: ResponsePath) -> Optional[str]:
    if len(value) < 8:
        return "Passphrase must be at least 8 characters"
    if not any(c.isupper() for c in value):
        return "Passphrase must contain at least one uppercase letter"
    if not any(c.isdigit() for c in value):
        return "Passphrase must contain at least one number"
    return None


MAX_TOPPINGS = 6


def validate_toppings(toppings: list, responses: Responses, path: ResponsePath) -> Optional[str]:
    """Toppings are $0.50 each with a $3 budget."""
    if len(toppings) > MAX_TOPPINGS:
        return f"Max {MAX_TOPPINGS} toppings ($3 budget), you picked {len(toppings)}"
    return None


MAX_NUTRITION_SCORE = 1500


def validate_nutrition(value, responses: Responses, path: ResponsePath) -> Optional[str]:
    """Calories plus four per protein gram must stay under the daily score."""
    siblings = path.parent()
    totals = {}
    for name in ("calories", "protein"):
        stored = responses.get(siblings.child(name))
        totals[name] = stored.value if stored is not None else 0
    totals[path.last()] = value

    if totals["calories"] + totals["protein"] * 4 > MAX_NUTRITION_SCORE:
        return "That's a lot of food! Consider a lighter option."
    return None


MAX_STAT_POINTS = 75
STAT_NAMES = ("strength", "dexterity", "intelligence", "wisdom", "charisma", "constitution")


def validate_stat_total(value: int, responses: Responses, path: ResponsePath) -> Optional[str]:
    """Running total over the stats entered so far, this one included."""
    siblings = path.parent()
    total = value
    for name in STAT_NAMES:
        stored = responses.get(siblings.child(name))
        if stored is not None:
            total += stored.value

    if total > MAX_STAT_POINTS:
        remaining = max(MAX_STAT_POINTS - (total - value), 0)
        return (f"Total stat points ({total}) exceeds maximum of {MAX_STAT_POINTS}! "
                f"You have {remaining} points remaining.")
    return None


STARTING_GOLD = 200


def validate_inventory_budget(items: list, responses: Responses,
                              path: ResponsePath) -> Optional[str]:
    total = sum(item.cost for item in items)
    if total > STARTING_GOLD:
        return (f"Over budget! Total: {total} gold, limit: {STARTING_GOLD} gold. "
                f"Remove some items.")
    return None


# ===================
# User profile
# ===================

@survey
@dataclass
class UserProfile:
    """A simple user profile."""
    name: str = ask("What is your name?")
    age: int = ask("How old are you?", min=0, max=150)
    email: str = ask("What is your email?", validate=validate_email)
    newsletter: bool = ask("Would you like to receive our newsletter?")
    nickname: Optional[str] = ask("Nickname (optional):")


# ===================
# Sandwich order
# ===================

class Bread(Enum):
    ITALIAN = "italian"
    WHEAT = "wheat"
    HONEY_OAT = "honey_oat"
    FLATBREAD = "flatbread"
    WRAP = "wrap"


class FillingType(Enum):
    TURKEY = "turkey"
    HAM = "ham"
    BACON = "bacon"
    CHICKEN = "chicken"
    FALAFEL = "falafel"


@dataclass
class Turkey:
    pass


@dataclass
class Ham:
    pass


@dataclass
class VeggiePatty:
    pass


@survey(newtype=True)
@dataclass
class Double:
    """Double portion of one filling."""
    filling: FillingType = ask("Which filling to double?")


@dataclass
class Combo:
    first: FillingType = ask("First filling:")
    second: FillingType = ask("Second filling:")


Filling = one_of(Turkey, Ham, VeggiePatty, Double, Combo)


class Cheese(Enum):
    AMERICAN = "american"
    PROVOLONE = "provolone"
    SWISS = "swiss"
    CHEDDAR = "cheddar"
    NONE = "none"


class Topping(Enum):
    LETTUCE = "lettuce"
    TOMATO = "tomato"
    ONION = "onion"
    PICKLE = "pickle"
    OLIVE = "olive"
    JALAPENO = "jalapeno"
    SPINACH = "spinach"
    AVOCADO = "avocado"


class Sauce(Enum):
    MAYO = "mayo"
    MUSTARD = "mustard"
    RANCH = "ranch"
    CHIPOTLE = "chipotle"
    NONE = "none"


class Size(Enum):
    SIX_INCH = "6 inch ($7)"
    FOOTLONG = "Footlong ($12)"


@survey(validate_fields=validate_nutrition)
@dataclass
class Nutrition:
    calories: int = ask("Calorie limit:", min=200, max=1200)
    protein: int = ask("Protein goal (g):", min=10, max=100)


@survey(
    prelude="Welcome to the sub shop!\nLet's build your perfect sandwich.",
    epilogue="Order placed! Your sandwich will be ready in 5 minutes.",
)
@dataclass
class SandwichOrder:
    """Build a sub sandwich order."""
    name: str = ask("Name for the order:")
    pin: str = ask("Rewards PIN (4 digits):", mask="*")
    bread: Bread = ask("Choose your bread:")
    filling: Filling = ask("Select your filling:")
    cheese: Cheese = ask("What cheese?")
    toppings: List[Topping] = ask("Pick your toppings (max 6, $0.50 each):",
                                  validate=validate_toppings)
    sauce: Sauce = ask("Choose a sauce:")
    nutrition: Nutrition = ask("Nutrition preferences:")
    tip: int = ask("Tip amount (-$5 to +$20):", min=-5, max=20)
    notes: str = ask("Special instructions:", multiline=True)
    receipt_path: Optional[Path] = ask("Receipt file (optional):")
    size: Size = ask("What size?", default=Size.SIX_INCH)
    toasted: bool = ask("Toast it?", default=True)


# ===================
# Character sheet
# ===================

class Role(Enum):
    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"
    CLERIC = "cleric"


class CompanionSpecies(Enum):
    DOG = "dog"
    CAT = "cat"
    HORSE = "horse"
    DRAGON = "dragon"


@dataclass
class NoCompanion:
    pass


@survey(newtype=True)
@dataclass
class Familiar:
    form: str = ask("What form does your familiar take?")


@dataclass
class Pet:
    name: str = ask("Companion's name:")
    species: CompanionSpecies = ask("Companion's species:")
    years_together: int = ask("Years together:", min=0, max=100)


Companion = one_of(NoCompanion, Familiar, Pet)


@dataclass
class HomeLocation:
    realm: str = ask("What realm do you hail from?")
    village: str = ask("What is your village name?")
    distance_leagues: float = ask("How far is your home from here (in leagues)?", min=0, max=1000)


@survey(validate_fields=validate_stat_total)
@dataclass
class CharacterStats:
    strength: int = ask("Strength (1-20, total max 75):", min=1, max=20)
    dexterity: int = ask("Dexterity (1-20, total max 75):", min=1, max=20)
    intelligence: int = ask("Intelligence (1-20, total max 75):", min=1, max=20)
    wisdom: int = ask("Wisdom (1-20, total max 75):", min=1, max=20)
    charisma: int = ask("Charisma (1-20, total max 75):", min=1, max=20)
    constitution: int = ask("Constitution (1-20, total max 75):", min=1, max=20)


@dataclass
class Sword:
    cost: ClassVar[int] = 80


@dataclass
class Shield:
    cost: ClassVar[int] = 50


@dataclass
class Potion:
    cost: ClassVar[int] = 20


@dataclass
class Scroll:
    cost: ClassVar[int] = 10
    spell: str = ask("Which spell is written on the scroll?")


@dataclass
class MagicWand:
    cost: ClassVar[int] = 100
    core: str = ask("Wand core material:")
    length_inches: float = ask("Wand length (inches):", min=6, max=18)


Item = one_of(Sword, Shield, Potion, Scroll, MagicWand)


@survey(
    prelude="A lantern flickers at the forest's edge. Tell us who you are, traveller.",
    epilogue="The forest remembers you now.",
)
@dataclass
class CharacterSheet:
    """Create a character for the forest adventure."""
    name: str = ask("What is your name, traveller?", validate=validate_name)
    passphrase: str = ask("Speak the secret passphrase:", mask="*",
                          validate=validate_passphrase)
    role: Role = ask("Choose your calling:")
    home: HomeLocation = ask("Where do you come from?")
    stats: CharacterStats = ask("Distribute your stat points:")
    companion: Companion = ask("Who travels with you?")
    inventory: List[Item] = ask("Buy your starting gear (200 gold, repeats allowed):",
                                validate=validate_inventory_budget)
    languages: List[str] = ask("Languages you speak:", min_items=1, max_items=5)


EXAMPLE_SURVEYS: Dict[str, type] = {
    "user-profile": UserProfile,
    "sandwich": SandwichOrder,
    "character": CharacterSheet,
}
