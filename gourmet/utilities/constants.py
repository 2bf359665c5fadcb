from typing import Final, Tuple

MAX_DISHES_PER_WEEK: Final[int] = 5
MAX_RATING: Final[int] = 5
RARELY_COOKED_THRESHOLD: Final[int] = 3

# Ingredients that never reach any list
SKIPPED_INGREDIENTS: Final[Tuple[str, ...]] = ("Wasser",)

# Assumed to be in stock; shown separately from the real shopping list
PANTRY_STAPLES: Final[Tuple[str, ...]] = (
    "Salz", "Pfeffer", "Öl", "Olivenöl", "Zucker", "Mehl", "Essig", "Brühe",
    "Senf", "Honig", "Butter", "Zwiebel", "Knoblauch", "Agavendicksaft",
    "Paprikapulver",
)

DEFAULT_CATEGORIES: Final[Tuple[str, ...]] = (
    "Hauptgerichte", "Nudeln", "Currys", "Suppen", "Salate", "Vegetarisch", "Desserts",
)
DEFAULT_TAG: Final[str] = "Hauptgerichte"
DEFAULT_DISH_NAME: Final[str] = "Unbenanntes Gericht"

# Recipes imported from Cookidoo are always tagged with this value
COOKIDOO_TAG: Final[str] = "Thermomix"

LABEL_NEXT_WEEK: Final[str] = "Nächste Woche"
LABEL_THIS_WEEK: Final[str] = "Diese Woche"
LABEL_LAST_WEEK: Final[str] = "Letzte Woche"
LABEL_WEEK_PREFIX: Final[str] = "KW"

SHOPPING_LIST_TITLE: Final[str] = "Einkaufsliste"
PANTRY_SECTION_TITLE: Final[str] = "Vorrat (vermutlich vorhanden)"
MISSING_INGREDIENTS_TITLE: Final[str] = "Gerichte ohne Zutatenliste"
