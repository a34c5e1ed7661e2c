"""Domain enumerations shared by the add form, the list filter and analytics."""

from enum import Enum


class Category(str, Enum):
    FOOD = "Food"
    HOUSEHOLD = "Household"
    SOCIAL = "Social"
    OTHER = "Other"


class SortOrder(str, Enum):
    # insertion order reversed, newest record first
    LATEST = "latest"
    HIGHEST = "highest"
    LOWEST = "lowest"


DEFAULT_CATEGORY = Category.OTHER
DEFAULT_SORT = SortOrder.LATEST
