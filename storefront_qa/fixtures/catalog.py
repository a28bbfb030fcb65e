"""Catalogue data as the storefront UI displays it."""

from __future__ import annotations

from dataclasses import dataclass

from storefront_qa.fixtures.base import freeze


@dataclass(frozen=True)
class CatalogProduct:
    id: str
    name: str
    category: str
    price: str


@dataclass(frozen=True)
class SortOption:
    value: str
    label: str


POPULAR_PRODUCTS = freeze(
    [
        {
            "name": "Combination Pliers",
            "price": "$14.15",
            "description": "Heavy-duty combination pliers for various gripping and cutting tasks.",
        },
        {
            "name": "Pliers",
            "price": "$12.01",
            "description": "Standard pliers for general use in DIY and professional settings.",
        },
        {
            "name": "Bolt Cutters",
            "price": "$48.41",
            "description": "High-leverage bolt cutters capable of cutting through chains and bolts.",
        },
        {
            "name": "Long Nose Pliers",
            "price": "$14.24",
            "description": "Precision long nose pliers for working in tight spaces and with small components.",
        },
        {
            "name": "Slip Joint Pliers",
            "price": "$9.17",
            "description": "Versatile slip joint pliers with adjustable jaw positions for various applications.",
        },
        {
            "name": "Claw Hammer with Shock Reduction Grip",
            "price": "$13.41",
            "description": "Ergonomic claw hammer with shock-reducing grip for comfortable use.",
        },
    ]
)

SORT_OPTIONS: tuple[SortOption, ...] = (
    SortOption("name-asc", "Name (A-Z)"),
    SortOption("name-desc", "Name (Z-A)"),
    SortOption("price-asc", "Price (low to high)"),
    SortOption("price-desc", "Price (high to low)"),
)

CATEGORIES: tuple[str, ...] = ("Hand Tools", "Power Tools", "Other")

SUBCATEGORIES = freeze(
    {
        "Hand Tools": ["Hammer", "Hand Saw", "Wrench", "Screwdriver", "Pliers", "Chisels", "Measures"],
        "Power Tools": ["Grinder", "Sander", "Saw", "Drill"],
        "Other": ["Tool Belts", "Storage Solutions", "Workbench", "Safety Gear", "Fasteners"],
    }
)

COMBINATION_PLIERS = CatalogProduct(
    id="01JVAASNQCT1J5QG7X8PD489S7",
    name="Combination Pliers",
    category="Pliers",
    price="14.15",
)

PLIERS = CatalogProduct(
    id="01JVAASNQRNZX4Z4YMG36WFKRQ",
    name="Pliers",
    category="Pliers",
    price="9.99",
)
