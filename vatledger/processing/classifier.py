"""Keyword heuristics that decide whether an expense is business or personal."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from vatledger.core.models import Category, TaxField


@dataclass(frozen=True)
class Classification:
    category: Category
    tax_field: Optional[TaxField]
    justification: str


@dataclass(frozen=True)
class ClassificationRule:
    """Outcome applied when any keyword appears in the lower-cased text."""

    name: str
    keywords: Tuple[str, ...]
    outcome: Classification

    def matches(self, lowered_text: str) -> bool:
        return any(keyword in lowered_text for keyword in self.keywords)


# Checked top to bottom, first hit wins. A receipt mentioning both
# "restaurante" and "gasóleo" is therefore PERSONAL.
CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="meals",
        keywords=("restaurante", "refeição", "mesa"),
        outcome=Classification(
            Category.PERSONAL,
            None,
            "Meal keywords ('restaurante/refeição') found.",
        ),
    ),
    ClassificationRule(
        name="fuel",
        keywords=("combustível", "gasóleo", "gasolina", "galp", "bp"),
        outcome=Classification(
            Category.BUSINESS,
            TaxField.OTHER_GOODS_SERVICES,
            "Fuel keywords found.",
        ),
    ),
    ClassificationRule(
        name="office_supplies",
        keywords=("staples", "papel", "escritório"),
        outcome=Classification(
            Category.BUSINESS,
            TaxField.OTHER_GOODS_SERVICES,
            "Office supplies detected.",
        ),
    ),
    ClassificationRule(
        name="electronics",
        keywords=("worten", "fnac", "computador"),
        outcome=Classification(
            Category.BUSINESS,
            TaxField.FIXED_ASSETS,
            "Computer equipment (possible fixed asset).",
        ),
    ),
)

UNDETERMINED = Classification(
    Category.UNDETERMINED,
    None,
    "Could not determine the expense category.",
)


def classify(text: str) -> Classification:
    """Return the outcome of the first rule whose keywords appear in ``text``."""

    lowered = text.lower()
    for rule in CLASSIFICATION_RULES:
        if rule.matches(lowered):
            return rule.outcome
    return UNDETERMINED
