"""Metadata normalization exports."""

from .attribute_normalizer import normalize_attribute
from .entity_normalizer import AttributePredicate, normalize_entity, sort_by_logical_name
from .metadata_variants import AttributeVariant, localized_label
from .option_set_extractor import extract_option_set
from .relationship_normalizer import (
    normalize_many_to_many,
    normalize_one_to_many,
    normalize_relationships,
)

__all__ = [
    "AttributePredicate",
    "AttributeVariant",
    "extract_option_set",
    "localized_label",
    "normalize_attribute",
    "normalize_entity",
    "normalize_many_to_many",
    "normalize_one_to_many",
    "normalize_relationships",
    "sort_by_logical_name",
]
