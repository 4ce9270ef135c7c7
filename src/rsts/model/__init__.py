# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Translation model for rsts (type references, records, unions)."""

from rsts.model.declarations import DeclarationSet, Field, Record, Union, Variant
from rsts.model.types import TypeReference

__all__ = [
    # Type system
    "TypeReference",
    # Declarations
    "Field",
    "Record",
    "Variant",
    "Union",
    "DeclarationSet",
]
