# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Eligibility of struct declarations for translation."""

from collections.abc import Iterable

# ###############
# Public Interface
# ###############

# Structs without one of these derives may serialize by hand-written impls,
# whose wire shape cannot be inferred from the field list.
DEFAULT_MARKERS: frozenset[str] = frozenset({"Serialize", "Deserialize"})


def is_eligible(markers: Iterable[str], recognized: Iterable[str] = DEFAULT_MARKERS) -> bool:
    """Return True if any of the declaration's derive markers is a recognized one.

    Args:
        markers: Marker names attached to the declaration, e.g. ``["Debug", "Serialize"]``.
        recognized: Marker names that make a declaration eligible.
    """
    wanted = set(recognized)
    return any(marker in wanted for marker in markers)
