# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Normalization of raw Rust type syntax into canonical type references.

Only plain paths are representable: ``Vec<Option<i32>>``, ``chrono::DateTime``,
``HashMap<String, u64>``. References, tuples, arrays, qualified paths and the
like are rejected with a :class:`NormalizationError` value rather than an
exception, so the caller can decide whether the failure is fatal.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from rsts.model.types import TypeReference
from rsts.parser.syntax import AngleBracketedArgs, PathType, RawType, TypeArg

# ###############
# Public Interface
# ###############


class NormalizationErrorKind(enum.Enum):
    """Why a raw type could not be normalized."""

    NOT_A_PATH_TYPE = "NotAPathType"
    LEADING_ROOT_MARKER = "LeadingRootMarker"
    QUALIFIED_SELF_NOT_SUPPORTED = "QualifiedSelfNotSupported"
    GENERIC_ARGS_NOT_ON_FINAL_SEGMENT = "GenericArgsNotOnFinalSegment"
    UNSUPPORTED_GENERIC_ARGUMENT_KIND = "UnsupportedGenericArgumentKind"
    UNSUPPORTED_ARGUMENT_SYNTAX = "UnsupportedArgumentSyntax"


@dataclass(frozen=True)
class NormalizationError:
    """A raw type shape the type reference model cannot represent.

    Attributes:
        kind: The category of the failure.
        message: Human-readable description of the offending construct.
    """

    kind: NormalizationErrorKind
    message: str


def normalize_type(node: RawType) -> TypeReference | NormalizationError:
    """Convert a raw type into a TypeReference.

    Generic arguments are accepted on the final path segment only and must
    all be types; they are normalized recursively and the first failure is
    returned as-is.

    Args:
        node: A raw type node produced by the parser.

    Returns:
        The canonical TypeReference, or a NormalizationError describing the
        first unsupported construct encountered.
    """
    if not isinstance(node, PathType):
        return NormalizationError(
            NormalizationErrorKind.NOT_A_PATH_TYPE,
            f"{node.kind.replace('_', ' ')} types have no path form",
        )
    if node.qself is not None:
        return NormalizationError(
            NormalizationErrorKind.QUALIFIED_SELF_NOT_SUPPORTED,
            "qualified paths such as <T as Trait>::Item are not supported",
        )
    if node.leading_colon:
        return NormalizationError(
            NormalizationErrorKind.LEADING_ROOT_MARKER,
            "root-qualified paths (leading '::') are not supported",
        )

    path: list[str] = []
    generic_args: list[TypeReference] = []
    last = len(node.segments) - 1
    for index, segment in enumerate(node.segments):
        if index != last and segment.arguments is not None:
            return NormalizationError(
                NormalizationErrorKind.GENERIC_ARGS_NOT_ON_FINAL_SEGMENT,
                f"segment '{segment.ident}' carries arguments but is not the last path segment",
            )
        path.append(segment.ident)

        if isinstance(segment.arguments, AngleBracketedArgs):
            for arg in segment.arguments.args:
                if not isinstance(arg, TypeArg):
                    return NormalizationError(
                        NormalizationErrorKind.UNSUPPORTED_GENERIC_ARGUMENT_KIND,
                        f"{arg.kind} argument on '{segment.ident}' is not a type",
                    )
                inner = normalize_type(arg.type)
                if isinstance(inner, NormalizationError):
                    return inner
                generic_args.append(inner)
        elif segment.arguments is not None:
            return NormalizationError(
                NormalizationErrorKind.UNSUPPORTED_ARGUMENT_SYNTAX,
                f"'{segment.ident}' uses {segment.arguments.kind} arguments",
            )

    return TypeReference(path=tuple(path), generic_args=tuple(generic_args))
