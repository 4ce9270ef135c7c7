# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the rsts command-line interface."""

import argparse
import sys
from pathlib import Path

from rsts.config import ConfigError, TranslatorConfig, load_config
from rsts.translator import (
    TranslationError,
    render_declaration_set,
    timestamp_alias_declaration,
    translate_file,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the rsts CLI."""
    parser = argparse.ArgumentParser(
        prog="rsts",
        description="Convert Rust types to TypeScript",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Rust source file(s) to translate",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with translator settings (markers, timestamp-alias, primitives)",
    )

    args = parser.parse_args()
    sys.exit(_run(args))


# ################
# Implementation
# ################


def _run(args: argparse.Namespace) -> int:
    """Translate every input file in order, streaming each file's output as it is produced."""
    config = TranslatorConfig()
    if args.config is not None:
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    options = config.render_options()
    sys.stdout.write(timestamp_alias_declaration(options))
    for input_path in args.inputs:
        try:
            result = translate_file(Path(input_path), markers=config.markers)
            for warning in result.warnings:
                print(f"Warning: {input_path}: {warning.message}", file=sys.stderr)
            text = render_declaration_set(result.declarations, options)
        except TranslationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(text)
        sys.stdout.flush()
    return 0
