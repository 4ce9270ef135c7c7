# Copyright 2026 rsts Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for rsts documentation."""

project = "rsts"
author = "rsts Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
