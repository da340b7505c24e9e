#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtool/vet/__init__.py
"""Structural vet scanner for raw Markdown.

The scanner works on bytes only and is independent of the parser and the
renderer:

- faults: ``Fault`` records and the ``FaultType`` enumeration
- checks: the link syntax and code fence scans
- scanner: ``vet`` runs the checks, sorts the faults and resolves locations
"""

from mdtool.vet.checks import check_code_fences, check_links
from mdtool.vet.faults import Fault, FaultType
from mdtool.vet.scanner import DEFAULT_CHECKS, resolve_locations, vet

__all__ = [
    "DEFAULT_CHECKS",
    "Fault",
    "FaultType",
    "check_code_fences",
    "check_links",
    "resolve_locations",
    "vet",
]
