"""
Template bank: every chord formula transposed through all 12 roots.

The bank is built once at import time and treated as read-only. Rebuilding
creates a complete new snapshot and swaps the module reference in one
assignment, so a reader holding the old snapshot never sees a half-built bank.
"""
import collections

import numpy as np

from keychord.vocabulary import CHORD_FORMULAS

Template = collections.namedtuple(
    "Template", ["root", "type_key", "pcs", "size", "ordered_pcs"]
)

TemplateBank = collections.namedtuple("TemplateBank", ["templates", "matrix"])


def pcs_to_vector(pcs):
    """Helper to create a 12-element 0/1 membership vector from pitch classes."""
    v = np.zeros(12, dtype=np.int32)
    for pc in pcs:
        v[pc % 12] = 1
    return v


def _ordered_unique(root, intervals):
    """Transpose `intervals` by `root` into pitch classes, keeping first occurrences in order."""
    return tuple(dict.fromkeys((root + i) % 12 for i in intervals))


def build_templates(formulas=None) -> list[Template]:
    """
    Transpose each formula through roots 0-11.

    Returns:
        list of Template, root-major order (all types for C, then C#, ...).
    """
    if formulas is None:
        formulas = CHORD_FORMULAS

    templates = []
    for root in range(12):
        for type_key, intervals in formulas.items():
            ordered = _ordered_unique(root, intervals)
            templates.append(Template(root, type_key, frozenset(ordered), len(ordered), ordered))
    return templates


def build_bank(formulas=None) -> TemplateBank:
    templates = tuple(build_templates(formulas))
    if templates:
        matrix = np.stack([pcs_to_vector(t.pcs) for t in templates])
    else:
        matrix = np.zeros((0, 12), dtype=np.int32)
    matrix.setflags(write=False)
    return TemplateBank(templates, matrix)


_BANK = build_bank()


def get_bank() -> TemplateBank:
    return _BANK


def get_templates():
    return _BANK.templates


def regen_templates(formulas=None):
    """Rebuild the bank from scratch and publish it as the new snapshot."""
    global _BANK
    _BANK = build_bank(formulas)
    return _BANK.templates
