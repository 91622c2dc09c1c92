"""
Addon Blueprint Strings - Entity name helpers

Dasherize/classify rules shared by every blueprint, plus entity name
validation done before anything is written.
"""

from __future__ import annotations

import re

from addon_blueprint.errors import SilentError


# ═══════════════════════════════════════════════════════════════════════════
# NAME TRANSFORMS
# ═══════════════════════════════════════════════════════════════════════════


STRING_DECAMELIZE_REGEXP = re.compile(r"([a-z\d])([A-Z])")
STRING_DASHERIZE_REGEXP = re.compile(r"[ _]")
STRING_CLASSIFY_REGEXP_1 = re.compile(r"^(-|_)+(.)?")
STRING_CLASSIFY_REGEXP_2 = re.compile(r"(.)(-|_|\.|\s)+(.)?")
STRING_CLASSIFY_REGEXP_3 = re.compile(r"(^|/|\.)([a-z])")

TRAILING_SLASH_REGEXP = re.compile(r"(/$|\\$)")


def decamelize(s: str) -> str:
    """Convert camelCase to lower_snake: 'innerHTML' -> 'inner_html'."""
    return STRING_DECAMELIZE_REGEXP.sub(r"\1_\2", s).lower()


def dasherize(s: str) -> str:
    """Convert to dashed form: 'MyAddon' -> 'my-addon', 'a_b c' -> 'a-b-c'."""
    return STRING_DASHERIZE_REGEXP.sub("-", decamelize(s))


def classify(s: str) -> str:
    """Convert to class name form. Scoped names keep their '/' separator."""

    def _leading(match: re.Match[str]) -> str:
        chr_ = match.group(2)
        return f"_{chr_.upper()}" if chr_ else ""

    def _inner(match: re.Match[str]) -> str:
        chr_ = match.group(3)
        return match.group(1) + (chr_.upper() if chr_ else "")

    parts = [
        STRING_CLASSIFY_REGEXP_2.sub(_inner, STRING_CLASSIFY_REGEXP_1.sub(_leading, part))
        for part in s.split("/")
    ]
    return STRING_CLASSIFY_REGEXP_3.sub(lambda m: m.group(0).upper(), "/".join(parts))


# ═══════════════════════════════════════════════════════════════════════════
# ENTITY NAMES
# ═══════════════════════════════════════════════════════════════════════════


def normalize_entity_name(entity_name: str | None) -> str:
    """Validate a raw entity name given on the command line."""
    if not entity_name:
        raise SilentError(
            "The `addon-blueprint new <entity-name>` command requires an entity name "
            "to be specified. For more details, use `addon-blueprint --help`."
        )

    if TRAILING_SLASH_REGEXP.search(entity_name):
        stripped = TRAILING_SLASH_REGEXP.sub("", entity_name)
        raise SilentError(
            f'You specified "{entity_name}", but you can\'t use a trailing slash as an '
            f'entity name with generators. Please re-run the command with "{stripped}".'
        )

    return entity_name
