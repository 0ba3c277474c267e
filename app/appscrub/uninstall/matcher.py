"""Heuristic matching of filesystem entries to an application.

Leftover files are named inconsistently: dotted bundle identifiers,
display names with spaces, kebab/snake variants, or just the vendor.
The matcher builds a set of lowercase search terms from the identity
and accepts any entry whose name hits one of them. Recall is favoured
over precision; the user confirms the final selection before deletion.
"""

import os
from enum import Enum

from appscrub.models.identity import ApplicationIdentity

# Vendor segment shared by every macOS system component
RESERVED_VENDOR_SEGMENT = "apple"

DEFAULT_MIN_TERM_LENGTH = 3

# Suffixes tried against "{term}{suffix}" for the final rule
_EXACT_SUFFIXES: tuple[str, ...] = (".plist", ".savedstate")


class MatchRule(str, Enum):
    """Which rule accepted a candidate.

    Attributes:
        EXACT: Name (or name without extension) equals a term.
        PREFIX: Name (or name without extension) starts with a term.
        CONTAINS: Name (or name without extension) contains a term.
        SUFFIX: Name equals "{term}.plist" or "{term}.savedstate".
    """

    EXACT = "exact"
    PREFIX = "prefix"
    CONTAINS = "contains"
    SUFFIX = "suffix"


def build_search_terms(
    identity: ApplicationIdentity,
    *,
    min_length: int = DEFAULT_MIN_TERM_LENGTH,
) -> frozenset[str]:
    """Build the lowercase search terms for an application.

    Terms are derived from the bundle identifier (full, last component,
    last two components, organization segment), the display name (verbatim,
    without spaces, with dashes, with underscores, first word) and the
    bundle file name.

    Args:
        identity: Application to build terms for.
        min_length: Terms shorter than this are dropped. Very short terms
            would match almost every entry through the contains rule.

    Returns:
        Deduplicated set of lowercase terms.
    """
    terms: set[str] = set()

    bundle_id = identity.bundle_identifier.lower()
    terms.add(bundle_id)

    components = [c for c in bundle_id.split(".") if c]
    if components and len(components[-1]) > 2:
        terms.add(components[-1])
    if len(components) >= 2:
        terms.add(".".join(components[-2:]))
    if len(components) >= 2:
        organization = components[1]
        if len(organization) > 3 and organization != RESERVED_VENDOR_SEGMENT:
            terms.add(organization)

    name = identity.display_name.strip().lower()
    if name:
        terms.add(name)
        terms.add(name.replace(" ", ""))
        terms.add(name.replace(" ", "-"))
        terms.add(name.replace(" ", "_"))
        words = name.split()
        if len(words) > 1 and len(words[0]) > 3:
            terms.add(words[0])

    stem = identity.bundle_stem.strip().lower()
    if stem:
        terms.add(stem)

    return frozenset(t for t in terms if len(t) >= min_length)


def match_rule(candidate_name: str, search_terms: frozenset[str] | set[str]) -> MatchRule | None:
    """Return the first rule that matches a candidate name, if any.

    Rules are tried in order of preference (exact, prefix, contains,
    suffix); any hit includes the entry.

    Args:
        candidate_name: Last path component of the entry.
        search_terms: Terms from build_search_terms().

    Returns:
        The matching rule, or None.
    """
    name = candidate_name.lower()
    stem = os.path.splitext(name)[0]
    names = (name, stem) if stem and stem != name else (name,)

    if any(n in search_terms for n in names):
        return MatchRule.EXACT

    for term in search_terms:
        if any(n.startswith(term) for n in names):
            return MatchRule.PREFIX

    for term in search_terms:
        if any(term in n for n in names):
            return MatchRule.CONTAINS

    for term in search_terms:
        if any(name == f"{term}{suffix}" for suffix in _EXACT_SUFFIXES):
            return MatchRule.SUFFIX

    return None


def matches(candidate_name: str, search_terms: frozenset[str] | set[str]) -> bool:
    """Check whether a candidate name belongs to the application."""
    return match_rule(candidate_name, search_terms) is not None
