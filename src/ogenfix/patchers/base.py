"""Detect-and-splice engine shared by all patchers.

A defect is described declaratively by a `SpliceRule`: one compiled pattern whose
named `anchor` group marks the statement before which a correction fragment is
inserted. The engine finds every non-overlapping match, decides whether the site
already carries the correction, and rebuilds the buffer with the fragment spliced
in front of each unfixed anchor. Bytes outside the matched spans are copied verbatim.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger("ogenfix.patchers")


@dataclass(frozen=True)
class SpliceRule:
    name: str
    pattern: re.Pattern[bytes]
    anchor: str
    """Name of the group in `pattern` in front of which the fragment is inserted."""
    render: Callable[[re.Match[bytes]], bytes]
    """Builds the fragment for one match (fixed text, or parameterized by captured groups)."""
    identity: str | None = None
    """Optional group naming the construct, used for logging and reporting."""
    fixed_marker: bytes | None = None
    """If this occurs inside the matched span, the site is treated as already corrected."""


@dataclass(frozen=True)
class MatchSite:
    identity: str
    span: tuple[int, int]
    anchor: int
    fragment: bytes
    fixed: bool


def _is_fixed(content: bytes, match: re.Match[bytes], rule: SpliceRule, fragment: bytes) -> bool:
    if rule.fixed_marker is not None and rule.fixed_marker in match.group(0):
        return True
    # The correction was spliced in by an earlier run and sits right before the anchor.
    return bool(fragment) and content.endswith(fragment, 0, match.start(rule.anchor))


def find_sites(content: bytes, rule: SpliceRule) -> list[MatchSite]:
    """Return every match of `rule` in `content`, in order, flagged as fixed or not."""
    sites = []
    for match in rule.pattern.finditer(content):
        fragment = rule.render(match)
        identity = match.group(rule.identity).decode("utf-8", "replace") if rule.identity else ""
        sites.append(
            MatchSite(
                identity=identity,
                span=match.span(),
                anchor=match.start(rule.anchor),
                fragment=fragment,
                fixed=_is_fixed(content, match, rule, fragment),
            )
        )
    return sites


def splice(content: bytes, rule: SpliceRule) -> tuple[bytes, int]:
    """Insert the rule's fragment at every unfixed site. Returns the new buffer and the number of sites rewritten."""
    parts: list[bytes] = []
    last = 0
    count = 0
    for site in find_sites(content, rule):
        if site.fixed:
            logger.debug("%s: site %r at %d already corrected", rule.name, site.identity, site.span[0])
            continue
        parts.append(content[last : site.anchor])
        parts.append(site.fragment)
        last = site.anchor
        count += 1
        logger.debug("%s: rewriting site %r at %d", rule.name, site.identity, site.span[0])
    if count == 0:
        return content, 0
    parts.append(content[last:])
    return b"".join(parts), count
