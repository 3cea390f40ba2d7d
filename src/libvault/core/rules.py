"""Platform rule evaluation."""

from __future__ import annotations

from collections.abc import Sequence
from functools import reduce

from libvault.core.models import PlatformRule, RuleAction
from libvault.core.platform import platform_identifier


def is_needed(
    rules: Sequence[PlatformRule] | None, platform: str | None = None
) -> bool:
    """Decide whether a library applies to a platform.

    A missing rule list means the library is always needed. Otherwise the
    decision starts at False and every rule that matches the platform (or
    has no scope) overwrites it, so the last matching rule wins. An
    unscoped DISALLOW placed after a scoped ALLOW therefore disables the
    library everywhere.

    Args:
        rules: Ordered rules, or None.
        platform: Platform identifier. Defaults to the running platform.

    Returns:
        True if the library should be installed.

    Example:
        >>> rules = [
        ...     PlatformRule(RuleAction.ALLOW),
        ...     PlatformRule(RuleAction.DISALLOW, PlatformScope("osx")),
        ... ]
        >>> is_needed(rules, "osx"), is_needed(rules, "linux")
        (False, True)
    """
    if rules is None:
        return True
    if platform is None:
        platform = platform_identifier()

    def apply(needed: bool, rule: PlatformRule) -> bool:
        if rule.matches(platform):
            return rule.action is RuleAction.ALLOW
        return needed

    return reduce(apply, rules, False)
