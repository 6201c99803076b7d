"""Developer-facing diagnostics.

Misuse of framework APIs (calling them before the host has initialized what
they depend on) is reported here rather than raised, so a misbehaving plugin
degrades to "nothing registered" instead of breaking the request.
"""

import logging

logger = logging.getLogger(__name__)


def doing_it_wrong(function: str, message: str, since: str | None = None) -> None:
    """Report that a function was called incorrectly.

    Args:
        function: The call path that was misused (e.g., "ScreenResolver.resolve()")
        message: Explanation of what was done incorrectly
        since: Framework version in which the message was added
    """
    if since:
        message = f"{message} (This message was added in version {since}.)"
    logger.warning("%s was called incorrectly. %s", function, message)
