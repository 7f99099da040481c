"""Browser identities for outgoing requests.

A pool is created per caller (or per call) and passed to the fetcher; there
is no process-wide "current" user agent.  Seeding the pool makes the choice
sequence reproducible.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# User-agent pool (realistic browser strings)
# ---------------------------------------------------------------------------

DEFAULT_USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:124.0) Gecko/20100101 Firefox/124.0",
    "Mozilla/5.0 (iPad; CPU OS 17_4 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) CriOS/124.0.0.0 Mobile/15E148 Safari/604.1",
)


class UserAgentPool:
    """Pick a browser User-Agent from a fixed pool."""

    def __init__(self, user_agents: Sequence[str] | None = None, seed: int | None = None) -> None:
        agents = [ua.strip() for ua in (user_agents or ()) if ua and ua.strip()]
        self.user_agents: tuple[str, ...] = tuple(agents) or DEFAULT_USER_AGENTS
        self.seed = seed
        self._rng = random.Random(seed)

    def __len__(self) -> int:
        return len(self.user_agents)

    def choose(self) -> str:
        ua = self._rng.choice(self.user_agents)
        logger.debug("Selected UA: %s", ua)
        return ua
