from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from lumos.nightlight import NightLight

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshPolicy:
    settle_seconds: float = 0.2


def apply_strength(
    night: NightLight,
    percentage: float,
    policy: RefreshPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Set the strength and cycle night light so Windows applies it.

    The feature only re-reads its settings on an off/on transition, so a
    running night light is switched off, given ``settle_seconds``, and turned
    back on. Night light always ends up enabled.
    """

    night.set_strength(percentage)

    if night.enabled():
        night.disable()
        log.debug("waiting %.2fs for night light to settle", policy.settle_seconds)
        sleep(policy.settle_seconds)

    night.enable()
