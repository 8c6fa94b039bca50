"""Session domain model"""

from dataclasses import dataclass


@dataclass
class Session:
    """
    One connected eligible player, as tracked by SessionTracker

    notified is reset on every map load so players get reminded after
    the map changes.
    """
    slot: int
    notified: bool = False
