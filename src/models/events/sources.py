from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers"""
    HOST = auto()        # Game server runtime callbacks
    APPLICATION = auto() # Generic application events
