from .channel import ChannelKind, ChannelSubscription, Precision
from .book import AggregatedBookLevel, BookLevel, RawBookLevel
from .trade import TradeEvent
from .ticker import TickerUpdate
from .user import FrameError, UserEvent

__all__ = [
    "ChannelKind",
    "ChannelSubscription",
    "Precision",
    "AggregatedBookLevel",
    "BookLevel",
    "RawBookLevel",
    "TradeEvent",
    "TickerUpdate",
    "FrameError",
    "UserEvent",
]
