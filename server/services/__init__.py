from .aggregator import StatsAggregator
from .handlers import CommandService
from .pubg import PubgClient
from .signature import SignatureVerifier
from .storage import PlayerStore

__all__ = ["CommandService", "PlayerStore", "PubgClient", "SignatureVerifier", "StatsAggregator"]
