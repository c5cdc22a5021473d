"""Deadline, quorum and ordering services"""

from lunch.services.aggregation import OrderAggregationEngine
from lunch.services.lobby import LobbyQuorumEngine, LobbyCancellation
from lunch.services.scheduler import DeadlineScheduler, TickResult, build_scheduler
from lunch.services.orders import OrderService
from lunch.services.group_orders import GroupOrderService

__all__ = [
    "OrderAggregationEngine",
    "LobbyQuorumEngine",
    "LobbyCancellation",
    "DeadlineScheduler",
    "TickResult",
    "build_scheduler",
    "OrderService",
    "GroupOrderService",
]
