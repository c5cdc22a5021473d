"""Domain errors raised by services and mapped to HTTP responses by the API"""


class LunchError(Exception):
    """Base class for domain errors"""


class NotFoundError(LunchError):
    def __init__(self, entity: str, key):
        super().__init__(f"{entity} not found: {key}")
        self.entity = entity
        self.key = key


class UnknownSlotError(LunchError):
    def __init__(self, slot_id: str):
        super().__init__(f"Unknown delivery slot: {slot_id}")
        self.slot_id = slot_id


class SlotClosedError(LunchError):
    def __init__(self, slot_id: str, deadline: str):
        super().__init__(f"Ordering for slot {slot_id} closed at {deadline}")
        self.slot_id = slot_id
        self.deadline = deadline


class ActiveOrderExistsError(LunchError):
    def __init__(self, order_id=None):
        super().__init__("User already has an active order for this slot")
        self.order_id = order_id


class OrderNotCancellableError(LunchError):
    def __init__(self, status: str):
        super().__init__(f"Only pending orders can be cancelled (status: {status})")
        self.status = status


class InvalidStatusError(LunchError):
    def __init__(self, status: str, allowed):
        super().__init__(f"Invalid status {status!r}. Must be one of: {', '.join(allowed)}")
        self.status = status


class GroupOrderResolvedError(LunchError):
    def __init__(self, group_order_id: int, status: str):
        super().__init__(f"Group order {group_order_id} is already {status}")
        self.group_order_id = group_order_id
        self.status = status
