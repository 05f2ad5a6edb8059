from jumphash.service.client import SlotClient
from jumphash.service.server import SlotService

__all__ = [
    "SlotClient",
    "SlotService",
]
