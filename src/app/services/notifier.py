from abc import ABC, abstractmethod


class INotifier(ABC):
    """Outbound message channel used by the password reset flow"""

    @abstractmethod
    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Send a plain-text message; raises on delivery failure"""
        pass
