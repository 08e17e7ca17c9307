from abc import ABC, abstractmethod

from intake.domain.entities.prompt import Prompt


class MessagePlatformPort(ABC):
    """Outbound side of the messaging transport. Failures raise TransportError."""

    @abstractmethod
    async def send(self, recipient_id: str, prompt: Prompt) -> str:
        """Send a message. Returns the transport message id."""
        raise NotImplementedError

    @abstractmethod
    async def edit(self, recipient_id: str, message_id: str, prompt: Prompt) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, recipient_id: str, message_id: str) -> None:
        raise NotImplementedError
