from abc import ABC, abstractmethod

from intake.domain.entities.handoff import HandoffRecord


class OperatorHandoffPort(ABC):
    @abstractmethod
    async def notify(self, record: HandoffRecord) -> None:
        """Deliver a completed intake record to the human operators."""
        raise NotImplementedError
