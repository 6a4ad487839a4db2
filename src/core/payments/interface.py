from abc import ABC, abstractmethod

from core.models import GatewayTransactionRecord


class GatewayVerifier(ABC):
    @abstractmethod
    async def verify_transaction(self, reference: str) -> GatewayTransactionRecord: ...
