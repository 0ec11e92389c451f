"""Protocol for the move oracle (the remote service that knows the rules of chess)."""

from typing import Protocol

from src.api.models import AnalyzeMoveRequest, AnalyzeMoveResponse


class MoveOracle(Protocol):
    """Adjudicates moves. The engine itself never decides legality."""

    async def analyze(self, request: AnalyzeMoveRequest) -> AnalyzeMoveResponse:
        """
        Judge the proposed move and list the squares the piece could reach.

        Must not raise: a failed round-trip is answered with AnalyzeMoveResponse.failed(request).
        """
        ...
