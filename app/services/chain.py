# app/services/chain.py
import logging
from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar

logger = logging.getLogger(__name__)

Q = TypeVar("Q")
R = TypeVar("R")

@dataclass(frozen=True)
class Abstain:
    """An adapter's non-answer. `partial` is handed to the terminal step."""
    reason: str
    partial: Any = None

class SourceAdapter(Protocol[Q, R]):
    name: str
    async def attempt(self, query: Q) -> "R | Abstain": ...

class TerminalFallback(Protocol[Q, R]):
    name: str
    def resolve(self, query: Q, partial: Any = None) -> R: ...


class ChainResolver(Generic[Q, R]):
    """
    Tries each adapter in order, one at a time; the first one that does not
    abstain wins. An adapter that raises counts as an abstention. When every
    adapter abstains the terminal fallback answers, so resolve() always
    returns a result.
    """

    def __init__(self, adapters: Sequence[SourceAdapter], terminal: TerminalFallback):
        self.adapters = tuple(adapters)
        self.terminal = terminal

    async def resolve(self, query: Q) -> R:
        partial = None
        for adapter in self.adapters:
            try:
                outcome = await adapter.attempt(query)
            except Exception:
                logger.exception("adapter %s raised, skipping", adapter.name)
                continue
            if isinstance(outcome, Abstain):
                logger.info("adapter %s abstained: %s", adapter.name, outcome.reason)
                if partial is None:
                    partial = outcome.partial
                continue
            logger.info("adapter %s answered", adapter.name)
            return outcome

        logger.info("all adapters abstained, using %s", self.terminal.name)
        return self.terminal.resolve(query, partial)
