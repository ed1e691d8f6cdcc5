"""
Session runner for bookstore query groups.

Each group gets its own connection: connect, select the books collection, run
the group's operations, then close. Errors inside a group are logged and end
that group only; the connection is closed on every path.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from src.utils.config import StoreConfig
from src.utils.mongo_client import MongoDBClient

logger = logging.getLogger(__name__)

Operation = Callable[[Any], Optional[Dict[str, Any]]]
ClientFactory = Callable[[str, str], MongoDBClient]


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    EXECUTING = "executing"
    CLOSING = "closing"


@dataclass
class GroupResult:
    """Outcome of one operation group."""

    name: str
    succeeded: bool = False
    error: Optional[str] = None
    results: Dict[str, Any] = field(default_factory=dict)
    states: List[SessionState] = field(default_factory=lambda: [SessionState.DISCONNECTED])

    def transition(self, state: SessionState) -> None:
        """Record a move to `state`."""
        logger.debug(f"[{self.name}] {self.states[-1].value} -> {state.value}")
        self.states.append(state)


def run_group(
    name: str,
    operation: Operation,
    config: StoreConfig,
    client_factory: ClientFactory = MongoDBClient,
) -> GroupResult:
    """
    Run one operation group on a fresh connection.

    Args:
        name: Group name used in log messages
        operation: Callable taking the books collection
        config: Where the collection lives
        client_factory: Builds the client (connection_string, database_name)

    Returns:
        GroupResult describing the run

    An exception raised while closing the connection is not caught.
    """
    group = GroupResult(name=name)
    client = client_factory(config.connection_string, config.database_name)

    try:
        group.transition(SessionState.CONNECTING)
        client.connect()
        group.transition(SessionState.CONNECTED)

        collection = client.get_collection(config.collection_name)
        group.transition(SessionState.EXECUTING)
        group.results = operation(collection) or {}
        group.succeeded = True
    except Exception as e:
        logger.error(f"Error in {name}: {e}")
        group.error = str(e)
    finally:
        group.transition(SessionState.CLOSING)
        client.close()
        group.transition(SessionState.DISCONNECTED)
        print("Connection closed")

    return group


class SessionRunner:
    """Runs operation groups one after another, each on its own connection."""

    def __init__(
        self,
        config: StoreConfig,
        client_factory: ClientFactory = MongoDBClient,
    ):
        self.config = config
        self.client_factory = client_factory

    def run(self, name: str, operation: Operation) -> GroupResult:
        """Run a single group on a fresh connection."""
        return run_group(name, operation, self.config, self.client_factory)

    def run_all(self, groups: Sequence[Tuple[str, Operation]]) -> List[GroupResult]:
        """Run every group in order; a failed group does not stop the rest."""
        results = []
        for name, operation in groups:
            logger.info(f"Running {name} queries")
            results.append(self.run(name, operation))
        return results
