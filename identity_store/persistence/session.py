"""Database session collaborator.

The identity store never opens, configures or closes a session. It is
handed an object satisfying CqlSession (typically a thin wrapper around a
Cassandra or ScyllaDB driver session) and awaits one request per statement.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, Union, runtime_checkable

# A fetched row: a mapping read by column name, a named tuple, or a plain
# sequence in the table's fixed column order.
Row = Union[Mapping[str, Any], Sequence[Any]]


@runtime_checkable
class CqlSession(Protocol):
    """Asynchronous CQL session.

    Statements use ``?`` placeholders; values are always passed separately
    in ``parameters`` and bound by the driver.
    """

    async def execute(
        self, statement: str, parameters: Sequence[Any] = ()
    ) -> Sequence[Row]:
        """Execute a statement and return the fetched rows (possibly none)."""
        ...

    async def execute_ddl(self, statement: str) -> None:
        """Execute a schema statement."""
        ...
