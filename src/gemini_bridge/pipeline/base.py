"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from gemini_bridge.core.types import Result

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")


class BaseAsyncHandler(Protocol[T_In, T_Out]):
    """Protocol for asynchronous pipeline handlers.

    Each handler performs a single transformation on the command object,
    making it easy to test and reason about.
    """

    async def handle(self, command: T_In) -> Result[T_Out]:
        """Process a command object.

        Args:
            command: The input command state from the previous pipeline stage.

        Returns:
            A Result carrying either the next command state or a safe error.
        """
        ...
