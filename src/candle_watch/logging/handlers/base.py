from abc import ABC, abstractmethod


class BaseLogHandler(ABC):
    """
    Destination for flushed log lines. The Logger calls push() with every
    batch it flushes, then aclose() once on shutdown.
    """

    async def aclose(self) -> None:
        """
        Release any resources held by the handler.
        """
        pass

    @abstractmethod
    async def push(self, buffer: list[str]) -> None:
        """
        Deliver a batch of formatted log lines.

        Args:
            buffer (list[str]): The lines, oldest first.
        """
        pass
