"""Abstract base class for backend connectors."""

from abc import ABC, abstractmethod
from types import TracebackType


class BaseConnector(ABC):
    """Abstract base class defining the interface for backend connectors."""

    #: Backend kind served by the connector (e.g. "imap").
    kind: str

    @abstractmethod
    def connect(self) -> None:
        """Open the backend (log in, open the directory, etc.)."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Release the backend."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable description of the endpoint."""
        ...

    def __enter__(self) -> "BaseConnector":
        """Context manager entry - connect to backend."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - disconnect from backend."""
        self.disconnect()
