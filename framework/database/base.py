from abc import ABC, abstractmethod

class BaseDatabaseDriver(ABC):
    """Backing store used by units of work: connection lifecycle, schema and sessions."""

    @abstractmethod
    async def connect(self):
        pass

    @abstractmethod
    async def disconnect(self):
        pass

    @abstractmethod
    async def ensure_schema(self):
        """Create the schema if missing; safe to call repeatedly."""

    @abstractmethod
    def new_session(self):
        """Open a session the caller owns and must close."""
