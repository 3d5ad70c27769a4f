"""Error types raised by the mind-map editing core."""


class MindMapError(Exception):
    """Base class for editing errors."""


class NotFoundError(MindMapError, KeyError):
    """A referenced node or edge id is not in the graph."""

    def __init__(self, kind: str, item_id: str):
        self.kind = kind
        self.item_id = item_id
        super().__init__(f"Unknown {kind} id: {item_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class EmptyOperationError(MindMapError):
    """There is nothing for the command to act on. Handled as a no-op."""


class InvalidStyleError(MindMapError, ValueError):
    """The style property is not one the editor knows how to apply."""
