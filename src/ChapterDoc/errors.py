from __future__ import annotations


class ValidationError(ValueError):
    """Raised when chapter content cannot form a valid ChapterDocument.

    ``block_index`` points at the offending block in reading order, or is
    ``None`` when the problem concerns the document as a whole.
    """

    def __init__(self, reason: str, block_index: int | None = None) -> None:
        self.reason = reason
        self.block_index = block_index
        location = f" (block {block_index})" if block_index is not None else ""
        super().__init__(f"{reason}{location}")
