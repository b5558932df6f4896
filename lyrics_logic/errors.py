from __future__ import annotations


class LearningDataError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class StoreInitializationError(LearningDataError):
    """Storage is unavailable or the saved snapshot is corrupt."""


class StoreWriteError(LearningDataError):
    """A command could not be saved and was rolled back."""


class StoreUsageError(LearningDataError):
    pass


class StoreNotInitializedError(StoreUsageError):
    def __init__(self) -> None:
        super().__init__("Learning store used before initialize()")


class UnknownRecordError(StoreUsageError):
    def __init__(self, kind: str, record_id: int | str) -> None:
        super().__init__(f"Unknown {kind} id: {record_id}")
        self.kind = kind
        self.record_id = record_id


class InvalidLineError(StoreUsageError):
    def __init__(self, line: int, last_line: int | None = None) -> None:
        if last_line is None:
            message = f"Line index must not be negative: {line}"
        else:
            message = f"Line {line} is outside 0..{last_line}"
        super().__init__(message)
        self.line = line
        self.last_line = last_line
