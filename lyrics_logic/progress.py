from __future__ import annotations

from dataclasses import dataclass

from lyrics_logic.errors import InvalidLineError, UnknownRecordError
from lyrics_logic.models import ProgressRecord
from lyrics_logic.storage.store import LearningStore
from lyrics_logic.text import song_lines


@dataclass(slots=True)
class ProgressTracker:
    store: LearningStore

    def record(self, song_id: int, line: int, completed: bool) -> ProgressRecord:
        return self.store.upsert_progress(song_id, line, completed)

    def progress_for(self, song_id: int) -> ProgressRecord | None:
        return self.store.progress_for_song(song_id)

    def last_line_index(self, song_id: int) -> int:
        song = self.store.song(song_id)
        if song is None:
            raise UnknownRecordError("song", song_id)
        return max(len(song_lines(song.lyrics)) - 1, 0)

    def go_to_line(self, song_id: int, line: int) -> ProgressRecord:
        last_line = self._checked_line(song_id, line)
        return self.record(song_id, line, completed=line == last_line)

    def complete_line(self, song_id: int, current_line: int) -> ProgressRecord:
        last_line = self._checked_line(song_id, current_line)
        if current_line < last_line:
            next_line = current_line + 1
            return self.record(song_id, next_line, completed=next_line == last_line)
        return self.record(song_id, last_line, completed=True)

    def _checked_line(self, song_id: int, line: int) -> int:
        last_line = self.last_line_index(song_id)
        if line < 0 or line > last_line:
            raise InvalidLineError(line, last_line)
        return last_line
