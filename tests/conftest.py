# tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.infrastructure.tables import (
    Base,
    Podcast,
    PodcastEpisode,
    PodcastEpisodeSegment,
    Transcript,
)


class EpisodeDatabase:
    """Small helper to seed a SQLite podcast database file."""

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine(url)
        Base.metadata.create_all(self.engine)
        self._next_transcript_id = 1
        with Session(self.engine) as session:
            session.add(Podcast(id=1, title="Coffee + Software"))
            session.commit()

    def add_episode(
        self,
        episode_id: int,
        title=None,
        description=None,
        complete: bool = True,
        segments=(),
        podcast_id: int = 1,
    ) -> None:
        """segments: iterable of (sequence_number, text) pairs."""
        with Session(self.engine) as session:
            session.add(PodcastEpisode(
                id=episode_id,
                podcast_id=podcast_id,
                title=title,
                description=description,
                complete=complete,
            ))
            for sequence_number, text in segments:
                transcript_id = self._next_transcript_id
                self._next_transcript_id += 1
                session.add(Transcript(id=transcript_id, transcript=text))
                session.add(PodcastEpisodeSegment(
                    podcast_episode_id=episode_id,
                    sequence_number=sequence_number,
                    segment_audio_managed_file_id=transcript_id,
                ))
            session.commit()


@pytest.fixture
def episode_db(tmp_path) -> EpisodeDatabase:
    """Fresh SQLite database with the podcast schema and one podcast."""
    return EpisodeDatabase(f"sqlite:///{tmp_path / 'podcasts.db'}")
