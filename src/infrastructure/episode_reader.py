# src/infrastructure/episode_reader.py

from collections import defaultdict
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from src.domain.interfaces import RelationalSourcePort
from src.domain.models import SourceRecord
from src.infrastructure.database import session_scope
from src.infrastructure.tables import (
    Podcast,
    PodcastEpisode,
    PodcastEpisodeSegment,
    Transcript,
)


TRANSCRIPT_SEPARATOR = " "


class SqlEpisodeReader(RelationalSourcePort):
    """
    Reads complete podcast episodes with their transcript segments joined.

    Two queries per call, both ordered so the result is deterministic:
    1. complete episodes of existing podcasts, by id
    2. their segment texts, by episode id then sequence number

    Segments are joined with a single space in Python; an episode without
    segments gets "" as transcript. Nothing is cached between calls.
    """

    def __init__(self, engine: Engine):
        self._session_factory = sessionmaker(bind=engine, autoflush=False)

    def list_complete_records(self) -> List[SourceRecord]:
        episodes_query = (
            select(PodcastEpisode.id, PodcastEpisode.title, PodcastEpisode.description)
            .join(Podcast, Podcast.id == PodcastEpisode.podcast_id)
            .where(PodcastEpisode.complete.is_(True))
            .order_by(PodcastEpisode.id)
        )
        segments_query = (
            select(PodcastEpisodeSegment.podcast_episode_id, Transcript.transcript)
            .join(Transcript, Transcript.id == PodcastEpisodeSegment.segment_audio_managed_file_id)
            .join(PodcastEpisode, PodcastEpisode.id == PodcastEpisodeSegment.podcast_episode_id)
            .where(PodcastEpisode.complete.is_(True))
            .where(Transcript.transcript.is_not(None))
            .order_by(
                PodcastEpisodeSegment.podcast_episode_id,
                PodcastEpisodeSegment.sequence_number,
            )
        )

        with session_scope(self._session_factory) as session:
            episodes = session.execute(episodes_query).all()
            segments = session.execute(segments_query).all()

        transcripts: Dict[int, List[str]] = defaultdict(list)
        for episode_id, text in segments:
            transcripts[episode_id].append(text)

        return [
            SourceRecord(
                id=episode_id,
                title=title,
                description=description,
                transcript=TRANSCRIPT_SEPARATOR.join(transcripts.get(episode_id, [])),
            )
            for episode_id, title, description in episodes
        ]
