"""
SQLAlchemy table definitions for the relational podcast store.

The schema is owned by the application that produces episodes; it is
declared here so the reader can build its queries (and tests can create
fixture databases).

Tables:
    podcast                  - a show
    podcast_episode          - an episode, visible to ingestion once complete
    transcript               - transcribed text of one audio segment
    podcast_episode_segment  - ordered link episode -> transcript
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Podcast(Base):
    __tablename__ = "podcast"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)


class PodcastEpisode(Base):
    __tablename__ = "podcast_episode"

    id = Column(Integer, primary_key=True)
    podcast_id = Column(Integer, ForeignKey("podcast.id"), nullable=False)
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    # Readiness gate: incomplete episodes are invisible to ingestion
    complete = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return (
            f"<PodcastEpisode(id={self.id}, title='{self.title}', "
            f"complete={self.complete})>"
        )


class Transcript(Base):
    __tablename__ = "transcript"

    id = Column(Integer, primary_key=True)
    transcript = Column(Text, nullable=True)


class PodcastEpisodeSegment(Base):
    __tablename__ = "podcast_episode_segment"

    id = Column(Integer, primary_key=True)
    podcast_episode_id = Column(
        Integer, ForeignKey("podcast_episode.id"), nullable=False
    )
    sequence_number = Column(Integer, nullable=False)
    segment_audio_managed_file_id = Column(
        Integer, ForeignKey("transcript.id"), nullable=True
    )
