"""
Mood Fragment Entity

Запись дневника настроения: текст, изображения, теги и результат анализа.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

from moodiary.domain.entities.analysis import AnalysisResult
from moodiary.domain.value_objects import FragmentType, MediaType, MoodType


@dataclass
class MediaAttachment:
    """Медиа-вложение записи."""

    id: str
    file_path: str
    type: MediaType = MediaType.IMAGE
    created_at: datetime = field(default_factory=datetime.now)
    caption: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "filePath": self.file_path,
            "type": self.type.value,
            "createdAt": self.created_at.isoformat(),
            "caption": self.caption,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MediaAttachment":
        return cls(
            id=data["id"],
            file_path=data["filePath"],
            type=MediaType(data.get("type", "image")),
            created_at=datetime.fromisoformat(data["createdAt"]),
            caption=data.get("caption"),
        )


@dataclass
class MoodFragment:
    """
    Доменная сущность записи настроения.

    Независима от хранилища: результат анализа хранится вместе с записью
    и живёт не дольше неё.
    """

    id: str
    mood: MoodType
    emotion_score: int
    timestamp: datetime
    type: FragmentType = FragmentType.TEXT
    text_content: Optional[str] = None
    media: List[MediaAttachment] = field(default_factory=list)
    topic_tags: List[str] = field(default_factory=list)
    analysis: Optional[AnalysisResult] = None

    @classmethod
    def create(
        cls,
        mood: MoodType,
        emotion_score: int,
        text_content: Optional[str] = None,
        media: Optional[List[MediaAttachment]] = None,
        topic_tags: Optional[List[str]] = None,
        analysis: Optional[AnalysisResult] = None,
        now: Optional[datetime] = None,
    ) -> "MoodFragment":
        """
        Создаёт новую запись.

        Тип определяется по составу:
        - есть медиа и текст → MIXED
        - только медиа → IMAGE
        - иначе → TEXT
        """
        now = now or datetime.now()
        media = list(media or [])
        has_text = bool(text_content)

        if media and has_text:
            fragment_type = FragmentType.MIXED
        elif media:
            fragment_type = FragmentType.IMAGE
        else:
            fragment_type = FragmentType.TEXT

        return cls(
            id=str(int(now.timestamp() * 1000)),
            mood=mood,
            emotion_score=emotion_score,
            timestamp=now,
            type=fragment_type,
            text_content=text_content,
            media=media,
            topic_tags=list(dict.fromkeys(topic_tags or [])),
            analysis=analysis,
        )

    @property
    def full_content(self) -> str:
        return self.text_content or ""

    @property
    def has_media(self) -> bool:
        return bool(self.media)

    @property
    def has_topic_tags(self) -> bool:
        return bool(self.topic_tags)

    def with_analysis(self, analysis: AnalysisResult) -> "MoodFragment":
        """Копия записи с новым результатом анализа."""
        return replace(
            self,
            mood=analysis.mood_type,
            emotion_score=analysis.emotion_score,
            analysis=analysis,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "textContent": self.text_content,
            "media": [item.to_dict() for item in self.media],
            "topicTags": list(self.topic_tags),
            "timestamp": self.timestamp.isoformat(),
            "mood": self.mood.value,
            "emotionScore": self.emotion_score,
            "type": self.type.value,
            "analysis": self.analysis.to_dict() if self.analysis else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MoodFragment":
        analysis = data.get("analysis")
        return cls(
            id=data["id"],
            text_content=data.get("textContent"),
            media=[MediaAttachment.from_dict(item) for item in data.get("media") or []],
            topic_tags=list(data.get("topicTags") or []),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            mood=MoodType(data["mood"]),
            emotion_score=int(data["emotionScore"]),
            type=FragmentType(data.get("type", "text")),
            analysis=AnalysisResult.from_dict(analysis) if analysis else None,
        )

    def __str__(self) -> str:
        return f"MoodFragment({self.id}, {self.mood.value}, score={self.emotion_score})"
