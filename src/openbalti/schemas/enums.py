from enum import StrEnum


class Role(StrEnum):
    USER = "user"
    CONTRIBUTOR = "contributor"
    ADMIN = "admin"
    OWNER = "owner"


class DifficultyLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WordStatus(StrEnum):
    APPROVED = "approved"
    PENDING = "pending"


class ReviewStatus(StrEnum):
    FLAGGED = "flagged"
    REVIEWED = "reviewed"


class ActivityAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REVIEW = "review"


class TargetType(StrEnum):
    WORD = "word"
    BLOG = "blog"
    COMMENT = "comment"


class ForumCategory(StrEnum):
    GENERAL = "general"
    ETYMOLOGY = "etymology"
    CULTURE = "culture"
    LEARNING = "learning"
    TRANSLATION = "translation"
    DIALECT = "dialect"


class SessionType(StrEnum):
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"
    PRACTICE = "practice"


class SourceType(StrEnum):
    BOOK = "book"
    PAPER = "paper"
    ORAL = "oral"
    MANUSCRIPT = "manuscript"
