from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TranscriptRole = Literal["user", "assistant", "system"]

DEFAULT_QUESTION_AMOUNT = 8

FEEDBACK_CATEGORIES = (
    "Technical Knowledge",
    "Problem Solving",
    "Communication Skills",
    "Leadership & Teamwork",
    "Adaptability & Learning",
)

CategoryName = Literal[
    "Technical Knowledge",
    "Problem Solving",
    "Communication Skills",
    "Leadership & Teamwork",
    "Adaptability & Learning",
]


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class TranscriptMessage(BaseModel):
    role: TranscriptRole
    content: str


class CategoryScore(BaseModel):
    name: CategoryName
    score: int = Field(ge=0, le=100)
    comment: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _round_fractional_score(cls, value):
        if isinstance(value, float):
            return round_half_up(value)
        return value


class FeedbackGeneration(BaseModel):
    """Shape the model must return for a scored evaluation."""

    model_config = ConfigDict(populate_by_name=True)

    total_score: int | None = Field(default=None, alias="totalScore", ge=0, le=100)
    category_scores: list[CategoryScore] = Field(alias="categoryScores", min_length=5, max_length=5)
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list, alias="areasForImprovement")
    final_assessment: str = Field(default="", alias="finalAssessment")

    @field_validator("total_score", mode="before")
    @classmethod
    def _round_fractional_total(cls, value):
        if isinstance(value, float):
            return round_half_up(value)
        return value

    @model_validator(mode="after")
    def _every_category_once(self):
        names = {item.name for item in self.category_scores}
        if names != set(FEEDBACK_CATEGORIES):
            raise ValueError(f"categoryScores must cover {list(FEEDBACK_CATEGORIES)} exactly once")
        return self


class InterviewDetails(BaseModel):
    role: str
    techstack: list[str]
    type: str


class GenerateQuestionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    role: str
    level: str = ""
    techstack: str = ""
    amount: int = Field(default=DEFAULT_QUESTION_AMOUNT, ge=1)
    # The create page posts "userid"; populate_by_name accepts it alongside "userId".
    userid: str = Field(alias="userId")


class CreateInterviewRequest(BaseModel):
    role: str
    type: str
    level: str = ""
    techstack: str = ""
    amount: int = Field(default=DEFAULT_QUESTION_AMOUNT, ge=1)


class FeedbackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    interview_id: str = Field(alias="interviewId")
    transcript: list[TranscriptMessage]
    feedback_id: str | None = Field(default=None, alias="feedbackId")


class StaticInterviewResponse(BaseModel):
    interview_id: str
    role: str
    type: str
    techstack: list[str]
    questions: list[str] = Field(default_factory=list)
    cover_image: str | None = None
    description: str | None = None
