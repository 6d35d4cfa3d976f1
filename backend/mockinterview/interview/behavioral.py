from __future__ import annotations

import random
from dataclasses import dataclass, field

DEFAULT_BEHAVIORAL_COUNT = 3


@dataclass(frozen=True)
class BehavioralQuestion:
    id: str
    question: str
    category: str
    follow_up: tuple[str, ...] = field(default_factory=tuple)
    tips: str | None = None


BEHAVIORAL_QUESTIONS: tuple[BehavioralQuestion, ...] = (
    # Leadership & Teamwork
    BehavioralQuestion(
        id="leadership-1",
        question="Tell me about a time when you had to lead a team through a difficult project. What was the challenge and how did you handle it?",
        category="Leadership",
        follow_up=(
            "What was the outcome?",
            "What would you do differently?",
            "How did you motivate your team?",
        ),
        tips="Use STAR method: Situation, Task, Action, Result",
    ),
    BehavioralQuestion(
        id="teamwork-1",
        question="Describe a situation where you had to work with someone who had a different opinion or approach than yours. How did you handle it?",
        category="Teamwork",
        follow_up=(
            "What was the final outcome?",
            "How did you find common ground?",
            "What did you learn from this experience?",
        ),
    ),
    BehavioralQuestion(
        id="conflict-1",
        question="Tell me about a time when you had a conflict with a colleague. How did you resolve it?",
        category="Conflict Resolution",
        follow_up=(
            "What was the root cause of the conflict?",
            "How did you approach the conversation?",
            "What was the long-term impact on your working relationship?",
        ),
    ),
    # Problem Solving & Adaptability
    BehavioralQuestion(
        id="problem-solving-1",
        question="Describe a time when you faced a complex technical problem that seemed impossible to solve. How did you approach it?",
        category="Problem Solving",
        follow_up=(
            "What was your step-by-step approach?",
            "How did you break down the problem?",
            "What resources did you use?",
        ),
    ),
    BehavioralQuestion(
        id="adaptability-1",
        question="Tell me about a time when you had to quickly learn a new technology or skill for a project. How did you handle the learning curve?",
        category="Adaptability",
        follow_up=(
            "How did you prioritize what to learn?",
            "What was your learning strategy?",
            "How did you apply your new knowledge?",
        ),
    ),
    BehavioralQuestion(
        id="failure-1",
        question="Describe a time when you failed at something. What did you learn from that experience?",
        category="Learning from Failure",
        follow_up=(
            "What was the specific failure?",
            "How did you bounce back?",
            "What would you do differently now?",
        ),
    ),
    # Communication & Collaboration
    BehavioralQuestion(
        id="communication-1",
        question="Tell me about a time when you had to explain a complex technical concept to a non-technical person. How did you approach it?",
        category="Communication",
        follow_up=(
            "How did you know they understood?",
            "What analogies or examples did you use?",
            "How did you handle any confusion?",
        ),
    ),
    BehavioralQuestion(
        id="feedback-1",
        question="Describe a time when you received difficult feedback. How did you handle it and what did you do with that feedback?",
        category="Receiving Feedback",
        follow_up=(
            "What was the feedback about?",
            "How did you initially react?",
            "What specific changes did you make?",
        ),
    ),
    BehavioralQuestion(
        id="presentation-1",
        question="Tell me about a time when you had to present your work to stakeholders or senior management. How did you prepare and how did it go?",
        category="Presentation Skills",
        follow_up=(
            "How did you structure your presentation?",
            "What questions did you receive?",
            "How did you handle any difficult questions?",
        ),
    ),
    # Initiative & Drive
    BehavioralQuestion(
        id="initiative-1",
        question="Describe a time when you took initiative to improve a process or solve a problem that wasn't part of your regular responsibilities.",
        category="Initiative",
        follow_up=(
            "What motivated you to take action?",
            "What was the impact of your initiative?",
            "How did others react to your initiative?",
        ),
    ),
    BehavioralQuestion(
        id="motivation-1",
        question="Tell me about a time when you were working on a project that you weren't particularly excited about. How did you stay motivated?",
        category="Motivation",
        follow_up=(
            "What was the project about?",
            "How did you find meaning in the work?",
            "What was the final outcome?",
        ),
    ),
    # Technical Leadership & Mentoring
    BehavioralQuestion(
        id="mentoring-1",
        question="Describe a time when you mentored or helped a junior developer. What was the situation and how did you help them grow?",
        category="Mentoring",
        follow_up=(
            "What specific skills did you help them develop?",
            "How did you measure their progress?",
            "What did you learn from the mentoring experience?",
        ),
    ),
    BehavioralQuestion(
        id="code-review-1",
        question="Tell me about a time when you had to give difficult feedback during a code review. How did you approach it?",
        category="Code Review",
        follow_up=(
            "What was the specific issue?",
            "How did you frame your feedback?",
            "How did the developer respond?",
        ),
    ),
    # Project Management & Organization
    BehavioralQuestion(
        id="deadline-1",
        question="Describe a time when you had to meet a tight deadline. How did you prioritize and manage your time?",
        category="Time Management",
        follow_up=(
            "What was the deadline?",
            "How did you prioritize tasks?",
            "What sacrifices did you have to make?",
        ),
    ),
    BehavioralQuestion(
        id="multitasking-1",
        question="Tell me about a time when you had to juggle multiple projects or responsibilities simultaneously. How did you manage it?",
        category="Multitasking",
        follow_up=(
            "How did you prioritize between projects?",
            "What tools or methods did you use?",
            "What was the outcome of each project?",
        ),
    ),
)

# "System Design" has no questions in the bank yet, so those roles draw from
# three categories.
ROLE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Software Engineer": ("Problem Solving", "Teamwork", "Communication", "Adaptability"),
    "Frontend Engineer": ("Problem Solving", "Communication", "Adaptability", "Code Review"),
    "Backend Engineer": ("Problem Solving", "System Design", "Communication", "Adaptability"),
    "Full Stack Developer": ("Problem Solving", "Teamwork", "Communication", "Multitasking"),
    "Senior Software Engineer": ("Leadership", "Mentoring", "Problem Solving", "Communication"),
    "Software Development Engineer": ("Problem Solving", "Teamwork", "Communication", "Initiative"),
    "iOS Developer": ("Problem Solving", "Communication", "Adaptability", "Code Review"),
    "Android Developer": ("Problem Solving", "Communication", "Adaptability", "Code Review"),
    "DevOps Engineer": ("Problem Solving", "Communication", "Adaptability", "Initiative"),
    "Data Engineer": ("Problem Solving", "Communication", "Adaptability", "System Design"),
}

GENERIC_CATEGORIES: tuple[str, ...] = ("Problem Solving", "Communication", "Teamwork")


class BehavioralQuestionSelector:
    def __init__(self, rng: random.Random | None = None, questions: tuple[BehavioralQuestion, ...] = BEHAVIORAL_QUESTIONS):
        self._rng = rng or random.Random()
        self._questions = questions

    def categories_for_role(self, role: str) -> tuple[str, ...]:
        return ROLE_CATEGORIES.get(role, GENERIC_CATEGORIES)

    def by_category(self, category: str | None = None) -> list[BehavioralQuestion]:
        if not category:
            return list(self._questions)
        return [q for q in self._questions if q.category == category]

    def random(self, count: int = DEFAULT_BEHAVIORAL_COUNT) -> list[BehavioralQuestion]:
        return self._sample(list(self._questions), count)

    def for_role(self, role: str, count: int = DEFAULT_BEHAVIORAL_COUNT) -> list[BehavioralQuestion]:
        categories = set(self.categories_for_role(role))
        relevant = [q for q in self._questions if q.category in categories]
        return self._sample(relevant, count)

    def _sample(self, pool: list[BehavioralQuestion], count: int) -> list[BehavioralQuestion]:
        shuffled = list(pool)
        self._rng.shuffle(shuffled)
        return shuffled[: max(0, int(count))]


def get_behavioral_questions_for_role(
    role: str,
    count: int = DEFAULT_BEHAVIORAL_COUNT,
    rng: random.Random | None = None,
) -> list[BehavioralQuestion]:
    return BehavioralQuestionSelector(rng=rng).for_role(role, count)
