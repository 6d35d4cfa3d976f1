"""
Static company interviews and interview cover images.

Static interviews have no prepared questions; the assistant builds the
conversation from the job profile and the behavioral bank.
"""
from __future__ import annotations

import random
from dataclasses import asdict, dataclass

INTERVIEW_COVERS = [
    "/adobe.png",
    "/amazon.png",
    "/facebook.png",
    "/hostinger.png",
    "/pinterest.png",
    "/quora.png",
    "/reddit.png",
    "/skype.png",
    "/spotify.png",
    "/telegram.png",
    "/tiktok.png",
    "/yahoo.png",
]


@dataclass(frozen=True)
class StaticCompany:
    id: str
    name: str
    role: str
    type: str
    techstack: tuple[str, ...]
    cover_image: str
    description: str | None = None

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["techstack"] = list(self.techstack)
        return payload


STATIC_COMPANIES: tuple[StaticCompany, ...] = (
    StaticCompany(
        id="static-google",
        name="Google",
        role="Software Engineer",
        type="Mixed",
        techstack=("react", "nodejs", "aws", "typescript"),
        cover_image="/covers/adobe.png",
        description="Comprehensive interview covering technical skills and behavioral competencies",
    ),
    StaticCompany(
        id="static-amazon",
        name="Amazon",
        role="Software Development Engineer",
        type="Mixed",
        techstack=("java", "spring", "aws", "docker"),
        cover_image="/covers/amazon.png",
        description="Full assessment including technical expertise and leadership principles",
    ),
    StaticCompany(
        id="static-microsoft",
        name="Microsoft",
        role="Software Engineer",
        type="Mixed",
        techstack=("csharp", "dotnet", "azure", "sql"),
        cover_image="/covers/skype.png",
        description="Balanced interview with technical depth and behavioral assessment",
    ),
    StaticCompany(
        id="static-meta",
        name="Meta",
        role="Frontend Engineer",
        type="Mixed",
        techstack=("react", "javascript", "php", "graphql"),
        cover_image="/covers/facebook.png",
        description="Comprehensive evaluation of technical skills and cultural fit",
    ),
    StaticCompany(
        id="static-spotify",
        name="Spotify",
        role="Backend Engineer",
        type="Mixed",
        techstack=("python", "django", "postgresql", "redis"),
        cover_image="/covers/spotify.png",
        description="Full-stack assessment including technical and behavioral competencies",
    ),
    StaticCompany(
        id="static-netflix",
        name="Netflix",
        role="Full Stack Engineer",
        type="Mixed",
        techstack=("javascript", "react", "nodejs", "aws"),
        cover_image="/covers/reddit.png",
        description="Comprehensive full-stack assessment with focus on scalability and performance",
    ),
    StaticCompany(
        id="static-apple",
        name="Apple",
        role="iOS Developer",
        type="Mixed",
        techstack=("swift", "ios", "xcode", "cocoa"),
        cover_image="/covers/pinterest.png",
        description="iOS development assessment with focus on user experience and performance",
    ),
    StaticCompany(
        id="static-uber",
        name="Uber",
        role="Mobile Engineer",
        type="Mixed",
        techstack=("reactnative", "javascript", "aws", "mongodb"),
        cover_image="/covers/telegram.png",
        description="Mobile development assessment with real-time systems focus",
    ),
)


def get_all_static_companies() -> list[StaticCompany]:
    return list(STATIC_COMPANIES)


def get_static_company_by_id(company_id: str) -> StaticCompany | None:
    return next((company for company in STATIC_COMPANIES if company.id == company_id), None)


def get_static_company_by_name(name: str) -> StaticCompany | None:
    key = str(name or "").strip().lower()
    return next((company for company in STATIC_COMPANIES if company.name.lower() == key), None)


def get_available_static_companies(user_interviews: list[dict]) -> list[StaticCompany]:
    """Static companies the user has not already interviewed for (same role, type and stack)."""

    def _completed(company: StaticCompany) -> bool:
        return any(
            item.get("role") == company.role
            and item.get("type") == company.type
            and list(item.get("techstack") or []) == list(company.techstack)
            for item in user_interviews or []
        )

    return [company for company in STATIC_COMPANIES if not _completed(company)]


def get_random_interview_cover(rng: random.Random | None = None) -> str:
    chooser = rng or random
    return f"/covers{chooser.choice(INTERVIEW_COVERS)}"
