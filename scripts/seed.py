"""
Seed script - populates the database with demo data for development.

Usage:
    python -m scripts.seed

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import async_session_maker, init_db
from app.core.security import hash_password
from app.models.agency import AGENCY_STATUS_APPROVED, AgencyTechnology
from app.models.event import EVENT_STATUS_PUBLISHED, Event, EventSpeaker
from app.models.taxonomy import TAXONOMY_MODELS
from app.models.user import ROLE_AGENCY, ROLE_BUSINESS
from app.repositories.agency_repository import AgencyRepository
from app.repositories.event_repository import EventRepository
from app.repositories.taxonomy_repository import TaxonomyRepository
from app.repositories.user_repository import UserRepository


# ─── Taxonomy ──────────────────────────────────────────────────

TAXONOMY = {
    "services": [
        "Machine Learning",
        "Natural Language Processing",
        "Computer Vision",
        "Robotics",
        "Data Analytics",
        "AI Consulting",
    ],
    "industries": [
        "Healthcare",
        "Finance",
        "Retail",
        "Manufacturing",
        "Technology",
        "Education",
        "Other",
    ],
    "technologies": ["PyTorch", "TensorFlow", "OpenCV", "LangChain", "scikit-learn", "Spark"],
    "skills": [
        "Python",
        "Deep Learning",
        "MLOps",
        "Prompt Engineering",
        "SQL",
        "Statistics",
        "Kubernetes",
    ],
    "benefits": [
        "Remote work",
        "Health insurance",
        "Learning budget",
        "Equity",
        "Flexible hours",
    ],
}


# ─── Users ─────────────────────────────────────────────────────

BUSINESS_USER = {
    "email": "business@example.com",
    "password": "password123",
    "full_name": "Demo Business",
    "role": ROLE_BUSINESS,
}

AGENCY_USER = {
    "email": "agency@example.com",
    "password": "password123",
    "full_name": "Demo Agency Owner",
    "role": ROLE_AGENCY,
}


# ─── Agency ────────────────────────────────────────────────────

DEMO_AGENCY = {
    "name": "Neural Forge Labs",
    "description": "Applied machine learning studio building vision and language products.",
    "contact_email": "hello@neuralforge.example.com",
    "location_city": "Austin",
    "location_country": "USA",
    "employee_range": "11-50 employees",
    "rating_avg": Decimal("4.70"),
    "review_count": 23,
    "services": ["Machine Learning", "Computer Vision"],
    "industries": ["Healthcare", "Retail"],
    "technologies": ["PyTorch", "OpenCV"],
}


# ─── Events ────────────────────────────────────────────────────

def _days_from_now(days: int, hour: int = 9) -> datetime:
    now = datetime.now(timezone.utc).replace(hour=hour, minute=0, second=0, microsecond=0)
    return now + timedelta(days=days)


SAMPLE_EVENTS = [
    {
        "title": "Applied AI Summit",
        "event_type": "conference",
        "description": "Two days of talks on shipping machine learning to production.",
        "location_type": "in_person",
        "location_label": "San Francisco, USA",
        "start_at": _days_from_now(10),
        "end_at": _days_from_now(11, hour=18),
        "organizer_name": "AI Builders Network",
        "price_type": "paid",
        "price_amount": Decimal("299.00"),
        "registration_url": "https://example.com/applied-ai-summit",
        "tags": ["MLOps", "LLMs"],
        "is_featured": True,
        "speakers": [("Dana Ortiz", "Head of ML, Fintrio"), ("Sam Lee", "Founder, VisionWorks")],
    },
    {
        "title": "Intro to Retrieval-Augmented Generation",
        "event_type": "webinar",
        "description": "A one hour walkthrough of RAG architectures.",
        "location_type": "virtual",
        "location_label": None,
        "start_at": _days_from_now(3, hour=16),
        "end_at": _days_from_now(3, hour=17),
        "organizer_name": "Neural Forge Labs",
        "price_type": "free",
        "price_amount": None,
        "registration_url": "https://example.com/rag-webinar",
        "tags": ["RAG", "NLP"],
        "is_featured": False,
        "speakers": [("Priya Nair", "ML Engineer")],
    },
    {
        "title": "Computer Vision Hack Weekend",
        "event_type": "hackathon",
        "description": "Build a vision prototype in 48 hours.",
        "location_type": "in_person",
        "location_label": "Berlin, Europe",
        "start_at": _days_from_now(35),
        "end_at": _days_from_now(37, hour=18),
        "organizer_name": None,
        "price_type": "free",
        "price_amount": None,
        "registration_url": None,
        "tags": ["Computer Vision"],
        "is_featured": False,
        "speakers": [],
    },
]


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    # Initialize tables
    await init_db()
    print("  Tables created")

    user_repo = UserRepository()
    agency_repo = AgencyRepository()
    event_repo = EventRepository()

    async with async_session_maker() as db:

        # ── Taxonomy ───────────────────────────────────────
        terms = {}
        for kind, names in TAXONOMY.items():
            repo = TaxonomyRepository(TAXONOMY_MODELS[kind])
            terms[kind] = {}
            for name in names:
                term = await repo.get_or_create(db, name)
                terms[kind][name] = term.id
        await db.commit()
        print(f"  Taxonomy ready: {', '.join(f'{k}={len(v)}' for k, v in terms.items())}")

        # ── Users ──────────────────────────────────────────
        users = {}
        for entry in (BUSINESS_USER, AGENCY_USER):
            user = await user_repo.get_by_email(db, entry["email"])
            if user:
                print(f"  User {entry['email']} exists, skipping...")
            else:
                user = await user_repo.create(
                    db,
                    email=entry["email"],
                    password_hash=hash_password(entry["password"]),
                    full_name=entry["full_name"],
                    role=entry["role"],
                    email_verified=True,
                )
                print(f"  Created user: {entry['email']}")
            users[entry["role"]] = user
        await db.commit()

        # ── Agency ─────────────────────────────────────────
        owner = users[ROLE_AGENCY]
        if await agency_repo.get_by_owner(db, owner.id):
            print("  Demo agency exists, skipping...")
        else:
            agency = await agency_repo.create(
                db,
                owner_user_id=owner.id,
                status=AGENCY_STATUS_APPROVED,
                **{k: v for k, v in DEMO_AGENCY.items() if k not in ("services", "industries", "technologies")},
            )
            await agency_repo.add_services(
                db, agency.id, [terms["services"][n] for n in DEMO_AGENCY["services"]]
            )
            await agency_repo.add_industries(
                db, agency.id, [terms["industries"][n] for n in DEMO_AGENCY["industries"]]
            )
            await agency_repo.add_links(
                db,
                AgencyTechnology,
                "agency_id",
                agency.id,
                "technology_id",
                [terms["technologies"][n] for n in DEMO_AGENCY["technologies"]],
            )
            await db.commit()
            print(f"  Created agency: {DEMO_AGENCY['name']}")

        # ── Events ─────────────────────────────────────────
        created = 0
        for entry in SAMPLE_EVENTS:
            if await event_repo.get_by_title(db, entry["title"]):
                continue
            values = {k: v for k, v in entry.items() if k != "speakers"}
            event = Event(status=EVENT_STATUS_PUBLISHED, **values)
            event.speakers = [EventSpeaker(name=name, title=title) for name, title in entry["speakers"]]
            db.add(event)
            created += 1
        await db.commit()
        print(f"  Created {created} events")

    print("Done.")


if __name__ == "__main__":
    asyncio.run(seed())
