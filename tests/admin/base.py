import os
import unittest
from datetime import date, timedelta
from unittest.mock import patch
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from outreach.core.config import settings
from outreach.core.security import create_jwt
from outreach.db.session import get_db
from outreach.main import app
from outreach.models.admin_user import AdminUser
from outreach.models.event import Event
from outreach.models.event_registration import EventRegistration
from outreach.models.form_config import FormConfig
from outreach.models.form_submission import FormSubmission
from outreach.models.setting import Setting
from outreach.scripts.seed_forms import seed_default_form_configs
from outreach.services.rate_limit import InMemoryRateLimiter

TABLES = (AdminUser, FormConfig, FormSubmission, Event, EventRegistration, Setting)


class OutreachApiBase(unittest.TestCase):
    seed_defaults = True

    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        for model in TABLES:
            model.__table__.create(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        for model in reversed(TABLES):
            model.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            for model in reversed(TABLES):
                db.execute(delete(model))
            db.commit()
            if self.seed_defaults:
                seed_default_form_configs(db)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        self.limiter = InMemoryRateLimiter()
        self._limiter_patch = patch("outreach.services.rate_limit.get_rate_limiter", return_value=self.limiter)
        self._limiter_patch.start()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()
        self._limiter_patch.stop()

    @staticmethod
    def _auth_headers(role: str = "ADMIN", email: str | None = None, sub: str | None = None) -> dict[str, str]:
        token = create_jwt(
            {"sub": str(sub or uuid4()), "email": email or f"{role.lower()}@example.com", "role": role},
            settings.ADMIN_JWT_SECRET,
            timedelta(minutes=30),
        )
        return {"Authorization": f"Bearer {token}"}

    def _create_event(self, **overrides) -> int:
        values = {
            "title": "Wheelchair Basketball Clinic",
            "date": date(2026, 11, 14),
            "time": "10:00 AM",
            "location": "Community Gym",
            "description": "Open clinic for all skill levels.",
            "category": "basketball",
            "registration_type": "internal",
        }
        values.update(overrides)
        with self.SessionLocal() as db:
            row = Event(**values)
            db.add(row)
            db.commit()
            return row.id

    def _add_registration(self, event_id: int, status: str = "confirmed", **data) -> int:
        with self.SessionLocal() as db:
            row = EventRegistration(event_id=event_id, data=data or {"name": "Pat"}, status=status)
            db.add(row)
            db.commit()
            return row.id

    def _add_submission(self, form_type: str = "contact", status: str = "new", **data) -> int:
        with self.SessionLocal() as db:
            row = FormSubmission(form_type=form_type, data=data or {"name": "Sam"}, status=status)
            db.add(row)
            db.commit()
            return row.id
