"""
Shared test helpers
"""

from datetime import datetime, timedelta, timezone

from societydesk.models.schemas import Actor, VisitorCreateRequest

START = datetime(2025, 1, 20, 10, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def headers_for(actor: Actor) -> dict:
    headers = {
        "X-User-Id": actor.user_id,
        "X-User-Role": actor.role.value,
        "X-User-Name": actor.name,
    }
    if actor.apartment_no:
        headers["X-User-Apartment"] = actor.apartment_no
    return headers


def visitor_request(**overrides) -> VisitorCreateRequest:
    data = dict(
        name="Alice Johnson",
        phone="+1234567894",
        email="alice.johnson@email.com",
        id_number="DL12345678",
        purpose="Social Visit",
        visit_date="2025-01-20",
        visit_time="14:00",
    )
    data.update(overrides)
    return VisitorCreateRequest(**data)
