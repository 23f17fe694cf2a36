import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from Accounts.models import User
from Pitch.models import Pitch


@pytest.fixture(autouse=True)
def clear_cache():
    # Login attempt counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(
        email="admin@admin.com", password="admin123", name="Administrator"
    )


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email="owner@example.com",
        password="secret123",
        name="Pitch Owner",
        phone="0901000001",
        role=User.OWNER,
    )


@pytest.fixture
def other_owner(db):
    return User.objects.create_user(
        email="other-owner@example.com",
        password="secret123",
        name="Other Owner",
        role=User.OWNER,
    )


@pytest.fixture
def player(db):
    return User.objects.create_user(
        email="player@example.com",
        password="secret123",
        name="Nguyễn Văn A",
        phone="0912345678",
    )


@pytest.fixture
def pitch(owner):
    return Pitch.objects.create(
        owner=owner,
        name="Sân 5 người - Trong nhà",
        location="Quận 1, TP.HCM",
        capacity=10,
        price_value=300000,
        type=Pitch.FIVE_A_SIDE,
        status=Pitch.ACTIVE,
        slots=["17:00 - 18:30", "18:30 - 20:00", "20:00 - 21:30"],
    )


@pytest.fixture
def other_pitch(other_owner):
    return Pitch.objects.create(
        owner=other_owner,
        name="Sân 7 người - Ngoài trời",
        location="Quận 2, TP.HCM",
        capacity=14,
        price_value=500000,
        type=Pitch.SEVEN_A_SIDE,
        status=Pitch.ACTIVE,
    )
