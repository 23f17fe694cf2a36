import pytest

from Content.models import Notification, Promotion, Review
from Content.services import notify


def make_promotion(**overrides):
    data = {
        "title": "Giảm 20% khung giờ sáng",
        "description": "Áp dụng cho mọi sân 5 người",
        "type": Promotion.PROMOTION,
        "discount": "20%",
        "badge": "HOT",
        "status": Promotion.ACTIVE,
    }
    data.update(overrides)
    return Promotion.objects.create(**data)


# -------------------------------------------------------------------
# PROMOTIONS
# -------------------------------------------------------------------
@pytest.mark.django_db
def test_public_promotions_only_active(api_client):
    active = make_promotion()
    hidden = make_promotion(title="Hết hạn", status=Promotion.INACTIVE)

    body = api_client.get("/api/promotions", {"status": "inactive"}).json()
    assert [p["id"] for p in body["data"]] == [str(active.pk)]

    assert api_client.get(f"/api/promotions/{active.pk}").status_code == 200
    assert api_client.get(f"/api/promotions/{hidden.pk}").status_code == 404


@pytest.mark.django_db
def test_public_promotions_filter_by_type(api_client):
    make_promotion()
    news = make_promotion(title="Khai trương sân mới", type=Promotion.NEWS)

    body = api_client.get("/api/promotions", {"type": "news"}).json()
    assert [p["id"] for p in body["data"]] == [str(news.pk)]


@pytest.mark.django_db
def test_news_never_carries_discount():
    news = make_promotion(type=Promotion.NEWS)
    assert news.discount == ""
    assert news.badge == ""


def test_admin_creates_promotion(auth_client, admin_user):
    response = auth_client(admin_user).post(
        "/api/admin/promotions",
        {
            "title": "Tin tức",
            "description": "Cập nhật giờ mở cửa",
            "type": "news",
            "discount": "50%",
            "startDate": "2025-06-01",
            "endDate": "2025-06-30",
        },
        format="json",
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["discount"] == ""
    assert data["createdBy"] == str(admin_user.pk)
    assert data["startDate"] == "2025-06-01"


def test_promotion_dates_must_be_ordered(auth_client, admin_user):
    response = auth_client(admin_user).post(
        "/api/admin/promotions",
        {"title": "X", "description": "Y", "startDate": "2025-06-30", "endDate": "2025-06-01"},
        format="json",
    )
    assert response.status_code == 400
    assert "endDate" in response.json()["errors"]


def test_owner_manages_only_own_promotions(auth_client, owner, admin_user):
    admin_item = make_promotion(created_by=admin_user)
    client = auth_client(owner)

    created = client.post(
        "/api/owner/promotions", {"title": "Sân của tôi", "description": "Ưu đãi"}, format="json"
    )
    assert created.status_code == 201
    own_id = created.json()["data"]["id"]

    listing = client.get("/api/owner/promotions").json()["data"]
    assert [p["id"] for p in listing] == [own_id]
    assert client.put(
        f"/api/owner/promotions/{admin_item.pk}", {"title": "Hack"}, format="json"
    ).status_code == 404

    updated = client.put(f"/api/owner/promotions/{own_id}", {"status": "inactive"}, format="json")
    assert updated.json()["data"]["status"] == "inactive"
    assert updated.json()["data"]["title"] == "Sân của tôi"


# -------------------------------------------------------------------
# REVIEWS
# -------------------------------------------------------------------
@pytest.mark.django_db
def test_public_reviews_with_limit(api_client):
    for name in ("Nguyễn Văn A", "Trần Thị B", "Lê Văn C"):
        Review.objects.create(name=name, rating=5, comment="Tốt")
    Review.objects.create(name="Ẩn", rating=1, comment="Xấu", status=Review.INACTIVE)

    assert len(api_client.get("/api/reviews").json()["data"]) == 3
    assert len(api_client.get("/api/reviews", {"limit": 2}).json()["data"]) == 2


def test_admin_review_defaults(auth_client, admin_user, pitch):
    response = auth_client(admin_user).post(
        "/api/admin/reviews",
        {"name": "Phạm Thị D", "rating": 5, "comment": "Sân đẹp", "fieldId": str(pitch.pk)},
        format="json",
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["avatar"] == "PD"
    assert data["field"] == pitch.name
    assert data["fieldId"] == str(pitch.pk)


def test_review_rating_range(auth_client, admin_user):
    response = auth_client(admin_user).post(
        "/api/admin/reviews", {"name": "X", "rating": 6, "comment": "?"}, format="json"
    )
    assert response.status_code == 400


def test_admin_review_filters(auth_client, admin_user, pitch, other_pitch):
    Review.objects.create(name="A", rating=5, comment="ok", pitch=pitch)
    Review.objects.create(name="B", rating=4, comment="fine", pitch=other_pitch)
    client = auth_client(admin_user)

    assert client.get("/api/admin/reviews", {"fieldId": pitch.pk}).json()["pagination"]["total"] == 1
    assert client.get("/api/admin/reviews", {"q": "fine"}).json()["pagination"]["total"] == 1


# -------------------------------------------------------------------
# NOTIFICATIONS
# -------------------------------------------------------------------
def test_notification_flow(auth_client, player, owner):
    first = notify(player, "Booking confirmed", "See you on the pitch")
    notify(player, "Payment received", "Thanks")
    notify(owner, "Not yours", "Hidden")
    client = auth_client(player)

    listing = client.get("/api/notifications").json()
    assert len(listing["data"]) == 2
    assert listing["unreadCount"] == 2

    read = client.put(f"/api/notifications/{first.pk}/read")
    assert read.json()["data"]["isRead"] is True
    assert client.get("/api/notifications").json()["unreadCount"] == 1

    assert client.put("/api/notifications/read-all").json()["data"] == {"updated": 1}
    assert client.get("/api/notifications").json()["unreadCount"] == 0

    assert client.delete(f"/api/notifications/{first.pk}").status_code == 200
    assert Notification.objects.filter(user=player).count() == 1


def test_cannot_touch_other_users_notifications(auth_client, player, owner):
    theirs = notify(owner, "Owner only", "Hidden")
    client = auth_client(player)

    assert client.put(f"/api/notifications/{theirs.pk}/read").status_code == 404
    assert client.delete(f"/api/notifications/{theirs.pk}").status_code == 404


@pytest.mark.django_db
def test_notifications_require_login(api_client):
    assert api_client.get("/api/notifications").status_code == 401


@pytest.mark.django_db
def test_notify_without_user_is_a_noop():
    assert notify(None, "x", "y") is None
    assert not Notification.objects.exists()
