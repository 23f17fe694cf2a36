from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


# =========================
# PROMOTIONS & NEWS
# =========================

class Promotion(models.Model):
    """
    Marketing content shown on the public site.
    discount / badge only apply to promotions, never to news.
    """

    PROMOTION = "promotion"
    NEWS = "news"

    TYPE_CHOICES = [
        (PROMOTION, "Promotion"),
        (NEWS, "News"),
    ]

    ACTIVE = "active"
    INACTIVE = "inactive"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (INACTIVE, "Inactive"),
    ]

    title = models.CharField(max_length=200)
    description = models.TextField()
    content = models.TextField(blank=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=PROMOTION)

    image = models.CharField(max_length=500, blank=True)
    discount = models.CharField(max_length=50, blank=True)
    badge = models.CharField(max_length=50, blank=True)

    # Optional validity window
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=ACTIVE)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="promotions"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if self.type == self.NEWS:
            self.discount = ""
            self.badge = ""
        super().save(*args, **kwargs)

    def __str__(self):
        return self.title


# =========================
# REVIEWS
# =========================

class Review(models.Model):

    ACTIVE = "active"
    INACTIVE = "inactive"

    STATUS_CHOICES = [
        (ACTIVE, "Active"),
        (INACTIVE, "Inactive"),
    ]

    name = models.CharField(max_length=150)
    # Initials shown in place of a picture
    avatar = models.CharField(max_length=10, blank=True)
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField()

    pitch = models.ForeignKey(
        "Pitch.Pitch",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviews"
    )
    # Display name of the reviewed field
    field = models.CharField(max_length=150, blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=ACTIVE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=5),
                name="review_rating_between_1_and_5",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.rating}/5)"


# =========================
# NOTIFICATIONS (POLLED)
# =========================

class Notification(models.Model):

    BOOKING = "booking"
    PAYMENT = "payment"
    SYSTEM = "system"

    TYPE_CHOICES = [
        (BOOKING, "Booking"),
        (PAYMENT, "Payment"),
        (SYSTEM, "System"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications"
    )
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=SYSTEM)
    title = models.CharField(max_length=200)
    message = models.TextField()
    link = models.CharField(max_length=255, blank=True)
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "is_read"], name="notification_user_read_idx"),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.title}"
