# Accounts/models.py

from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    PermissionsMixin,
    BaseUserManager,
)


# ----------------------------------
# CUSTOM USER MANAGER
# ----------------------------------
# Responsible for creating players, owners and admins.
# Enforces email-based authentication and role correctness.
class UserManager(BaseUserManager):

    def create_user(self, email, password=None, **extra_fields):
        # Email is the primary identifier; it must be provided
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email).lower()
        extra_fields.setdefault("role", User.PLAYER)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        # Enforce admin-level flags for superusers
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email, password, **extra_fields)


# ----------------------------------
# CUSTOM USER MODEL
# ----------------------------------
# Email-based authentication user model with role support.
class User(AbstractBaseUser, PermissionsMixin):

    PLAYER = "player"
    OWNER = "owner"
    ADMIN = "admin"

    # Explicit role definitions to control system access
    ROLE_CHOICES = (
        (PLAYER, "Player"),
        (OWNER, "Owner"),
        (ADMIN, "Admin"),
    )

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255)

    # Contact number (not enforced unique due to shared numbers)
    phone = models.CharField(max_length=20, blank=True)

    # Externally hosted avatar (upload storage lives outside this service)
    avatar = models.CharField(max_length=500, blank=True, null=True)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=PLAYER)

    # Soft-disable flag; inactive users cannot log in
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        ordering = ["-created_at"]

    @property
    def is_admin(self):
        return self.role == self.ADMIN

    @property
    def is_owner(self):
        return self.role == self.OWNER

    def __str__(self):
        return f"{self.name} <{self.email}>"
