import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied, Throttled
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .services import LoginAttemptService

logger = logging.getLogger(__name__)

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


class UserSerializer(serializers.ModelSerializer):
    """Public shape of a user. The password hash never leaves the server."""
    id = serializers.CharField(read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "name",
            "phone",
            "role",
            "avatar",
            "isActive",
            "createdAt",
            "updatedAt",
        )


def _validate_unique_email(value, instance=None):
    email = value.strip().lower()
    qs = User.objects.filter(email=email)
    if instance is not None:
        qs = qs.exclude(pk=instance.pk)
    if qs.exists():
        raise serializers.ValidationError("Email is already in use")
    return email


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=MIN_PASSWORD_LENGTH)
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    role = serializers.ChoiceField(
        choices=[User.PLAYER, User.OWNER],
        required=False,
        default=User.PLAYER,
    )

    class Meta:
        model = User
        fields = ("email", "password", "name", "phone", "role")

    def validate_email(self, value):
        return _validate_unique_email(value)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank")
        return value.strip()

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(TokenObtainPairSerializer):

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token["role"] = user.role
        token["email"] = user.email
        return token

    def validate(self, attrs):
        email = (attrs.get(self.username_field) or "").strip().lower()
        password = attrs.get("password") or ""

        if LoginAttemptService.is_locked(email):
            raise Throttled(
                detail="Too many failed login attempts. Try again in a few minutes."
            )

        user = User.objects.filter(email=email).first()
        if user is None:
            LoginAttemptService.register_failure(email)
            raise AuthenticationFailed("Account does not exist")

        if not user.is_active:
            raise PermissionDenied("Account is locked")

        if not user.check_password(password):
            LoginAttemptService.register_failure(email)
            logger.info("Failed login for %s", email)
            raise AuthenticationFailed("Wrong password")

        LoginAttemptService.reset(email)
        update_last_login(None, user)

        refresh = self.get_token(user)
        return {
            "user": UserSerializer(user).data,
            "token": str(refresh.access_token),
            "refresh": str(refresh),
        }


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Self-service profile edit.
    Changing the password requires the current one.
    """
    name = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        required=False, write_only=True, min_length=MIN_PASSWORD_LENGTH
    )
    currentPassword = serializers.CharField(required=False, write_only=True)

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank")
        return value.strip()

    def validate_email(self, value):
        return _validate_unique_email(value, instance=self.instance)

    def validate(self, attrs):
        if "password" in attrs:
            current = attrs.get("currentPassword")
            if not current:
                raise serializers.ValidationError(
                    {"currentPassword": "Current password is required"}
                )
            if not self.instance.check_password(current):
                raise AuthenticationFailed("Current password is incorrect")
        return attrs

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        validated_data.pop("currentPassword", None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if password:
            instance.set_password(password)

        instance.save()
        return instance


class AdminUserSerializer(serializers.ModelSerializer):
    """Admin create / edit of any account, including role and active flag."""
    id = serializers.CharField(read_only=True)
    password = serializers.CharField(
        write_only=True, required=False, min_length=MIN_PASSWORD_LENGTH
    )
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "name",
            "phone",
            "role",
            "avatar",
            "password",
            "isActive",
            "createdAt",
            "updatedAt",
        )

    def validate_email(self, value):
        return _validate_unique_email(value, instance=self.instance)

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "Password is required"})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if password:
            instance.set_password(password)

        instance.save()
        return instance


class UserStatusSerializer(serializers.Serializer):
    isActive = serializers.BooleanField()


class BulkUserStatusSerializer(serializers.Serializer):
    userIds = serializers.ListField(
        child=serializers.CharField(),
        min_length=1,
    )
    isActive = serializers.BooleanField()
