"""
Authentication models.
Operator is the custom User — back-office data-entry staff and administrators.
"""

import uuid
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager


class OperatorManager(BaseUserManager):
    def create_user(self, email, password=None, **extra):
        if not email:
            raise ValueError("Email is required.")
        user = self.model(email=self.normalize_email(email), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra):
        extra.setdefault("is_staff", True)
        extra.setdefault("is_superuser", True)
        extra.setdefault("role", Operator.Role.ADMIN)
        return self.create_user(email, password, **extra)


class Operator(AbstractBaseUser, PermissionsMixin):
    """A back-office user. Its id is the opaque ``created_by`` stamped on records."""

    class Role(models.TextChoices):
        DATA_ENTRY = "DATA_ENTRY", "Data Entry"
        ADMIN      = "ADMIN",      "Administrator"

    id         = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email      = models.EmailField(unique=True)
    name       = models.CharField(max_length=120)
    role       = models.CharField(max_length=12, choices=Role.choices, default=Role.DATA_ENTRY)
    is_active  = models.BooleanField(default=True)
    is_staff   = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    USERNAME_FIELD  = "email"
    REQUIRED_FIELDS = ["name"]

    objects = OperatorManager()

    class Meta:
        verbose_name = "Operator"
        indexes = [models.Index(fields=["role"], name="auth_operator_role_idx")]

    def __str__(self):
        return f"{self.name} ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
