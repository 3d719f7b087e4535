"""Authentication: registration, login, profile."""

from django.contrib.auth import get_user_model
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import serializers
from drf_spectacular.utils import extend_schema

Operator = get_user_model()


# ── Serializers ───────────────────────────────────────────────────────────────
class OperatorRegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)

    class Meta:
        model  = Operator
        fields = ["email", "name", "password"]

    def create(self, validated_data):
        # Self-registered operators are always DATA_ENTRY.
        password = validated_data.pop("password")
        operator = Operator(**validated_data)
        operator.set_password(password)
        operator.save()
        return operator


class OperatorProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model  = Operator
        fields = ["id", "email", "name", "role", "created_at"]
        read_only_fields = ["id", "email", "role", "created_at"]


# ── Views ─────────────────────────────────────────────────────────────────────
@extend_schema(tags=["Auth"])
class RegisterView(generics.CreateAPIView):
    """POST /api/auth/register/ — Create a new operator account."""
    queryset         = Operator.objects.all()
    serializer_class = OperatorRegisterSerializer
    permission_classes = [AllowAny]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        operator = serializer.save()
        return Response(
            {"id": str(operator.id), "email": operator.email},
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Auth"])
class ProfileView(generics.RetrieveUpdateAPIView):
    """GET/PATCH /api/auth/me/ — Retrieve or update own profile."""
    serializer_class   = OperatorProfileSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user
