from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'display_name',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'username', 'created_at', 'last_login']


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    class Meta:
        model = User
        fields = ['id', 'username', 'display_name']
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(max_length=255)
    username = serializers.RegexField(
        regex=r'^[A-Za-z0-9_.-]{3,50}$',
        error_messages={'invalid': 'Username must be 3-50 letters, digits, dots, dashes or underscores.'},
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileUpdateSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=100, allow_blank=True)


class PasswordChangeSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_new_password(self, value):
        validate_password(value, user=self.context.get('user'))
        return value
