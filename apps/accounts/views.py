from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ProfileUpdateSerializer,
    PasswordChangeSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    update_profile,
    change_password as change_password_service,
)


# =============================================================================
# Response shapes (API docs only)
# =============================================================================

class TokenPairSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SessionSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokenPairSerializer()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
    code = serializers.CharField()


def _session_payload(user, message):
    refresh = RefreshToken.for_user(user)
    return {
        'message': message,
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
    }


# =============================================================================
# Registration & login
# =============================================================================

@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: SessionSerializer, 400: ErrorSerializer, 409: ErrorSerializer},
    description="Create an account and receive a JWT pair.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = dict(serializer.validated_data)
    data.pop('password_confirm')
    user = register_user(**data)

    return Response(_session_payload(user, 'Registration successful'), status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: SessionSerializer,
        401: ErrorSerializer,
        403: ErrorSerializer,
        423: ErrorSerializer,
    },
    description=(
        "Exchange email and password for a JWT pair. Repeated failures lock "
        "the account for a while (423)."
    ),
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
    )
    return Response(_session_payload(user, 'Login successful'))


# =============================================================================
# Own profile
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    description="The caller's profile.",
    tags=['auth'],
)
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={200: UserSerializer},
    description="Change the caller's display name.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def current_user(request):
    if request.method == 'PATCH':
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        update_profile(user=request.user, display_name=serializer.validated_data['display_name'])

    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=PasswordChangeSerializer,
    responses={204: None, 400: ErrorSerializer},
    description="Change the caller's password. Existing tokens stay valid until they expire.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    serializer = PasswordChangeSerializer(data=request.data, context={'user': request.user})
    serializer.is_valid(raise_exception=True)

    change_password_service(
        user=request.user,
        current_password=serializer.validated_data['current_password'],
        new_password=serializer.validated_data['new_password'],
    )
    return Response(status=status.HTTP_204_NO_CONTENT)
