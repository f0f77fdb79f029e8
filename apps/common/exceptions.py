"""
Error taxonomy shared by all Roomy services.

Every domain error is a DRF ``APIException`` so that views can let it
propagate: the project exception handler renders it as
``{"error": <message>, "code": <code>}`` with the status code below.
App-specific errors subclass one of the six kinds.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class RoomyServiceError(APIException):
    """Base exception for all Roomy service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request could not be completed.'
    default_code = 'service_error'


class NotFoundError(RoomyServiceError):
    """An entity id does not resolve."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class NotMemberError(RoomyServiceError):
    """Caller is not an active member of the group."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You must be an active member of this group.'
    default_code = 'not_group_member'


class InsufficientPermissionsError(RoomyServiceError):
    """Caller is a member but their role does not allow the action."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'insufficient_permissions'


class InvalidStateError(RoomyServiceError):
    """Operation is not allowed in the entity's current status."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This action is not allowed in the current state.'
    default_code = 'invalid_state'


class ConflictError(RoomyServiceError):
    """A uniqueness rule would be violated."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This resource already exists.'
    default_code = 'conflict'


class GatewayFailureError(RoomyServiceError):
    """The transfer gateway could not complete the request."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'The payment provider is unavailable. Please try again later.'
    default_code = 'gateway_failure'
