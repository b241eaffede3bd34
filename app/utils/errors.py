"""
Exceptions raised by the admin workflow.

The RBAC checks themselves never raise, they answer False. These are for
the layer that acts on a decision and has to report why it refused.
"""


class AccessControlError(Exception):
    """Base class, carries the HTTP status the web layer should answer with"""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'error': self.message}


class UserNotFoundError(AccessControlError):
    status_code = 404


class PermissionDeniedError(AccessControlError):
    status_code = 403


class InvalidRoleChangeError(AccessControlError):
    status_code = 400


class InvalidPermissionsError(AccessControlError):
    status_code = 400
