from .login_request import LoginRequest, RequestStatus
from .login_attempt import LoginAttempt
