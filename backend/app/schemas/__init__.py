from .login import LoginRequest, LoginAttempt, LoginStats, LoginRequestCreate
