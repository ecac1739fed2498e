class LoginCoreError(Exception):
    """Base class for errors raised by the login-request core."""


class NotFound(LoginCoreError):
    def __init__(self, collection: str, record_id):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} {record_id} not found")


class BackendFailure(LoginCoreError):
    """Storage unreachable or a query failed."""


class InvalidTransition(LoginCoreError):
    def __init__(self, record_id, current: str, target: str):
        self.record_id = record_id
        self.current = current
        self.target = target
        super().__init__(f"Login request {record_id} is already {current}; cannot move to {target}")
