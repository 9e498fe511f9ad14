from tripsync.errors import (
    USER_MESSAGES,
    AuthenticationError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    StoreError,
    TripSyncError,
    UnauthorizedError,
    ValidationError,
)


def test_all_error_codes_have_user_message():
    for code in ErrorCode:
        assert code in USER_MESSAGES


def test_user_message_lookup():
    err = TripSyncError("connection pool exhausted", code=ErrorCode.STORE_ERROR)
    assert err.user_message == "Something went wrong saving your changes. Please try again."


def test_status_codes():
    assert UnauthorizedError().status_code == 401
    assert ForbiddenError().status_code == 403
    assert NotFoundError().status_code == 404
    assert ConflictError("dup").status_code == 409
    assert ValidationError().status_code == 400
    assert StoreError("boom").status_code == 500


def test_unauthorized_is_authentication_error():
    assert UnauthorizedError is AuthenticationError
    assert UnauthorizedError().to_body() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}


def test_subclasses_inherit_user_message():
    assert ForbiddenError("no").user_message == USER_MESSAGES[ErrorCode.FORBIDDEN]
    assert NotFoundError().user_message == USER_MESSAGES[ErrorCode.NOT_FOUND]
    assert NetworkError("down").user_message == USER_MESSAGES[ErrorCode.NETWORK_ERROR]


def test_validation_error_body_carries_details():
    issues = [{"loc": ["title"], "msg": "String should have at least 3 characters", "type": "string_too_short"}]
    body = ValidationError(issues=issues).to_body()
    assert body == {"error": "Validation failed", "code": "VALIDATION_ERROR", "details": issues}


def test_validation_error_without_issues_has_no_details():
    assert "details" not in ValidationError("End date must be after start date").to_body()


def test_network_error_keeps_status():
    err = NetworkError("Failed to fetch /api/trips/t1 (HTTP 502)", status=502)
    assert err.status == 502
    assert err.code == ErrorCode.NETWORK_ERROR


def test_user_message_never_exposes_internal_message():
    internal = "duplicate key value violates unique constraint uq_trip_members_trip_user"
    err = StoreError(internal)
    assert internal not in err.user_message
