from utils.logger import sanitize_log_data


def test_password_redaction():
    data = {"username": "aisha", "password": "supersecret123"}
    sanitized = sanitize_log_data(data)

    assert sanitized["username"] == "aisha"
    assert sanitized["password"] == "***REDACTED***"


def test_hashed_password_redaction():
    sanitized = sanitize_log_data({"hashed_password": "$2b$12$abcdef"})

    assert sanitized["hashed_password"] == "***REDACTED***"


def test_nested_structures_are_sanitized():
    data = {
        "user": {"email": "user@example.com", "password": "secret123"},
        "attempts": [{"password": "one"}, {"password": "two"}, "plain"],
    }
    sanitized = sanitize_log_data(data)

    assert sanitized["user"]["email"] == "user@example.com"
    assert sanitized["user"]["password"] == "***REDACTED***"
    assert sanitized["attempts"] == [
        {"password": "***REDACTED***"}, {"password": "***REDACTED***"}, "plain"
    ]


def test_input_is_not_mutated():
    data = {"password": "secret123"}
    sanitize_log_data(data)

    assert data["password"] == "secret123"


def test_non_sensitive_data_unchanged():
    data = {"user_id": 123, "email": "test@example.com", "quantity": 2}

    assert sanitize_log_data(data) == data
