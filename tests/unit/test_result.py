import pytest

from libs.result import Error, Return


def test_third_positional_error_argument_is_field():
    error = Error("EMAIL_TAKEN", "Email already registered", "email")

    assert error.field == "email"
    assert error == Error("EMAIL_TAKEN", "Email already registered", field="email")
    assert error != Error("EMAIL_TAKEN", "Email already registered")


def test_result_guards_wrong_side_access():
    ok = Return.ok(42)
    err = Return.err(Error("RATE_LIMITED", "Too many requests"))

    assert ok.value == 42
    assert err.error.code == "RATE_LIMITED"
    with pytest.raises(ValueError):
        ok.error
    with pytest.raises(ValueError):
        err.value
