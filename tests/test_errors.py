import pytest

from tagcheck.errors import FieldError, InvalidValidationError, ValidationErrors


def _error(ns="User.Name", struct_ns="User.Name", tag="required", field_len=4, struct_len=4):
    return FieldError(
        tag=tag,
        actual_tag=tag,
        namespace=ns,
        struct_namespace=struct_ns,
        field_len=field_len,
        struct_field_len=struct_len,
        value="",
        param="",
    )


def test_field_error_message():
    err = _error()
    assert str(err) == "Key: 'User.Name' Error:Field validation for 'Name' failed on the 'required' tag"


def test_field_and_struct_field_are_namespace_suffixes():
    err = _error(ns="User.fname", struct_ns="User.FirstName", field_len=5, struct_len=9)
    assert err.field == "fname"
    assert err.struct_field == "FirstName"
    assert err.namespace.endswith(err.field)
    assert err.struct_namespace.endswith(err.struct_field)


def test_zero_length_field_is_empty():
    err = _error(ns="", struct_ns="", field_len=0, struct_len=0)
    assert err.field == ""
    assert err.struct_field == ""


def test_field_error_is_raisable():
    err = _error(tag="min")
    assert err.tag == "min"
    assert err.actual_tag == "min"
    assert str(err) == "Key: 'User.Name' Error:Field validation for 'Name' failed on the 'min' tag"
    with pytest.raises(FieldError, match="failed on the 'min' tag"):
        raise err


def test_validation_errors_sequence_behaviour():
    first = _error(ns="A.X", struct_ns="A.X", field_len=1, struct_len=1)
    second = _error(ns="A.Y", struct_ns="A.Y", field_len=1, struct_len=1, tag="max")
    errs = ValidationErrors([first, second])
    assert len(errs) == 2
    assert errs[0] is first
    assert list(errs) == [first, second]
    sliced = errs[1:]
    assert isinstance(sliced, ValidationErrors)
    assert list(sliced) == [second]


def test_validation_errors_message_has_one_line_per_error():
    first = _error(ns="A.X", struct_ns="A.X", field_len=1, struct_len=1)
    second = _error(ns="A.Y", struct_ns="A.Y", field_len=1, struct_len=1, tag="max")
    lines = str(ValidationErrors([first, second])).split("\n")
    assert lines == [str(first), str(second)]


def test_empty_validation_errors_message():
    assert str(ValidationErrors()) == ""
    assert len(ValidationErrors()) == 0


def test_invalid_validation_error_without_type():
    assert str(InvalidValidationError()) == "validator: (nil)"


def test_invalid_validation_error_with_type():
    class Sample:
        pass

    message = str(InvalidValidationError(Sample))
    assert message.startswith("validator: (nil ")
    assert message.endswith("Sample)")
    with pytest.raises(InvalidValidationError):
        raise InvalidValidationError(Sample)