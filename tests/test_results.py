from application.dtos.results import ApiErrorResponse, ErrorResult, Successful


def test_deep_errors_flattens_nested_nodes():
    error = ApiErrorResponse.model_validate({
        "message": "Invalid evidence",
        "errors": {
            "errors": [{"attribute": "base", "code": "1", "message": "top"}],
            "dispute": {
                "errors": [{"attribute": "status", "code": "2", "message": "closed"}],
                "evidence": {"errors": [{"attribute": "comments", "code": "3", "message": "too long"}]},
            },
        },
    })
    assert [e.code for e in error.deep_errors()] == ["1", "2", "3"]
    assert error.for_object("dispute")["errors"][0]["code"] == "2"
    assert error.for_object("transaction") == {}


def test_outcome_tags():
    assert Successful().success is True
    failure = ErrorResult(error=ApiErrorResponse(message="nope"))
    assert failure.success is False
    assert failure.message == "nope"


def test_envelope_shapes_are_decoded_leniently():
    error = ApiErrorResponse.model_validate({"message": None, "errors": [{"code": 1}], "params": "x"})
    assert error.message == ""
    assert error.errors == {}
    assert error.raw_errors == [{"code": 1}]
    assert error.raw_params == "x"


def test_numeric_error_codes_become_strings():
    error = ApiErrorResponse.model_validate({"errors": {"errors": [{"code": 95701}]}})
    assert error.deep_errors()[0].code == "95701"
