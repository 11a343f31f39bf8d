from sphfluid.errors import ErrorCode, SimulationError


def test_error_codes_match_source_values():
    assert ErrorCode(-5) is ErrorCode.WRONG_PARTICLE_NUMBER
    assert ErrorCode(-4) is ErrorCode.OUTPUT_ERROR
    assert ErrorCode(0) is ErrorCode.SUCCESS


def test_error_codes_are_consecutive():
    names = [ErrorCode(value).name for value in range(-5, 1)]
    assert names == [
        "WRONG_PARTICLE_NUMBER",
        "OUTPUT_ERROR",
        "INIT_FILE_ERROR",
        "WRONG_TIME_STEP",
        "WRONG_ARGS",
        "SUCCESS",
    ]


def test_simulation_error_carries_message_and_code():
    error = SimulationError("Invalid number of arguments", ErrorCode.WRONG_ARGS)
    assert str(error) == "Invalid number of arguments"
    assert error.code is ErrorCode.WRONG_ARGS


def test_simulation_error_is_runtime_error():
    error = SimulationError("Could not parse arguments")
    assert isinstance(error, RuntimeError)
    assert str(error) == "Could not parse arguments"


def test_simulation_error_code_defaults_to_none():
    error = SimulationError("oops")
    assert error.code is None
    assert str(error) == "oops"