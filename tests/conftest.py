import json
import pathlib

import pytest

# Every frame from the tests directory counts as application code; the json frames are third-party.
APP_KEYWORD = str(pathlib.Path(__file__).parent)


def fail_in_hook(obj):
    raise ValueError("boom")


def fail_inside_json() -> ValueError:
    try:
        json.loads('{"a": 1}', object_hook=fail_in_hook)
    except ValueError as e:
        return e
    raise AssertionError("json.loads did not fail")


def fail_with_cause() -> RuntimeError:
    try:
        try:
            json.loads('{"a": 1}', object_hook=fail_in_hook)
        except ValueError as e:
            raise RuntimeError("wrapped") from e
    except RuntimeError as e:
        return e
    raise AssertionError("json.loads did not fail")


def fail_in_group() -> Exception:
    # ExceptionGroup exists only on 3.11 and newer.
    try:
        raise ExceptionGroup("many failures", [fail_inside_json()])
    except Exception as e:
        return e


@pytest.fixture
def app_keyword() -> str:
    return APP_KEYWORD


@pytest.fixture
def json_failure() -> ValueError:
    return fail_inside_json()


@pytest.fixture
def chained_failure() -> RuntimeError:
    return fail_with_cause()
