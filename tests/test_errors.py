import pytest

from horseman import (
    ActionFailedError,
    ElementNotFoundError,
    HorsemanError,
    TabNotFoundError,
    TimeoutError,
    UnsupportedOperationError,
    UploadFileNotFoundError,
)


def test_error_codes():
    assert ElementNotFoundError("#a").error_code == "ELEMENT_NOT_FOUND"
    assert TimeoutError("wait", 100).error_code == "TIMEOUT"
    assert TabNotFoundError(3, 1).details == {"index": 3, "tab_count": 1, "error_code": "TAB_NOT_FOUND"}


def test_messages():
    assert str(ElementNotFoundError("#a", "click")) == "Element not found for 'click': #a"
    assert str(ActionFailedError("title", "boom")) == "Action 'title' failed: boom"
    assert str(UnsupportedOperationError("pdf")) == "Unsupported operation: pdf"


def test_upload_error_is_file_not_found():
    error = UploadFileNotFoundError("/nope")
    assert isinstance(error, FileNotFoundError)
    assert isinstance(error, HorsemanError)
    assert error.details["path"] == "/nope"


def test_horseman_timeout_is_not_builtin():
    with pytest.raises(HorsemanError):
        raise TimeoutError("wait", 1)
