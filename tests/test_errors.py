import pytest

from detectkit.errors import (
    DetectionError,
    EmptyFolderError,
    FileNameError,
    ImageLabelMismatch,
    ImageLoadError,
    ImageMaskMismatch,
    InputDirectoryError,
    InvalidArgumentError,
    LabelFormatError,
    MissingDirectoryError,
    OutputDirectoryError,
)


@pytest.mark.parametrize(
    "cls, attribute",
    [
        (InvalidArgumentError, "argument"),
        (ImageLoadError, "filename"),
        (FileNameError, "filename"),
        (LabelFormatError, "filename"),
        (InputDirectoryError, "directory"),
        (EmptyFolderError, "directory"),
        (OutputDirectoryError, "directory"),
        (MissingDirectoryError, "directory"),
    ],
)
def test_single_subject_errors_keep_subject_and_message(cls, attribute):
    err = cls("some/path", "something went wrong")
    assert getattr(err, attribute) == "some/path"
    assert str(err) == "something went wrong"
    assert err.message == "something went wrong"
    assert isinstance(err, DetectionError)


def test_image_label_mismatch_keeps_both_files():
    err = ImageLabelMismatch("img-color.jpg", "img-box.txt", "mismatch")
    assert err.image_filename == "img-color.jpg"
    assert err.label_filename == "img-box.txt"
    assert str(err) == "mismatch"


def test_image_mask_mismatch_keeps_both_files():
    err = ImageMaskMismatch("a_color.png", "b_mask.png", "not the same number")
    assert err.image_filename == "a_color.png"
    assert err.mask_filename == "b_mask.png"
    assert str(err) == "not the same number"


def test_errors_are_caught_as_runtime_errors():
    err = EmptyFolderError("empty", "NO FILES IN FOLDER")
    assert err.directory == "empty"
    assert str(err) == "NO FILES IN FOLDER"
    assert isinstance(err, RuntimeError)
    with pytest.raises(RuntimeError, match="NO FILES IN FOLDER"):
        raise err


def test_base_class_catches_specific_errors():
    err = LabelFormatError("bad line", "LABEL FILE LINE DOES NOT MATCH")
    assert err.filename == "bad line"
    assert err.message == "LABEL FILE LINE DOES NOT MATCH"
    assert isinstance(err, DetectionError)
    with pytest.raises(DetectionError, match="LABEL FILE LINE DOES NOT MATCH"):
        raise err