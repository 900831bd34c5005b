import numpy as np
import pytest

from detectkit.errors import ImageLoadError
from detectkit.label import Label, ObjectType, Rect
from detectkit.logger import log_detection, print_labels_img
from detectkit.utils import load_image, save_image

SUGAR = ObjectType.SUGAR_BOX


def test_log_detection_appends_lines(tmp_path):
    path = tmp_path / "log.csv"
    log_detection(str(path), "004_sugar_box", "SIFT-FLANN", 0.5, 0.25)
    log_detection(str(path), "004_sugar_box", "ViolaJones", 1.0, 0.75, "GaussianBlur", "GaussianBlur")
    assert path.read_text().splitlines() == [
        "004_sugar_box,SIFT-FLANN,,,0.5,0.25",
        "004_sugar_box,ViolaJones,GaussianBlur,GaussianBlur,1,0.75",
    ]


def test_log_detection_uses_six_significant_digits(tmp_path):
    path = tmp_path / "log.csv"
    log_detection(str(path), "t", "m", 1 / 3, float("nan"), "-CLAHE", "-Unsharp")
    assert path.read_text() == "t,m,-CLAHE,-Unsharp,0.333333,nan\n"


def test_log_detection_unopenable_file_is_skipped(tmp_path):
    path = tmp_path / "missing" / "log.csv"
    log_detection(str(path), "t", "m", 0.5, 0.5)
    assert not path.exists()


@pytest.fixture
def scene(tmp_path):
    image = np.full((60, 60, 3), 100, dtype=np.uint8)
    path = tmp_path / "000001-color.png"
    save_image(str(path), image)
    return str(path), image


def test_print_labels_img_draws_boxes(tmp_path, scene):
    path, original = scene
    out_dir = tmp_path / "out" / "method"
    real = {path: [Label(SUGAR, Rect(10, 10, 20, 20))]}
    predicted = {path: [Label(SUGAR, Rect(40, 40, 10, 10))]}
    print_labels_img(str(out_dir), SUGAR, predicted, real)

    out = load_image(str(out_dir / "000001-color.png"))
    assert out.shape == original.shape
    assert out[15, 10].tolist() == [0, 255, 0]
    assert out[45, 40].tolist() == [0, 0, 255]
    assert out[20, 20].tolist() == original[20, 20].tolist()
    assert out[5, 5].tolist() == original[5, 5].tolist()


def test_print_labels_img_ignores_other_types(tmp_path, scene):
    path, original = scene
    out_dir = tmp_path / "out"
    real = {path: [Label(ObjectType.POWER_DRILL, Rect(10, 10, 20, 20))]}
    print_labels_img(str(out_dir), SUGAR, {}, real)
    out = load_image(str(out_dir / "000001-color.png"))
    assert np.array_equal(out, original)


def test_print_labels_img_missing_image(tmp_path):
    missing = str(tmp_path / "nothing-color.png")
    with pytest.raises(ImageLoadError):
        print_labels_img(str(tmp_path / "out"), SUGAR, {}, {missing: []})