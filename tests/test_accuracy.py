import math

import pytest

from detectkit.accuracy import calculate_dataset_accuracy, calculate_iou, calculate_mean_iou
from detectkit.label import Label, ObjectType, Rect

SUGAR = ObjectType.SUGAR_BOX
DRILL = ObjectType.POWER_DRILL


def _label(rect, object_type=SUGAR):
    return Label(object_type, rect)


def test_iou_identical():
    box = _label(Rect(3, 4, 10, 20))
    assert calculate_iou(box, box) == 1.0


def test_iou_disjoint():
    assert calculate_iou(_label(Rect(0, 0, 5, 5)), _label(Rect(10, 10, 5, 5))) == 0.0


def test_iou_partial_overlap_is_symmetric():
    a, b = _label(Rect(0, 0, 10, 10)), _label(Rect(5, 0, 10, 10))
    assert calculate_iou(a, b) == pytest.approx(1 / 3)
    assert calculate_iou(a, b) == calculate_iou(b, a)
    assert 0.0 < calculate_iou(a, b) < 1.0


def test_iou_of_empty_boxes_is_nan():
    result = calculate_iou(_label(Rect()), _label(Rect()))
    assert math.isnan(result)
    assert str(result) == "nan"


def test_mean_iou_perfect():
    real = {"a.png": [_label(Rect(0, 0, 4, 4))]}
    predicted = {"a.png": [_label(Rect(0, 0, 4, 4))]}
    assert calculate_mean_iou(SUGAR, real, predicted) == 1.0


def test_mean_iou_ignores_other_types_and_missing_files():
    real = {
        "a.png": [_label(Rect(0, 0, 4, 4)), _label(Rect(0, 0, 9, 9), DRILL)],
        "b.png": [_label(Rect(0, 0, 4, 4))],
    }
    predicted = {"a.png": [_label(Rect(0, 0, 4, 4)), _label(Rect(50, 50, 2, 2), DRILL)]}
    assert calculate_mean_iou(SUGAR, real, predicted) == 1.0


def test_mean_iou_without_matching_labels_is_nan():
    real = {"a.png": [_label(Rect(0, 0, 4, 4), DRILL)]}
    predicted = {"a.png": []}
    result = calculate_mean_iou(SUGAR, real, predicted)
    assert math.isnan(result)
    assert str(result) == "nan"


def test_mean_iou_with_no_prediction_counts_zero():
    real = {"a.png": [_label(Rect(0, 0, 4, 4))], "b.png": [_label(Rect(0, 0, 4, 4))]}
    predicted = {"a.png": [_label(Rect(0, 0, 4, 4))], "b.png": []}
    assert calculate_mean_iou(SUGAR, real, predicted) == 0.5


def test_accuracy_hit_and_miss():
    real = {"a.png": [_label(Rect(0, 0, 10, 10))]}
    assert calculate_dataset_accuracy(SUGAR, real, {"a.png": [_label(Rect(0, 0, 10, 10))]}) == 1.0
    assert calculate_dataset_accuracy(SUGAR, real, {"a.png": [_label(Rect(20, 20, 5, 5))]}) == 0.0


def test_accuracy_threshold():
    real = {"a.png": [_label(Rect(0, 0, 10, 10))]}
    predicted = {"a.png": [_label(Rect(5, 0, 10, 10))]}
    assert calculate_dataset_accuracy(SUGAR, real, predicted) == 0.0
    assert calculate_dataset_accuracy(SUGAR, real, predicted, 0.3) == 1.0


def test_accuracy_counts_every_matching_prediction():
    real = {"a.png": [_label(Rect(0, 0, 10, 10))]}
    predicted = {"a.png": [_label(Rect(0, 0, 10, 10)), _label(Rect(0, 0, 10, 10))]}
    assert calculate_dataset_accuracy(SUGAR, real, predicted) == 2.0


def test_accuracy_skips_missing_files():
    real = {"a.png": [_label(Rect(0, 0, 10, 10))], "b.png": [_label(Rect(0, 0, 10, 10))]}
    predicted = {"a.png": [_label(Rect(0, 0, 10, 10))]}
    assert calculate_dataset_accuracy(SUGAR, real, predicted) == 1.0
    assert math.isnan(calculate_dataset_accuracy(SUGAR, real, {}))