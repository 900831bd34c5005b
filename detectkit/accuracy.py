"""Intersection over union and detection accuracy."""

from __future__ import annotations

import logging
import math

_log = logging.getLogger(__name__)


def calculate_iou(predicted, real):
    """Return the intersection over union of two labels' bounding boxes."""
    a, b = predicted.bounding_box, real.bounding_box
    intersection = (a & b).area()
    union = a.area() + b.area() - intersection
    if union == 0:
        return math.nan
    return intersection / union


def _matching_labels(object_type, real_items, predicted_items, report_missing=False):
    """Yield (real label, predicted labels) of object_type for every shared image."""
    for filename, real_labels in real_items.items():
        if filename not in predicted_items:
            if report_missing:
                _log.warning("File not found in predicted items during accuracy: %s", filename)
            continue
        predicted = [p for p in predicted_items[filename] if p.object_type == object_type]
        for real in real_labels:
            if real.object_type == object_type:
                yield real, predicted


def calculate_mean_iou(object_type, real_items, predicted_items):
    """Sum every real/predicted IoU of object_type and divide by the real label count."""
    total = 0.0
    count = 0
    for real, predicted in _matching_labels(object_type, real_items, predicted_items):
        total += sum(calculate_iou(p, real) for p in predicted)
        count += 1
    return total / count if count else math.nan


def calculate_dataset_accuracy(object_type, real_items, predicted_items, threshold=0.5):
    """Count real/predicted pairs with IoU of at least threshold, per real label."""
    hits = 0
    count = 0
    pairs = _matching_labels(object_type, real_items, predicted_items, report_missing=True)
    for real, predicted in pairs:
        hits += sum(1 for p in predicted if calculate_iou(p, real) >= threshold)
        count += 1
    return hits / count if count else math.nan