"""Recording detection results: a CSV log and annotated images."""

from __future__ import annotations

import logging
import os

import numpy as np

from detectkit.utils import file_basename, load_image, save_image

_log = logging.getLogger(__name__)

_GREEN = (0, 255, 0)
_RED = (0, 0, 255)
_THICKNESS = 2


def log_detection(
    file_name,
    obj_type,
    method_name,
    accuracy,
    mean_iou,
    filter_model_name="",
    filter_scene_name="",
):
    """Append one result line to the CSV file; an unopenable file is reported and skipped."""
    line = (
        f"{obj_type},{method_name},{filter_model_name},{filter_scene_name},"
        f"{accuracy:g},{mean_iou:g}\n"
    )
    try:
        with open(file_name, "a", encoding="utf-8") as handle:
            handle.write(line)
    except OSError:
        _log.error("Error opening log file: %s", file_name)


def _draw_rectangle(image, rect, color, thickness=_THICKNESS):
    """Draw the outline of rect onto image in place."""
    if rect.is_empty():
        return
    height, width = image.shape[:2]
    x1, y1 = rect.x, rect.y
    x2, y2 = rect.x + rect.width - 1, rect.y + rect.height - 1
    lo, hi = thickness // 2, (thickness - 1) // 2

    def fill(r0, r1, c0, c1):
        r0, c0 = max(r0, 0), max(c0, 0)
        r1, c1 = min(r1, height - 1), min(c1, width - 1)
        if r0 <= r1 and c0 <= c1:
            image[r0 : r1 + 1, c0 : c1 + 1] = color

    fill(y1 - lo, y1 + hi, x1 - lo, x2 + hi)
    fill(y2 - lo, y2 + hi, x1 - lo, x2 + hi)
    fill(y1 - lo, y2 + hi, x1 - lo, x1 + hi)
    fill(y1 - lo, y2 + hi, x2 - lo, x2 + hi)


def print_labels_img(output_folder, object_type, predicted_items, real_items):
    """Save every test image with real boxes in green and predicted boxes in red."""
    os.makedirs(output_folder, exist_ok=True)
    for filename, real_labels in real_items.items():
        scene = load_image(filename)
        out = np.stack([scene] * 3, axis=2) if scene.ndim == 2 else scene.copy()

        for label in real_labels:
            if label.object_type == object_type:
                _draw_rectangle(out, label.bounding_box, _GREEN)
        for label in predicted_items.get(filename, ()):
            if label.object_type == object_type:
                _draw_rectangle(out, label.bounding_box, _RED)

        save_image(os.path.join(output_folder, file_basename(filename) + ".png"), out)