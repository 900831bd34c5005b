"""Sample list files for training a cascade classifier."""

from __future__ import annotations

import logging
import os

from detectkit.errors import ImageMaskMismatch, OutputDirectoryError
from detectkit.utils import bounding_rect, load_image, split_model_img_masks

_log = logging.getLogger(__name__)


def _open_output(output_dir, file_name):
    path = os.path.join(output_dir, file_name)
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as exc:
        raise OutputDirectoryError(output_dir, f"Failed to open {path}") from exc


def positive_samples_file(input_folder, output_dir, file_name):
    """Write one "image x y width height" line per image of input_folder.

    The rectangle is the bounding box of the image's mask. Images whose mask
    is empty are left out of the file. Returns the number of images found.
    """
    images, masks = split_model_img_masks(input_folder)
    if len(images) != len(masks):
        raise ImageMaskMismatch("", "", "IMAGES AND MASKS ARE NOT THE SAME NUMBER")
    for image_path, mask_path in zip(images, masks):
        _log.info("image: %s mask: %s", image_path, mask_path)

    with _open_output(output_dir, file_name) as handle:
        for image_path, mask_path in zip(images, masks):
            mask = load_image(mask_path)
            load_image(image_path)
            rect = bounding_rect(mask)
            if rect.is_empty():
                _log.warning("No non-zero pixels found in mask %s", mask_path)
                continue
            handle.write(f"{image_path} {rect.x} {rect.y} {rect.width} {rect.height}\n")
    return len(images)


def negative_samples_file(input_dirs, output_dir, file_name):
    """Write the path of every colour image of input_dirs, one per line.

    Returns the number of paths written.
    """
    count = 0
    with _open_output(output_dir, file_name) as handle:
        for folder in input_dirs:
            images, _ = split_model_img_masks(folder)
            count += len(images)
            handle.writelines(f"{path}\n" for path in images)
    return count