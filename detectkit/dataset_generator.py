"""Generation of rotated, relit and grey training images from model images."""

from __future__ import annotations

import math
import os
from pathlib import Path

import numpy as np
from PIL import Image
from scipy import ndimage

from detectkit.errors import ImageLoadError, InvalidArgumentError
from detectkit.utils import save_image

_BRIGHTNESS_RANGE = 80


def _read_bgr(path, what):
    try:
        with Image.open(path) as img:
            rgb = np.array(img.convert("RGB"), dtype=np.uint8)
    except OSError as exc:
        raise ImageLoadError(path, f"Error loading the {what}: {path}") from exc
    return np.ascontiguousarray(rgb[:, :, ::-1])


def _base_name(path):
    stem = Path(path).stem
    index = stem.rfind("_")
    return stem if index < 0 else stem[:index]


def _rotation_matrix(center, angle):
    radians = math.radians(angle)
    a, b = math.cos(radians), math.sin(radians)
    cx, cy = center
    return np.array(
        [
            [a, b, (1 - a) * cx - b * cy],
            [-b, a, b * cx + (1 - a) * cy],
        ]
    )


def _warp_affine(image, matrix, border):
    """Warp image by matrix (source to destination), bilinear, constant border."""
    height, width = image.shape[:2]
    inverse = np.linalg.inv(matrix[:, :2])
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dx, dy = xs - matrix[0, 2], ys - matrix[1, 2]
    src_x = inverse[0, 0] * dx + inverse[0, 1] * dy
    src_y = inverse[1, 0] * dx + inverse[1, 1] * dy

    def warp(channel):
        return ndimage.map_coordinates(
            channel.astype(np.float64), [src_y, src_x], order=1, mode="constant", cval=border
        )

    if image.ndim == 2:
        result = warp(image)
    else:
        result = np.stack([warp(image[:, :, c]) for c in range(image.shape[2])], axis=2)
    return np.clip(np.rint(result), 0, 255).astype(np.uint8)


class ImageDatasetGenerator:
    """Writes augmented copies of an image and its mask into a folder."""

    def generate_rotated_images(
        self,
        input_image,
        input_mask,
        output_folder,
        num_images,
        gen_light_variations,
        num_light_variations,
    ):
        """Write num_images rotations evenly spread over a full turn."""
        os.makedirs(output_folder, exist_ok=True)
        image = _read_bgr(input_image, "image")
        mask = _read_bgr(input_mask, "mask")
        if num_images <= 0:
            return

        angle_step = 360.0 / num_images
        center = (image.shape[1] / 2.0, image.shape[0] / 2.0)
        base = _base_name(input_image)
        image_ext = Path(input_image).suffix
        mask_ext = Path(input_mask).suffix

        for i in range(num_images):
            angle = i * angle_step
            matrix = _rotation_matrix(center, angle)
            rotated_image = _warp_affine(image, matrix, 255.0)
            rotated_mask = _warp_affine(mask, matrix, 0.0)

            tag = f"{base}_rot_{int(angle)}"
            image_path = os.path.join(output_folder, f"{tag}_color{image_ext}")
            mask_path = os.path.join(output_folder, f"{tag}_mask{mask_ext}")
            save_image(image_path, rotated_image)
            save_image(mask_path, rotated_mask)

            if gen_light_variations:
                self.generate_light_variations(
                    image_path, mask_path, output_folder, num_light_variations
                )

    def generate_light_variations(self, input_image, input_mask, output_folder, num_images):
        """Write num_images brightness shifts of the image, then delete the inputs."""
        os.makedirs(output_folder, exist_ok=True)
        image = _read_bgr(input_image, "image")
        mask = _read_bgr(input_mask, "mask")
        if num_images < 2:
            raise InvalidArgumentError(
                "num_images", "at least two light variations are needed"
            )

        step = _BRIGHTNESS_RANGE // (num_images - 1)
        brightness = -_BRIGHTNESS_RANGE // 2
        base = _base_name(input_image)
        ext = Path(input_image).suffix

        for _ in range(num_images):
            shifted = np.clip(image.astype(np.int32) + brightness, 0, 255).astype(np.uint8)
            tag = f"{base}_light_{brightness}"
            save_image(os.path.join(output_folder, f"{tag}_color{ext}"), shifted)
            save_image(os.path.join(output_folder, f"{tag}_mask{ext}"), mask)
            brightness += step

        for path in (input_image, input_mask):
            if os.path.exists(path):
                os.remove(path)

    def generate_gray_image(self, input_image, input_mask, output_folder):
        """Write a grey version of the image next to a copy of its mask."""
        os.makedirs(output_folder, exist_ok=True)
        image = _read_bgr(input_image, "image")
        mask = _read_bgr(input_mask, "mask")

        b, g, r = (image[:, :, c].astype(np.float64) for c in range(3))
        gray = np.clip(np.rint(0.299 * r + 0.587 * g + 0.114 * b), 0, 255).astype(np.uint8)

        base = _base_name(input_image)
        ext = Path(input_image).suffix
        save_image(os.path.join(output_folder, f"{base}_gray_color{ext}"), gray)
        save_image(os.path.join(output_folder, f"{base}_gray_mask{ext}"), mask)