"""Helpers for file names, directories, images and label files."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image

from detectkit.errors import (
    EmptyFolderError,
    FileNameError,
    ImageLoadError,
    InputDirectoryError,
    InvalidArgumentError,
    LabelFormatError,
)
from detectkit.label import Label, ObjectType, Rect

_NAME_RULE = "FILE HAS TO END WITH mask OR color TO BE A SUITABLE IMAGE"


def split_string(text, delimiter):
    """Split text on every occurrence of delimiter, keeping empty tokens."""
    return text.split(delimiter)


def file_basename(filepath):
    """Return the file name without directories and without any extension."""
    name = filepath.rsplit("/", 1)[-1]
    return name.split(".", 1)[0]


def remove_file_suffix(basename, delimiter):
    """Drop everything from the last delimiter onwards."""
    index = basename.rfind(delimiter)
    return basename if index < 0 else basename[:index]


def folder_filenames(folderpath):
    """Return the sorted paths of every entry of a directory."""
    try:
        with os.scandir(folderpath) as entries:
            names = sorted(os.path.join(folderpath, entry.name) for entry in entries)
    except OSError as exc:
        raise InputDirectoryError(folderpath, f"CANNOT READ DIRECTORY: {exc}") from exc
    if not names:
        raise EmptyFolderError(folderpath, "NO FILES IN FOLDER")
    return names


def split_model_img_masks(folderpath):
    """Split a model folder into sorted (colour image paths, mask paths)."""
    images, masks = [], []
    for path in folder_filenames(folderpath):
        basename = file_basename(path)
        if "mask" in basename:
            masks.append(path)
        elif "color" in basename:
            images.append(path)
        else:
            raise FileNameError(path, _NAME_RULE)
    return sorted(images), sorted(masks)


def invert_mapping(mapping):
    """Swap keys and values; for repeated values the first key wins."""
    inverse = {}
    for key, value in mapping.items():
        inverse.setdefault(value, key)
    return inverse


def load_image(filepath):
    """Load a mask as a 2-D grey array or a colour image as an HxWx3 BGR array."""
    try:
        with Image.open(filepath) as img:
            img.load()
            basename = file_basename(filepath)
            if "mask" in basename:
                return np.array(img.convert("L"), dtype=np.uint8)
            if "color" in basename:
                rgb = np.array(img.convert("RGB"), dtype=np.uint8)
                return np.ascontiguousarray(rgb[:, :, ::-1])
    except OSError as exc:
        raise ImageLoadError(filepath, "COULD NOT OPEN FILE") from exc
    raise FileNameError(basename, _NAME_RULE)


def save_image(filepath, image):
    """Write a grey, BGR or BGRA array to filepath, in the format of its extension."""
    array = np.asarray(image)
    if array.dtype != np.uint8:
        array = np.clip(np.rint(array), 0, 255).astype(np.uint8)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    if array.ndim == 3 and array.shape[2] == 3:
        array = array[:, :, ::-1]
    elif array.ndim == 3 and array.shape[2] == 4:
        array = array[:, :, [2, 1, 0, 3]]
    elif array.ndim != 2:
        raise InvalidArgumentError("image", f"cannot save an array of shape {array.shape}")
    Image.fromarray(np.ascontiguousarray(array)).save(filepath)


def bounding_rect(mask):
    """Return the smallest Rect holding every non-zero pixel of mask."""
    array = np.asarray(mask)
    if array.ndim == 3:
        array = array.any(axis=2)
    rows = np.flatnonzero(array.any(axis=1))
    cols = np.flatnonzero(array.any(axis=0))
    if rows.size == 0:
        return Rect()
    return Rect(
        int(cols[0]),
        int(rows[0]),
        int(cols[-1] - cols[0] + 1),
        int(rows[-1] - rows[0] + 1),
    )


def load_label_file(filepath):
    """Read labels, one "object_type x1 y1 x2 y2" line each."""
    try:
        with open(filepath, encoding="utf-8") as handle:
            lines = [line.rstrip("\n") for line in handle]
    except OSError as exc:
        raise ImageLoadError(filepath, "COULD NOT OPEN FILE") from exc

    labels = []
    for line in lines:
        tokens = split_string(line, " ")
        if len(tokens) != 5:
            raise LabelFormatError(
                line, "LABEL FILE LINE DOES NOT MATCH LABEL FORMAT (class_name p1x p1y p2x p2y)"
            )
        try:
            object_type = ObjectType.parse(tokens[0])
            x1, y1, x2, y2 = (int(token) for token in tokens[1:])
        except (InvalidArgumentError, ValueError) as exc:
            raise LabelFormatError(line, f"INVALID LABEL LINE: {exc}") from exc
        labels.append(Label(object_type, Rect.from_corners(x1, y1, x2, y2)))
    return labels


def load_folder_images(folderpath):
    """Load every image of a folder, in sorted file order."""
    return [load_image(path) for path in folder_filenames(folderpath)]


def load_folder_images_split(folderpath):
    """Load a folder's images and return (colour images, masks)."""
    images, masks = [], []
    for path in folder_filenames(folderpath):
        img = load_image(path)
        if img.ndim == 2:
            masks.append(img)
        elif img.ndim == 3 and img.shape[2] == 3:
            images.append(img)
        else:
            raise ImageLoadError(
                path, "IMAGE IS NEITHER A MASK NOR A COLORED IMAGE (TOO MANY CHANNELS)"
            )
    return images, masks


def load_folder_labels(folderpath):
    """Load every label file of a folder, in sorted file order."""
    return [load_label_file(path) for path in folder_filenames(folderpath)]