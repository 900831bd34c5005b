"""Test images, labels and model images of one object type."""

from __future__ import annotations

import os
from itertools import zip_longest

from detectkit.errors import ImageLabelMismatch, ImageMaskMismatch, MissingDirectoryError
from detectkit.label import ObjectType
from detectkit.utils import (
    file_basename,
    folder_filenames,
    load_label_file,
    remove_file_suffix,
    split_model_img_masks,
)

_MALFORMED = "MISSING DIRECTORY, DATASET IS MALFORMED"
_LABEL_MISMATCH = "IMAGE FILENAME AND LABEL FILENAME MISMATCH"


def _find_subfolder(folders, name):
    """Return the first path whose last component is name, or None."""
    return next((path for path in folders if os.path.basename(path) == name), None)


def _raw_name(path, delimiter):
    return remove_file_suffix(file_basename(path), delimiter)


class Dataset:
    """The test items and models of a single object type.

    ``test_items`` maps each test image path to the labels found in it;
    ``models`` holds (colour image path, mask path) pairs.
    """

    def __init__(self, object_type, folderpath=""):
        self.object_type = object_type
        self.folderpath = folderpath
        self.test_items = {}
        self.models = []
        if not folderpath:
            return
        self.load_test_items(folderpath)
        self.load_models(folderpath)

    def load_test_items(self, folderpath):
        """Pair the test images with their label files; return the item count."""
        self.test_items = {}
        folders = folder_filenames(folderpath)
        labels_folder = _find_subfolder(folders, "labels")
        images_folder = _find_subfolder(folders, "test_images")
        if labels_folder is None or images_folder is None:
            raise MissingDirectoryError(folderpath, _MALFORMED)

        label_paths = folder_filenames(labels_folder)
        image_paths = folder_filenames(images_folder)
        for label_path, image_path in zip_longest(label_paths, image_paths):
            if label_path is None:
                break
            if image_path is None or _raw_name(image_path, "-") != _raw_name(label_path, "-"):
                raise ImageLabelMismatch(image_path or "", label_path, _LABEL_MISMATCH)
            self.test_items[image_path] = load_label_file(label_path)
        return len(self.test_items)

    def load_models(self, folderpath):
        """Pair the model images with their masks; return the model count."""
        self.models = []
        models_folder = _find_subfolder(folder_filenames(folderpath), "models")
        if models_folder is None:
            raise MissingDirectoryError(folderpath, _MALFORMED)

        images, masks = split_model_img_masks(models_folder)
        if len(images) != len(masks):
            raise ImageMaskMismatch("", "", "IMAGES AND MASKS ARE NOT THE SAME NUMBER")
        for image_path, mask_path in zip(images, masks):
            if _raw_name(image_path, "_") != _raw_name(mask_path, "_"):
                raise ImageLabelMismatch(image_path, mask_path, _LABEL_MISMATCH)
            self.models.append((image_path, mask_path))
        return len(self.models)

    def __str__(self):
        return (
            f"{self.folderpath} type: {self.object_type} "
            f"#test items: {len(self.test_items)} #models {len(self.models)}"
        )


def format_labels(labels):
    """Render labels one per line, each indented by a tab."""
    return "".join(f"\t{label}\n" for label in labels)


def format_test_item(image_path, labels):
    """Render a test image path together with its labels."""
    return f"image file path: \n\t{image_path}\nbounding boxes:\n{format_labels(labels)}"


def format_model(image_path, mask_path):
    """Render a model's image and mask paths."""
    return f"image file path: \n\t{image_path}\nmask file path:\n\t{mask_path}"


def load_datasets(dataset_path):
    """Load one Dataset per sub-folder, keyed and ordered by object type."""
    datasets = {}
    for path in folder_filenames(dataset_path):
        object_type = ObjectType.parse(os.path.basename(path))
        if object_type not in datasets:
            datasets[object_type] = Dataset(object_type, path)
    return dict(sorted(datasets.items()))