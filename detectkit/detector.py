"""The interface every object detector implements."""

from __future__ import annotations

import abc
import logging

from detectkit.utils import load_image

_log = logging.getLogger(__name__)


class ObjectDetector(abc.ABC):
    """Finds objects in images; subclasses implement detect_objects."""

    def __init__(self):
        self.method_name = ""
        self.model_filter_name = ""
        self.test_filter_name = ""

    @abc.abstractmethod
    def detect_objects(self, image):
        """Return the labels of the objects found in a scene image."""

    def detect_object_whole_dataset(self, dataset):
        """Run detection on every test image; return a map of image path to labels."""
        predicted = {}
        for image_path in dataset.test_items:
            _log.info("image %s", image_path)
            predicted[image_path] = list(self.detect_objects(load_image(image_path)))
        return predicted