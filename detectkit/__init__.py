"""Datasets, labels, image filters, accuracy metrics and training-sample generation for object detection."""

__version__ = "0.1.0"