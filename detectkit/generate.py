"""Build augmented training images and cascade sample lists from a dataset."""

from __future__ import annotations

import argparse
import os

from detectkit.dataset_generator import ImageDatasetGenerator
from detectkit.label import ObjectType
from detectkit.training import negative_samples_file, positive_samples_file
from detectkit.utils import split_model_img_masks

ROTATIONS = 10
LIGHT_VARIATIONS = 6

_TARGETS = (
    (ObjectType.POWER_DRILL, "Power_drill"),
    (ObjectType.MUSTARD_BOTTLE, "Mustard_bottle"),
    (ObjectType.SUGAR_BOX, "Sugar_box"),
)
_TRAINING_ORDER = ("Mustard_bottle", "Power_drill", "Sugar_box")


def run(dataset_root, generated_root, models_root):
    """Generate rotated, relit and grey images, then write the sample lists.

    Returns a mapping of object name to (positive count, negative count).
    """
    generator = ImageDatasetGenerator()

    for object_type, name in _TARGETS:
        models = os.path.join(dataset_root, str(object_type), "models")
        output = os.path.join(generated_root, f"{name}_Generated")
        images, masks = split_model_img_masks(models)
        for image, mask in zip(images, masks):
            generator.generate_rotated_images(
                image, mask, output, ROTATIONS, True, LIGHT_VARIATIONS
            )

    for _, name in _TARGETS:
        source = os.path.join(generated_root, f"{name}_Generated")
        output = os.path.join(generated_root, f"{name}_GeneratedGray")
        images, masks = split_model_img_masks(source)
        for image, mask in zip(images, masks):
            generator.generate_gray_image(image, mask, output)

    gray_folders = {
        name: os.path.join(generated_root, f"{name}_GeneratedGray") for name in _TRAINING_ORDER
    }
    os.makedirs(models_root, exist_ok=True)
    counts = {}
    for name in _TRAINING_ORDER:
        others = [gray_folders[other] for other in _TRAINING_ORDER if other != name]
        positive = positive_samples_file(gray_folders[name], models_root, f"{name}G.txt")
        negative = negative_samples_file(others, models_root, f"{name}_negativeG.txt")
        counts[name] = (positive, negative)
    return counts


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate augmented images and cascade training sample lists."
    )
    parser.add_argument("dataset_root", nargs="?", default="../dataset")
    parser.add_argument("generated_root", nargs="?", default="../Image_generated")
    parser.add_argument("models_root", nargs="?", default="../ViolaJonesModels")
    args = parser.parse_args(argv)

    counts = run(args.dataset_root, args.generated_root, args.models_root)
    for name, (positive, negative) in counts.items():
        print(f"{name} Positive samples: {positive}")
        print(f"{name} Negative samples: {negative}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())