# detectkit

detectkit helps you evaluate object detectors on small labelled image
datasets and prepare sample lists for training cascade classifiers.
Images are numpy arrays. Colour images are `H x W x 3` in BGR order, and
masks and grey images are `H x W`.

## What it contains

- `detectkit.label` provides three types:
  - `ObjectType` is an `IntEnum` with `SUGAR_BOX`, `MUSTARD_BOTTLE` and `POWER_DRILL`. `ObjectType.parse("004_sugar_box")` returns the matching member, and `str()` gives the name back.
  - `Rect` is a frozen rectangle with `x`, `y`, `width` and `height`. It has `from_corners`, `area`, `is_empty` and `intersect`, and `a & b` also gives the intersection.
  - `Label` pairs an `object_type` with a `bounding_box`.
- `detectkit.errors` defines the exceptions the package raises. They all derive from `DetectionError`, which is a `RuntimeError`. Examples are `ImageLoadError`, `FileNameError`, `LabelFormatError`, `EmptyFolderError`, `MissingDirectoryError`, `ImageLabelMismatch` and `ImageMaskMismatch`.
- `detectkit.utils` holds helpers for files, images and labels:
  - file names: `file_basename`, `remove_file_suffix`, `split_string`
  - directories: `folder_filenames` returns sorted paths and raises on an empty folder. `split_model_img_masks` sorts a folder into `*color*` images and `*mask*` masks.
  - images: `load_image` loads masks as grey and colour images as BGR. `save_image` writes an array to a file. `bounding_rect` gives the box around a mask's non-zero pixels.
  - labels: `load_label_file` reads one `class_name x1 y1 x2 y2` line per label.
  - whole folders: `load_folder_images`, `load_folder_images_split`, `load_folder_labels`
  - mappings: `invert_mapping`
- `detectkit.dataset` reads the data of one object:
  - `Dataset(object_type, folderpath)` reads an object folder that holds `labels/`, `models/` and `test_images/`.
  - `test_items` maps each test image path to its labels.
  - `models` is a list of `(image path, mask path)` pairs.
  - `load_datasets(root)` returns one `Dataset` per object sub-folder, ordered by object type.
  - `format_labels`, `format_test_item` and `format_model` render the contents as text.
- `detectkit.accuracy` compares predictions with the ground truth:
  - `calculate_iou(predicted, real)` gives the intersection over union of two labels.
  - `calculate_mean_iou` sums the IoU of every real/predicted pair of the given type, then divides by the number of real labels.
  - `calculate_dataset_accuracy` counts pairs whose IoU is at least `threshold` (default 0.5) per real label.
  - Both return `nan` when there are no real labels of that type.
- `detectkit.logger` records results:
  - `log_detection` appends a CSV row: object type, method, model filter, scene filter, accuracy, mean IoU.
  - `print_labels_img` saves each test image as PNG, with real boxes in green and predicted boxes in red.
- `detectkit.image_filter` provides filters and a way to chain them:
  - An `ImageFilter` pipeline runs named filters in order. It has `add_filter`, `remove_filter`, `apply_filters` and `filter_names`.
  - The plain filters are `gaussian_blur`, `median_blur` and `average_blur`. They take a `(width, height)` kernel that must be positive and odd.
  - The luminance filters are `bilateral_filter`, `global_contrast_equalization`, `clahe_contrast_equalization` and `unsharp_mask`. They work on the L channel in 8-bit Lab space, using `bgr_to_lab` and `lab_to_bgr`.
- `detectkit.detector` defines `ObjectDetector`, an abstract base class:
  - Subclasses implement `detect_objects(image)` and return a list of labels.
  - `detect_object_whole_dataset(dataset)` runs detection over every test image and returns a map from image path to labels.
  - The attributes `method_name`, `model_filter_name` and `test_filter_name` name the method and the filters it uses.
- `detectkit.dataset_generator` provides `ImageDatasetGenerator`, which writes augmented copies of a model image and its mask:
  - `generate_rotated_images` writes rotations spread evenly over a full turn, on a white background.
  - `generate_light_variations` writes copies with the brightness shifted across a range of 80 levels. It needs at least two variations and then deletes its input files.
  - `generate_gray_image` writes a greyscale copy.
- `detectkit.training` writes sample lists for cascade training:
  - `positive_samples_file` writes `image x y width height` lines, taking each box from the image's mask.
  - `negative_samples_file` writes the colour image paths of the other folders.
- `detectkit.generate` contains `run` and `main`, which drive the whole generation pipeline.

## Installation

```
pip install detectkit
```

## Dataset layout

```
dataset/
  004_sugar_box/
    labels/        # <name>-box.txt, one "class_name x1 y1 x2 y2" per line
    models/        # <name>_color.png and <name>_mask.png pairs
    test_images/   # <name>-color.jpg
  006_mustard_bottle/
  035_power_drill/
```

Label files and test images are paired in sorted order. They must share
their name up to the last `-`. Model images and masks must share their
name up to the last `_`.

## Usage

```python
from detectkit.dataset import load_datasets
from detectkit.accuracy import calculate_dataset_accuracy, calculate_mean_iou

datasets = load_datasets("dataset")
for object_type, dataset in datasets.items():
    print(dataset)
    predicted = my_detector.detect_object_whole_dataset(dataset)
    print(calculate_dataset_accuracy(object_type, dataset.test_items, predicted, 0.5))
    print(calculate_mean_iou(object_type, dataset.test_items, predicted))
```

Here `my_detector` is an instance of your own `ObjectDetector` subclass.

A filter pipeline:

```python
from detectkit.image_filter import (
    ImageFilter,
    bilateral_filter,
    clahe_contrast_equalization,
    unsharp_mask,
)
from detectkit.utils import load_image

pipeline = ImageFilter()
pipeline.add_filter("Bilateral", bilateral_filter, 5, 75, 75)
pipeline.add_filter("CLAHE", clahe_contrast_equalization, 3, 8)
pipeline.add_filter("Unsharp", unsharp_mask, 1.0, 1.5)

filtered = pipeline.apply_filters(load_image("scene-color.jpg"))
print(pipeline.filter_names())
```

The overlap of two boxes:

```python
from detectkit.label import Label, ObjectType, Rect
from detectkit.accuracy import calculate_iou

a = Label(ObjectType.SUGAR_BOX, Rect.from_corners(0, 0, 10, 10))
b = Label(ObjectType.SUGAR_BOX, Rect.from_corners(5, 5, 15, 15))
print(calculate_iou(a, b))
```

## Generating training samples

```
detectkit-generate [dataset_root] [generated_root] [models_root]
```

The three arguments default to `../dataset`, `../Image_generated` and
`../ViolaJonesModels`. The command runs these steps:

1. For each object, it writes 10 rotations of every model image into
   `<generated_root>/<Name>_Generated`. Each rotation is written in 6
   brightness variations, and the plain rotations themselves are removed.
2. It writes greyscale copies into `<Name>_GeneratedGray`.
3. For each object, it writes `<Name>G.txt` (positive samples) and
   `<Name>_negativeG.txt` (negative samples) into `models_root`.
4. It prints the sample counts.

The same pipeline is available from Python as
`detectkit.generate.run(dataset_root, generated_root, models_root)`. It
returns a map from object name to `(positive, negative)` counts.

## What detectkit does not do

- It contains no working detector. `ObjectDetector` is only a base class, and there is no feature-matching detector and no cascade detector.
- There is no command that runs detectors over a dataset and fills the CSV log. You call `log_detection` and `print_labels_img` yourself.
- It does not train cascade classifiers. It only writes the sample lists that such training takes as input.

## Running the tests

```
pip install "detectkit[test]"
pytest
```