import os

import numpy as np
import pytest
from PIL import Image

from detectkit.errors import InputDirectoryError
from detectkit.generate import LIGHT_VARIATIONS, ROTATIONS, main, run

NAMES = {
    "035_power_drill": "Power_drill",
    "006_mustard_bottle": "Mustard_bottle",
    "004_sugar_box": "Sugar_box",
}
PER_MODEL = ROTATIONS * LIGHT_VARIATIONS


def _make_dataset(root):
    for folder in NAMES:
        models = root / folder / "models"
        models.mkdir(parents=True)
        Image.fromarray(np.full((8, 8, 3), 100, dtype=np.uint8)).save(models / "000_color.png")
        Image.fromarray(np.full((8, 8), 255, dtype=np.uint8)).save(models / "000_mask.png")


@pytest.fixture(scope="module")
def generated(tmp_path_factory):
    base = tmp_path_factory.mktemp("gen")
    dataset = base / "dataset"
    _make_dataset(dataset)
    counts = run(str(dataset), str(base / "generated"), str(base / "models"))
    return base, counts


def test_counts_in_training_order(generated):
    _, counts = generated
    assert list(counts) == ["Mustard_bottle", "Power_drill", "Sugar_box"]
    for positive, negative in counts.values():
        assert positive == PER_MODEL
        assert negative == 2 * PER_MODEL


def test_generated_folder_holds_only_light_variations(generated):
    base, _ = generated
    folder = base / "generated" / "Power_drill_Generated"
    names = os.listdir(folder)
    assert len(names) == 2 * PER_MODEL
    assert all("_light_" in name for name in names)


def test_gray_folder_matches_generated_folder(generated):
    base, _ = generated
    for name in NAMES.values():
        gray = os.listdir(base / "generated" / f"{name}_GeneratedGray")
        assert len(gray) == 2 * PER_MODEL
        assert all("_gray_" in entry for entry in gray)


def test_positive_file_lists_gray_images(generated):
    base, _ = generated
    gray_folder = os.path.join(str(base / "generated"), "Mustard_bottle_GeneratedGray")
    lines = (base / "models" / "Mustard_bottleG.txt").read_text().splitlines()
    assert len(lines) == PER_MODEL
    for line in lines:
        path, *numbers = line.split(" ")
        assert os.path.dirname(path) == gray_folder
        assert os.path.exists(path)
        assert len(numbers) == 4
        assert int(numbers[2]) > 0 and int(numbers[3]) > 0


def test_negative_file_lists_other_objects(generated):
    base, _ = generated
    lines = (base / "models" / "Sugar_box_negativeG.txt").read_text().splitlines()
    folders = {os.path.basename(os.path.dirname(line)) for line in lines}
    assert folders == {"Mustard_bottle_GeneratedGray", "Power_drill_GeneratedGray"}
    assert len(lines) == 2 * PER_MODEL


def test_main_prints_counts(tmp_path, capsys):
    dataset = tmp_path / "dataset"
    _make_dataset(dataset)
    code = main([str(dataset), str(tmp_path / "gen"), str(tmp_path / "out")])
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert f"Sugar_box Positive samples: {PER_MODEL}" in out
    assert f"Mustard_bottle Negative samples: {2 * PER_MODEL}" in out


def test_missing_dataset(tmp_path):
    with pytest.raises(InputDirectoryError):
        run(str(tmp_path / "nope"), str(tmp_path / "gen"), str(tmp_path / "out"))