"""A configurable chain of image filters and the filters it is built from.

Images are numpy arrays: colour images are HxWx3 in BGR order, grey images
are HxW. The colour-space helpers use the 8-bit Lab encoding in which L is
scaled to 0..255 and a, b are offset by 128.
"""

from __future__ import annotations

import itertools

import numpy as np
from scipy import ndimage

from detectkit.errors import InvalidArgumentError

_XYZ_FROM_RGB = np.array(
    [
        [0.412453, 0.357580, 0.180423],
        [0.212671, 0.715160, 0.072169],
        [0.019334, 0.119193, 0.950227],
    ]
)
_RGB_FROM_XYZ = np.linalg.inv(_XYZ_FROM_RGB)
_WHITE = np.array([0.950456, 1.0, 1.088754])
_EPSILON = 0.008856
_KAPPA = 7.787

_SMALL_GAUSSIAN_KERNELS = {
    1: [1.0],
    3: [0.25, 0.5, 0.25],
    5: [0.0625, 0.25, 0.375, 0.25, 0.0625],
    7: [0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125],
}


def _bind(function, args):
    def apply(image):
        return function(image, *args)

    return apply


class ImageFilter:
    """An ordered list of named filters applied one after another."""

    def __init__(self):
        self._pipeline = []

    def add_filter(self, name, function, *args):
        """Append a filter; it is called as function(image, *args)."""
        self._pipeline.append((name, _bind(function, args)))

    def remove_filter(self, name):
        """Remove every filter called name; return whether any was removed."""
        before = len(self._pipeline)
        self._pipeline = [entry for entry in self._pipeline if entry[0] != name]
        return len(self._pipeline) != before

    def apply_filters(self, image):
        """Run the pipeline on a copy of image and return the result."""
        result = np.array(image, copy=True)
        for _, function in self._pipeline:
            result = function(result)
        return result

    def filter_names(self):
        """Return the names of the filters, in the order they are applied."""
        return [name for name, _ in self._pipeline]


def _saturate(values):
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def _like(result, reference):
    if reference.dtype == np.uint8:
        return _saturate(result)
    return result.astype(reference.dtype)


def _require_bgr(image):
    array = np.asarray(image)
    if array.ndim != 3 or array.shape[2] != 3:
        raise InvalidArgumentError("src_img", "image must have three (BGR) channels")
    return array


def _check_kernel(kernel_size, what):
    width, height = kernel_size
    if width <= 0 or height <= 0 or width % 2 == 0 or height % 2 == 0:
        raise InvalidArgumentError(
            "kernel_size", f"{what} kernel dimensions must be positive and odd."
        )
    return width, height


def _gaussian_kernel(ksize, sigma):
    if sigma <= 0 and ksize in _SMALL_GAUSSIAN_KERNELS:
        return np.array(_SMALL_GAUSSIAN_KERNELS[ksize])
    if sigma <= 0:
        sigma = 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8
    offsets = np.arange(ksize) - (ksize - 1) / 2.0
    kernel = np.exp(-(offsets**2) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def _separable(image, kernel_x, kernel_y):
    result = np.asarray(image, dtype=np.float64)
    result = ndimage.correlate1d(result, kernel_y, axis=0, mode="mirror")
    return ndimage.correlate1d(result, kernel_x, axis=1, mode="mirror")


def bgr_to_lab(image):
    """Convert an 8-bit BGR image to 8-bit Lab."""
    array = _require_bgr(image)
    rgb = array[:, :, ::-1].astype(np.float64) / 255.0
    linear = np.where(rgb <= 0.04045, rgb / 12.92, ((rgb + 0.055) / 1.055) ** 2.4)
    xyz = linear @ _XYZ_FROM_RGB.T / _WHITE
    f = np.where(xyz > _EPSILON, np.cbrt(xyz), _KAPPA * xyz + 16.0 / 116.0)
    lightness = 116.0 * f[:, :, 1] - 16.0
    a = 500.0 * (f[:, :, 0] - f[:, :, 1])
    b = 200.0 * (f[:, :, 1] - f[:, :, 2])
    return _saturate(np.stack([lightness * 255.0 / 100.0, a + 128.0, b + 128.0], axis=2))


def lab_to_bgr(image):
    """Convert an 8-bit Lab image back to 8-bit BGR."""
    array = _require_bgr(image).astype(np.float64)
    lightness = array[:, :, 0] * 100.0 / 255.0
    a = array[:, :, 1] - 128.0
    b = array[:, :, 2] - 128.0
    fy = (lightness + 16.0) / 116.0
    f = np.stack([fy + a / 500.0, fy, fy - b / 200.0], axis=2)
    xyz = np.where(f > 6.0 / 29.0, f**3, (f - 16.0 / 116.0) / _KAPPA) * _WHITE
    linear = np.clip(xyz @ _RGB_FROM_XYZ.T, 0.0, 1.0)
    rgb = np.where(
        linear <= 0.0031308, 12.92 * linear, 1.055 * linear ** (1.0 / 2.4) - 0.055
    )
    return _saturate(rgb[:, :, ::-1] * 255.0)


def _on_luminance(image, transform):
    lab = bgr_to_lab(image)
    lab[:, :, 0] = transform(lab[:, :, 0])
    return lab_to_bgr(lab)


def gaussian_blur(image, kernel_size):
    """Blur with a Gaussian whose sigma follows from the (width, height) kernel size."""
    width, height = _check_kernel(kernel_size, "Gaussian")
    array = np.asarray(image)
    result = _separable(array, _gaussian_kernel(width, 0), _gaussian_kernel(height, 0))
    return _like(result, array)


def median_blur(image, kernel_size):
    """Median filter with a square window as wide as the kernel."""
    width, _ = _check_kernel(kernel_size, "Median")
    array = np.asarray(image)
    size = (width, width) + (1,) * (array.ndim - 2)
    return ndimage.median_filter(array, size=size, mode="nearest")


def average_blur(image, kernel_size):
    """Box filter with a (width, height) kernel."""
    width, height = _check_kernel(kernel_size, "Average")
    array = np.asarray(image)
    size = (height, width) + (1,) * (array.ndim - 2)
    result = ndimage.uniform_filter(array.astype(np.float64), size=size, mode="mirror")
    return _like(result, array)


def _bilateral_channel(channel, diameter, sigma_color, sigma_space):
    source = channel.astype(np.float64)
    sigma_color = sigma_color if sigma_color > 0 else 1.0
    sigma_space = sigma_space if sigma_space > 0 else 1.0
    radius = diameter // 2 if diameter > 0 else int(round(sigma_space * 1.5))
    radius = max(radius, 1)
    color_coeff = -0.5 / (sigma_color * sigma_color)
    space_coeff = -0.5 / (sigma_space * sigma_space)

    height, width = source.shape
    padded = np.pad(source, radius, mode="reflect")
    total = np.zeros_like(source)
    weights = np.zeros_like(source)
    for dy, dx in itertools.product(range(-radius, radius + 1), repeat=2):
        distance2 = dy * dy + dx * dx
        if distance2 > radius * radius:
            continue
        neighbour = padded[radius + dy : radius + dy + height, radius + dx : radius + dx + width]
        weight = np.exp(distance2 * space_coeff + (neighbour - source) ** 2 * color_coeff)
        total += weight * neighbour
        weights += weight
    return _saturate(total / weights)


def bilateral_filter(image, diameter, sigma_color, sigma_space):
    """Bilateral filter applied to the luminance of a BGR image."""
    return _on_luminance(
        image, lambda channel: _bilateral_channel(channel, diameter, sigma_color, sigma_space)
    )


def _equalize_hist(channel):
    hist = np.bincount(channel.ravel(), minlength=256)
    nonzero = np.flatnonzero(hist)
    if nonzero.size == 0:
        return channel.copy()
    first = nonzero[0]
    if hist[first] == channel.size:
        return np.full_like(channel, first)
    scale = 255.0 / (channel.size - hist[first])
    lut = _saturate((np.cumsum(hist) - hist[first]) * scale)
    lut[: first + 1] = 0
    return lut[channel]


def global_contrast_equalization(image):
    """Histogram equalization of the luminance of a BGR image."""
    return _on_luminance(image, _equalize_hist)


def _clip_histogram(hist, limit):
    clipped = int(np.maximum(hist - limit, 0).sum())
    hist = np.minimum(hist, limit)
    batch, residual = divmod(clipped, 256)
    hist = hist + batch
    if residual:
        step = max(256 // residual, 1)
        hist[np.arange(0, 256, step)[:residual]] += 1
    return hist


def _clahe(channel, clip_limit, grid):
    if grid <= 0:
        raise InvalidArgumentError("tile_grid_size", "tile grid size must be positive")
    height, width = channel.shape
    pad_h, pad_w = (-height) % grid, (-width) % grid
    source = channel
    if pad_h or pad_w:
        source = np.pad(channel, ((0, pad_h), (0, pad_w)), mode="reflect")
    tile_h, tile_w = source.shape[0] // grid, source.shape[1] // grid
    area = tile_h * tile_w
    limit = max(int(clip_limit * area / 256), 1) if clip_limit > 0 else None

    tiles = source.reshape(grid, tile_h, grid, tile_w).transpose(0, 2, 1, 3)
    tiles = tiles.reshape(grid, grid, area)
    luts = np.empty((grid, grid, 256), dtype=np.float64)
    for ty, tx in itertools.product(range(grid), repeat=2):
        hist = np.bincount(tiles[ty, tx], minlength=256)
        if limit is not None:
            hist = _clip_histogram(hist, limit)
        luts[ty, tx] = _saturate(np.cumsum(hist) * 255.0 / area)

    def neighbours(count, tile):
        pos = np.arange(count) / tile - 0.5
        low = np.floor(pos).astype(int)
        frac = pos - low
        return np.maximum(low, 0), np.minimum(low + 1, grid - 1), frac

    y1, y2, ya = neighbours(height, tile_h)
    x1, x2, xa = neighbours(width, tile_w)
    y1, y2, ya = y1[:, None], y2[:, None], ya[:, None]
    x1, x2, xa = x1[None, :], x2[None, :], xa[None, :]
    top = luts[y1, x1, channel] * (1 - xa) + luts[y1, x2, channel] * xa
    bottom = luts[y2, x1, channel] * (1 - xa) + luts[y2, x2, channel] * xa
    return _saturate(top * (1 - ya) + bottom * ya)


def clahe_contrast_equalization(image, clip_limit, tile_grid_size):
    """Contrast limited adaptive histogram equalization of the luminance."""
    return _on_luminance(image, lambda channel: _clahe(channel, clip_limit, int(tile_grid_size)))


def unsharp_mask(image, sigma, alpha):
    """Sharpen the luminance by adding alpha times its high-pass part."""

    def sharpen(channel):
        ksize = int(sigma * 3) | 1
        kernel = _gaussian_kernel(ksize, sigma)
        blurred = _saturate(_separable(channel, kernel, kernel))
        detail = np.clip(channel.astype(np.int32) - blurred, 0, 255)
        return _saturate(channel + alpha * detail)

    return _on_luminance(image, sharpen)