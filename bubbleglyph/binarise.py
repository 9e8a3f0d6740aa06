# binarise.py
# channel averaging, thresholding & padding -> BinaryPixelGrid (True = ink)

import numpy as np
from skimage.filters import threshold_otsu


def average_channels(image: np.ndarray) -> np.ndarray:
    """Collapse (H,W,C) colour/alpha data to a single (H,W) grey plane."""
    img = np.asarray(image)
    if img.ndim == 2:
        return img.astype(np.float64)
    if img.ndim != 3:
        raise ValueError(f"expected a 2-D or 3-D image, got shape {img.shape}")
    return img[..., :3].astype(np.float64).mean(axis=2)

def to_grid(image: np.ndarray, threshold: float|None=None) -> np.ndarray:
    """
    Return a bool grid, True = foreground (dark ink on light paper).
    Bool input is copied through unchanged; otherwise channels are averaged and
    thresholded (Otsu when no threshold is given).
    """
    img = np.asarray(image)
    if img.dtype == bool:
        if img.ndim != 2:
            raise ValueError(f"binary grid must be 2-D, got shape {img.shape}")
        return img.copy()
    gray = average_channels(img)
    if gray.size == 0:
        return np.zeros(gray.shape, dtype=bool)
    if threshold is None:
        lo, hi = gray.min(), gray.max()
        if lo == hi:   # blank or solid page: nothing to separate
            return np.zeros(gray.shape, dtype=bool)
        threshold = threshold_otsu(gray)
    return gray < threshold

def pad_white(mask: np.ndarray, pad: int=1) -> np.ndarray:
    return np.pad(mask, pad, mode='constant', constant_values=False)
