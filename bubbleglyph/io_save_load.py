# io_save_load.py
# image -> grid loading, JSON summaries and a text dump for eyeballing grids

import json, os, pathlib as _p

import numpy as np
from PIL import Image

from .binarise import to_grid


def load_gray(path: str) -> np.ndarray:
    return np.array(Image.open(path).convert('L'), dtype=np.uint8)

def load_grid(path: str, threshold: float|None=None) -> np.ndarray:
    """Decode an image file straight to a bool grid (True = ink)."""
    return to_grid(load_gray(path), threshold=threshold)

def save_json(path: str, obj: dict):
    _p.Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)

def ascii_grid(grid: np.ndarray, ink: str='#', paper: str='.') -> str:
    return "\n".join("".join(ink if v else paper for v in row) for row in np.asarray(grid, dtype=bool))
