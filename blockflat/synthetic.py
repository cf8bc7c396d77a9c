"""
Generate synthetic RGBA rasters for experiments and tests.
"""

import random

import cv2
import numpy as np

from blockflat.raster import Raster


def generate_synthetic_array(width=256, height=256, seed=None):
    rng = random.Random(seed)
    noise_rng = np.random.default_rng(seed)

    bg = [rng.randint(0, 255) for _ in range(3)] + [255]
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[:] = bg

    # Random blocks: flat, gradient or noise
    for _ in range(rng.randint(5, 10)):
        w, h = rng.randint(1, max(1, width // 2)), rng.randint(1, max(1, height // 2))
        x = rng.randint(0, width - w)
        y = rng.randint(0, height - h)
        color = [rng.randint(0, 255) for _ in range(3)] + [rng.choice([128, 255])]
        type_ = rng.choice(["flat", "gradient", "noise"])
        if type_ == "flat":
            cv2.rectangle(img, (x, y), (x + w - 1, y + h - 1), color, -1)
        elif type_ == "gradient":
            ramp = np.linspace(0, 1, w, dtype=np.float32)[None, :, None]
            block = (ramp * np.array(color, dtype=np.float32)).astype(np.uint8)
            img[y:y + h, x:x + w] = np.broadcast_to(block, (h, w, 4))
        else:
            img[y:y + h, x:x + w] = noise_rng.integers(0, 256, (h, w, 4), dtype=np.uint8)
    return img


def generate_synthetic_raster(width=256, height=256, seed=None):
    return Raster.from_array(generate_synthetic_array(width, height, seed))
