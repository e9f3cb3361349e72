import logging
import os
from functools import partial
from multiprocessing import Pool
from typing import Tuple

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from spheretrace.app import App, canvas_columns
from spheretrace.common import Scene, Settings
from spheretrace.tracer import get_pixel_color

logger = logging.getLogger(__name__)


def split_rows(height: int, bands: int) -> list:
    """Split buffer row indices into at most ``bands`` contiguous, disjoint runs."""
    return [band for band in np.array_split(np.arange(height), min(bands, height)) if len(band)]


def render_band(
    rows: NDArray[np.int64],
    scene: Scene,
    settings: Settings,
) -> Tuple[int, NDArray[np.uint8]]:
    band = np.empty((len(rows), settings.width, 3), dtype=np.uint8)

    for i, row in enumerate(rows):
        y = settings.height // 2 - int(row)
        for j, x in enumerate(canvas_columns(settings.width)):
            band[i, j, :] = get_pixel_color(scene, settings, x, y)

    return int(rows[0]), band


class ParallelApp(App):
    def render(self):
        workers = self.settings.workers or os.cpu_count()
        bands = split_rows(self.settings.height, self.settings.bands)
        logger.info("rendering %d row bands on %d workers", len(bands), workers)

        with Pool(workers) as pool:
            results = pool.imap_unordered(
                partial(render_band, scene=self.scene, settings=self.settings),
                bands,
            )
            for first_row, band in tqdm(results, total=len(bands), disable=not self.settings.progress):
                self.image[first_row:first_row + band.shape[0]] = band
