from tqdm import tqdm

from spheretrace.app import App, canvas_columns, canvas_rows
from spheretrace.tracer import get_pixel_color


class CpuApp(App):
    def render(self):
        for y in tqdm(canvas_rows(self.settings.height), disable=not self.settings.progress):
            for x in canvas_columns(self.settings.width):
                self.put_pixel(x, y, get_pixel_color(self.scene, self.settings, x, y))
