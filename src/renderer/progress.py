# renderer/progress.py
from typing import List, Sequence
from tqdm import tqdm

class RenderProgress:
    """
    Observer for pixel completion. The renderer calls start() once, advance()
    for each finished pixel from the collecting thread, and close() at the end
    whether or not the render succeeded. The default does nothing.
    """
    def start(self, stripe_sizes: Sequence[int]):
        pass

    def advance(self, stripe: int):
        pass

    def close(self):
        pass

class TqdmProgress(RenderProgress):
    """
    One tqdm bar per stripe plus an overall bar underneath.
    """
    def __init__(self, show_stripes: bool = True):
        self.show_stripes = show_stripes
        self.stripe_bars: List[tqdm] = []
        self.total_bar = None

    def start(self, stripe_sizes: Sequence[int]):
        if self.show_stripes:
            self.stripe_bars = [
                tqdm(total=size, desc=f"stripe {i}", position=i, leave=False, unit="px")
                for i, size in enumerate(stripe_sizes)
            ]
        self.total_bar = tqdm(total=sum(stripe_sizes), desc="total",
                              position=len(self.stripe_bars), unit="px")

    def advance(self, stripe: int):
        if self.stripe_bars:
            self.stripe_bars[stripe].update(1)
        self.total_bar.update(1)

    def close(self):
        for bar in self.stripe_bars:
            bar.close()
        if self.total_bar is not None:
            self.total_bar.close()
        self.stripe_bars = []
        self.total_bar = None
