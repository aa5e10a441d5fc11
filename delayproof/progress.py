from typing import Callable, Optional
from delayproof.params import Parameters

ProgressCallback = Callable[[int], None]


class ProgressReporter:
    # first and last index, plus any index more than `interval` past the last report
    def __init__(
        self,
        callback: Optional[ProgressCallback],
        total: int,
        interval: Optional[int] = None,
    ):
        self.callback = callback
        self.total = total
        self.interval = Parameters.progress_interval if interval is None else interval
        self.last = -1

    def __call__(self, i: int):
        if self.callback is None:
            return
        if i == 0 or i == self.total - 1 or i - self.last > self.interval:
            self.last = i
            self.callback(i)
