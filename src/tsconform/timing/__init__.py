from .recorder import TimingRecorder, TimingTotals

__all__ = ["TimingRecorder", "TimingTotals"]
